"""Reducing-balance depreciation for the capital asset portfolio"""
from dataclasses import dataclass
from typing import Iterable

from .models import InvestmentItem


@dataclass
class AssetDepreciation:
    id: str
    name: str
    cost: float
    rate: float
    yearly_depreciation: list[float]
    closing_book_value: list[float]

    @property
    def total_depreciation(self) -> float:
        return sum(self.yearly_depreciation)


def book_value(item: InvestmentItem, years: int) -> float:
    """Book value after ``years`` full periods"""
    factor = max(0.0, 1.0 - item.rate / 100.0)
    return item.cost * factor ** years


def asset_depreciation_for_year(item: InvestmentItem, year: int) -> float:
    """Charge during zero-indexed ``year``: opening book value times the rate"""
    return book_value(item, year) * (item.rate / 100.0)


def depreciation_for_year(investments: Iterable[InvestmentItem], year: int) -> float:
    """Total annual depreciation for all assets in zero-indexed ``year``"""
    return sum(asset_depreciation_for_year(item, year) for item in investments)


def monthly_depreciation(investments: Iterable[InvestmentItem], year: int) -> float:
    """Annual charge spread evenly over the 12 months of the year"""
    return depreciation_for_year(investments, year) / 12.0


def depreciation_schedule(investments: Iterable[InvestmentItem], project_life_years: int) -> list[AssetDepreciation]:
    """
    Per-asset depreciation table over the project life.

    Args:
        investments: Assets acquired at time zero
        project_life_years: Number of years to tabulate

    Returns:
        One AssetDepreciation per asset, in input order, with the charge and
        closing book value for each year
    """
    schedule = []
    for item in investments:
        charges = [asset_depreciation_for_year(item, y) for y in range(project_life_years)]
        closing = [book_value(item, y + 1) for y in range(project_life_years)]
        schedule.append(AssetDepreciation(
            id=item.id,
            name=item.name,
            cost=item.cost,
            rate=item.rate,
            yearly_depreciation=charges,
            closing_book_value=closing,
        ))
    return schedule
