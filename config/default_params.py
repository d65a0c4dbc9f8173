"""Form defaults and input ranges for the gym financial model UI."""

# field: (label, min, max, step); defaults come from gym_engine.models.Assumptions
GROWTH_FIELDS = {
    'monthly_target': ("Monthly Target Sales", 0, 1000, 1),
    'max_capacity': ("Maximum Capacity", 1, 20000, 10),
    'retention_rate': ("Retention Rate (%)", 0.0, 100.0, 1.0),
}

PRICING_FIELDS = {
    'subscription_price': ("Subscription Price (INR)", 0.0, 500000.0, 1000.0),
    'annual_price_increase': ("Annual Price Increase (%)", 0.0, 100.0, 0.5),
    'pt_penetration': ("PT Penetration (%)", 0.0, 100.0, 0.5),
    'pt_price': ("PT Subscription Price (INR)", 0.0, 500000.0, 1000.0),
    'pt_share': ("PT Revenue Share Kept (%)", 0.0, 100.0, 1.0),
}

COST_FIELDS = {
    'annual_expense_increase': ("Annual Expense Increase (%)", 0.0, 100.0, 0.5),
    'tax_rate': ("Tax Rate (%)", 0.0, 100.0, 0.5),
}

APPRAISAL_FIELDS = {
    'project_life': ("Project Life (Years)", 1, 30, 1),
    'discount_rate': ("Discount Rate (%)", 0.0, 100.0, 0.5),
    'reinvestment_rate': ("Reinvestment Rate (%)", 0.0, 100.0, 0.5),
    'financing_rate': ("Financing Rate (%)", 0.0, 100.0, 0.5),
    'salvage_rate': ("Salvage Value (% of capex)", 0.0, 100.0, 1.0),
}

LOAN_FIELDS = {
    'loan_principal': ("Loan Principal (INR)", 0.0, 1_000_000_000.0, 100000.0),
    'loan_tenure_years': ("Loan Tenure (Years)", 1, 30, 1),
    'loan_annual_rate': ("Loan Interest Rate (%)", 0.0, 100.0, 0.25),
}

# Loan defaults used when the user switches the loan on
LOAN_DEFAULTS = {
    'loan_principal': 20_000_000.0,
    'loan_tenure_years': 5,
    'loan_annual_rate': 12.0,
}

# Quick-start scenarios layered over the base assumptions
SCENARIO_PRESETS = {
    'Base': {},
    'Conservative': {
        'monthly_target': 60,
        'retention_rate': 30.0,
        'annual_price_increase': 5.0,
        'pt_penetration': 5.0,
    },
    'Aggressive': {
        'monthly_target': 100,
        'retention_rate': 50.0,
        'pt_penetration': 10.0,
    },
}
