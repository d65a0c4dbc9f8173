"""Error taxonomy for the simulation and valuation engine.

Undefined results (zero revenue ratios, IRR without a sign change, MIRR with
no outflows) are not exceptional for callers of the public API: they come back
as a ``MetricResult`` carrying a ``MetricStatus``. The exceptions below are
raised by the strict solvers and by input validation.
"""
from enum import Enum


class MetricStatus(str, Enum):
    OK = "ok"
    DEGENERATE_INPUT = "degenerate_input"
    NON_CONVERGENCE = "non_convergence"
    NOT_REACHED = "not_reached"


class GymModelError(Exception):
    """Base class for engine errors"""
    code = "GYM_MODEL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class DegenerateInputError(GymModelError):
    """A ratio or root is undefined for the given inputs"""
    code = "DEGENERATE_INPUT"


class NonConvergenceError(GymModelError):
    """Root finding stopped without meeting tolerance"""
    code = "NON_CONVERGENCE"

    def __init__(self, message: str, iterations: int):
        self.iterations = iterations
        super().__init__(message)


class AssumptionsError(GymModelError, ValueError):
    """Assumption set failed validation; ``problems`` lists every failure"""
    code = "INVALID_ASSUMPTIONS"

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))
