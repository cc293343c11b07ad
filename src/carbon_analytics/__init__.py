"""Carbon Analytics.

Net carbon liability and ESG composite scoring for financial holdings,
with a batch runner and an MCP tool server on top of a pure scoring core.
"""

__version__ = "0.1.0"

from .core.exceptions import (
    CalculationError,
    CarbonAnalyticsError,
    InvalidDivisor,
    MalformedRecord,
    SelfCheckFailure,
)
from .core.models import CarbonInputs, EsgInputs
from .core.scoring import (
    CarbonScoreCalculator,
    EsgCompositeScorer,
    calculate_carbon_score,
    calculate_esg_score,
    run_self_check,
)
