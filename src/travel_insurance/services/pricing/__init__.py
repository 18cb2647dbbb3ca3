# PolicyCore - Policy Decision Management System
"""Premium calculation services.

This package provides:
- Shared calculation components (age, duration, optional risks, bundles)
- Coverage-level and country-default pricing strategies
- Payout-limit correction
- Calculation step tracing for display
"""

from .calculation_steps import CalculationStepsBuilder
from .components import SharedCalculationComponents
from .payout_limit import PayoutLimitCorrector
from .strategies import (
    CountryDefaultStrategy,
    CoverageLevelStrategy,
    PremiumCalculationService,
    PremiumCalculationStrategy,
    select_calculation_mode,
)

__all__ = [
    "CalculationStepsBuilder",
    "CountryDefaultStrategy",
    "CoverageLevelStrategy",
    "PayoutLimitCorrector",
    "PremiumCalculationService",
    "PremiumCalculationStrategy",
    "SharedCalculationComponents",
    "select_calculation_mode",
]
