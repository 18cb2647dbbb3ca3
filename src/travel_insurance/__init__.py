# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Travel insurance premium determination engine."""

from .models.quote import CalculationMode, PremiumRequest
from .schemas.premium import PremiumResponse, ResponseStatus
from .services.quote_orchestrator import PremiumQuoteOrchestrator
from .services.reference_data import (
    InMemoryReferenceDataRepository,
    ReferenceDataRepository,
)
from .services.reference_seed import build_default_repository

__version__ = "1.0.0"

__all__ = [
    "CalculationMode",
    "InMemoryReferenceDataRepository",
    "PremiumQuoteOrchestrator",
    "PremiumRequest",
    "PremiumResponse",
    "ReferenceDataRepository",
    "ResponseStatus",
    "build_default_repository",
]
