# PolicyCore - Policy Decision Management System
"""Underwriting rule engine and service."""

from .engine import UnderwritingEngine, build_default_rules
from .parameters import RuleParameterService
from .recorder import DecisionRecord, DecisionRecorder, InMemoryDecisionRecorder
from .rules import (
    AdditionalRisksRule,
    AgeRule,
    CountryRiskRule,
    MedicalCoverageRule,
    TripDurationRule,
    UnderwritingRule,
)
from .service import UnderwritingService

__all__ = [
    "AdditionalRisksRule",
    "AgeRule",
    "CountryRiskRule",
    "DecisionRecord",
    "DecisionRecorder",
    "InMemoryDecisionRecorder",
    "MedicalCoverageRule",
    "RuleParameterService",
    "TripDurationRule",
    "UnderwritingEngine",
    "UnderwritingRule",
    "UnderwritingService",
    "build_default_rules",
]
