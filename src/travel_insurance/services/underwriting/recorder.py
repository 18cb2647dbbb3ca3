"""Persistence port for underwriting decisions."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from beartype import beartype
from pydantic import Field

from ...models.base import BaseModelConfig
from ...models.quote import PremiumRequest
from ...models.underwriting import UnderwritingResult


@beartype
class DecisionRecord(BaseModelConfig):
    """Underwriting decision together with the application it was made for."""

    request: PremiumRequest
    result: UnderwritingResult
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DecisionRecorder(ABC):
    """Stores underwriting decisions for audit."""

    @abstractmethod
    def record(self, request: PremiumRequest, result: UnderwritingResult) -> None: ...


@beartype
class InMemoryDecisionRecorder(DecisionRecorder):
    """Keeps decisions in a list; used by tests and the demo script."""

    def __init__(self) -> None:
        self._records: list[DecisionRecord] = []
        self._lock = threading.Lock()

    def record(self, request: PremiumRequest, result: UnderwritingResult) -> None:
        with self._lock:
            self._records.append(DecisionRecord(request=request, result=result))

    @property
    def records(self) -> list[DecisionRecord]:
        with self._lock:
            return list(self._records)
