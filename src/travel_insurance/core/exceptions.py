"""Fatal error types raised by the premium determination engine.

Validation problems and underwriting declines are ordinary results and are
never raised. The exceptions below signal that the engine was handed data
it cannot price at all, usually because reference data disagrees with what
validation already accepted.
"""

from datetime import date

from beartype import beartype


@beartype
class PremiumEngineError(Exception):
    """Base class for unrecoverable request failures."""


@beartype
class ConfigurationError(PremiumEngineError):
    """Reference data or settings are inconsistent with the request."""


@beartype
class ReferenceDataNotFoundError(PremiumEngineError):
    """A reference record expected to exist is missing or inactive."""

    def __init__(self, entity: str, code: str, as_of: date) -> None:
        """Initialize with the entity kind, its code and the lookup date."""
        self.entity = entity
        self.code = code
        self.as_of = as_of
        super().__init__(f"{entity} not found: {code} (as of {as_of.isoformat()})")
