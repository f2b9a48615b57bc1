"""Exception types shared across the package.

Usage:
    from led_portfolio.errors import RecordNotFoundError, ValidationFailed
"""

from pydantic import ValidationError


class LedPortfolioError(Exception):
    """Base class for all errors raised by led-portfolio."""

    pass


class ProfileNotFoundError(LedPortfolioError):
    """Raised when no store profile is configured or the name is unknown."""

    pass


class RecordNotFoundError(LedPortfolioError):
    """Raised when an admin mutation targets a record that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found: {record_id}")


class ValidationFailed(LedPortfolioError):
    """Raised when admin input fails validation.

    ``details`` maps a dotted field path to its list of messages, e.g.
    ``{"title": ["String should have at least 3 characters"]}``.
    """

    def __init__(self, kind: str, details: dict[str, list[str]]) -> None:
        self.kind = kind
        self.details = details
        super().__init__(f"Invalid {kind} data: {', '.join(sorted(details))}")

    @classmethod
    def from_pydantic(cls, kind: str, error: ValidationError) -> "ValidationFailed":
        """Flatten a pydantic ``ValidationError`` into field -> messages."""
        details: dict[str, list[str]] = {}
        for item in error.errors():
            path = ".".join(str(part) for part in item["loc"]) or "__root__"
            details.setdefault(path, []).append(item["msg"])
        return cls(kind, details)
