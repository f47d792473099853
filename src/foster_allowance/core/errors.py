from __future__ import annotations


class ConfigurationError(LookupError):
    """Raised when rate policy is missing or unusable.

    Attributes:
        age_group: Age group of the failed lookup (None for settings errors)
        is_special_care: Special-care flag of the failed lookup
    """

    def __init__(
        self,
        message: str,
        *,
        age_group: str | None = None,
        is_special_care: bool | None = None,
    ) -> None:
        self.age_group = age_group
        self.is_special_care = is_special_care
        super().__init__(message)

    def __str__(self) -> str:
        # LookupError/KeyError quote their args; keep the plain message
        return str(self.args[0]) if self.args else ""


class InvalidIntervalError(ValueError):
    """Raised for a week interval that is inverted or outside weeks 1..52."""

    def __init__(self, start: object, end: object, reason: str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid week interval [{start}, {end}]: {reason}")
