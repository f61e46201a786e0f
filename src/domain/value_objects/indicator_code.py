"""Indicator code value object."""

import re
from dataclasses import dataclass

INDICATOR_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]{2,49}$")

SYSTEM_CODE_PREFIXES = ("SYS_", "SYSTEM_")
USER_CODE_PREFIXES = ("USER_", "CUSTOM_")


@dataclass(frozen=True)
class IndicatorCode:
    """Unique, human-readable indicator identifier.

    Codes are trimmed, must start with an upper-case letter and be 3-50
    characters of A-Z, 0-9 and underscore. Lower-case input is rejected
    rather than silently upper-cased.

    Attributes:
        value: Normalized code
    """

    value: str

    def __post_init__(self):
        """Normalize and validate the code."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Indicator code cannot be empty")

        normalized = self.value.strip()
        if not INDICATOR_CODE_PATTERN.match(normalized):
            raise ValueError(
                f"Invalid indicator code: {self.value}. Codes must start with an upper-case letter "
                "and contain 3-50 characters (A-Z, 0-9, underscore)"
            )
        object.__setattr__(self, "value", normalized)

    @property
    def is_system_code(self) -> bool:
        return self.value.startswith(SYSTEM_CODE_PREFIXES)

    @property
    def is_user_code(self) -> bool:
        return self.value.startswith(USER_CODE_PREFIXES)

    def __str__(self) -> str:
        return self.value
