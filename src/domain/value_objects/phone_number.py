"""Phone number value object used for SMS alert recipients."""

import re
from dataclasses import dataclass

_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{7,14}$")
_SEPARATORS = re.compile(r"[\s\-\.\(\)]")


@dataclass(frozen=True)
class PhoneNumber:
    """International phone number.

    Spaces, dashes, dots and parentheses are stripped; the remaining digits
    (with optional leading '+') must be 8-15 digits not starting with 0.

    Attributes:
        value: Digits with the leading '+' preserved when supplied
    """

    value: str

    def __post_init__(self):
        """Normalize and validate the number."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Phone number cannot be empty")

        cleaned = _SEPARATORS.sub("", self.value.strip())
        if not _PHONE_PATTERN.match(cleaned):
            raise ValueError(f"Invalid phone number format: {self.value}")
        object.__setattr__(self, "value", cleaned)

    @property
    def digits(self) -> str:
        return self.value.lstrip("+")

    @property
    def normalized(self) -> str:
        """E.164 form with a leading '+'."""
        return f"+{self.digits}"

    @property
    def country_code_hint(self) -> str | None:
        """Digits ahead of a ten-digit national number, if any."""
        digits = self.digits
        if len(digits) <= 10:
            return None
        return digits[: len(digits) - 10]

    @property
    def is_sms_capable(self) -> bool:
        # Short national numbers cannot be routed by the SMS gateway
        return len(self.digits) >= 10

    @property
    def masked(self) -> str:
        digits = self.digits
        return "*" * (len(digits) - 4) + digits[-4:]

    def __str__(self) -> str:
        return self.normalized
