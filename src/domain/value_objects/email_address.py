"""Email address value object."""

import re
from dataclasses import dataclass

MAX_EMAIL_LENGTH = 254

_EMAIL_PATTERN = re.compile(
    r"^[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$"
)


@dataclass(frozen=True)
class EmailAddress:
    """Lower-cased, syntactically valid email address.

    Attributes:
        value: Normalized address
    """

    value: str

    def __post_init__(self):
        """Normalize and validate the address."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Email address cannot be empty")

        normalized = self.value.strip().lower()
        if len(normalized) > MAX_EMAIL_LENGTH:
            raise ValueError(
                f"Email address exceeds maximum length of {MAX_EMAIL_LENGTH} characters"
            )
        if not _EMAIL_PATTERN.match(normalized):
            raise ValueError(f"Invalid email address format: {self.value}")
        object.__setattr__(self, "value", normalized)

    @property
    def local_part(self) -> str:
        return self.value.rsplit("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]

    @property
    def masked(self) -> str:
        local = self.local_part
        return f"{local[0]}***@{self.domain}"

    def __str__(self) -> str:
        return self.value
