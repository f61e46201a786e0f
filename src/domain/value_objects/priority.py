"""Priority value object.

An indicator's priority drives execution ordering, escalation timing,
alert cooldown and whether SMS notifications are sent.
"""

from enum import Enum


class Priority(Enum):
    """Indicator priority level.

    Each level is a single shared instance carrying fixed attributes.
    Lower numeric_value means higher urgency.

    Attributes:
        label: Stored string form ("high", "medium", "low")
        numeric_value: Rank used for ordering (1 = most urgent)
        escalation_timeout_minutes: Minutes before an unacknowledged alert escalates
        cooldown_minutes: Minimum minutes between repeated alerts
        requires_sms: Whether alerts at this level are also sent by SMS
    """

    HIGH = ("high", 1, 15, 30, True)
    MEDIUM = ("medium", 2, 60, 60, False)
    LOW = ("low", 3, 240, 120, False)

    def __init__(
        self,
        label: str,
        numeric_value: int,
        escalation_timeout_minutes: int,
        cooldown_minutes: int,
        requires_sms: bool,
    ):
        self.label = label
        self.numeric_value = numeric_value
        self.escalation_timeout_minutes = escalation_timeout_minutes
        self.cooldown_minutes = cooldown_minutes
        self.requires_sms = requires_sms

    @classmethod
    def from_string(cls, value: str | None) -> "Priority":
        """Parse a stored priority string.

        Args:
            value: Priority string, case-insensitive ("high", "medium", "low")

        Returns:
            Matching Priority level

        Raises:
            ValueError: If value is empty or not a known priority
        """
        if not value or not value.strip():
            raise ValueError("Priority cannot be empty")

        normalized = value.strip().lower()
        for level in cls:
            if level.label == normalized:
                return level

        raise ValueError(
            f"Invalid priority: {value}. Must be one of: high, medium, low"
        )

    def is_higher_than(self, other: "Priority") -> bool:
        """True if this priority is more urgent than other."""
        return self.numeric_value < other.numeric_value

    def __str__(self) -> str:
        return self.label
