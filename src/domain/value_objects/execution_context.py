"""Execution context value object.

Records why an indicator run was started and by whom.
"""

from dataclasses import dataclass
from enum import Enum


class ExecutionContextType(str, Enum):
    """Origin of an indicator execution."""

    SCHEDULED = "scheduled"
    MANUAL = "manual"
    TEST = "test"
    API = "api"
    SYSTEM = "system"


_USER_INITIATED = frozenset({ExecutionContextType.MANUAL, ExecutionContextType.TEST})
_AUTOMATED = frozenset({ExecutionContextType.SCHEDULED, ExecutionContextType.SYSTEM})


@dataclass(frozen=True)
class ExecutionContext:
    """Origin and initiator of an execution.

    Domain invariants:
    - context is one of ExecutionContextType (string tags accepted, case-insensitive)
    - manual and test runs name the user who started them

    Attributes:
        context: Execution origin
        initiated_by: User or component that started the run
    """

    context: ExecutionContextType
    initiated_by: str | None = None

    def __post_init__(self):
        """Validate context type and initiator."""
        context = self.context
        if not isinstance(context, ExecutionContextType):
            if not isinstance(context, str) or not context.strip():
                raise ValueError("Execution context cannot be empty")
            try:
                context = ExecutionContextType(context.strip().lower())
            except ValueError:
                raise ValueError(
                    f"Invalid execution context: {self.context}. Must be one of: "
                    f"{', '.join(t.value for t in ExecutionContextType)}"
                ) from None
        object.__setattr__(self, "context", context)

        initiated_by = self.initiated_by.strip() if self.initiated_by else None
        if context in _USER_INITIATED and not initiated_by:
            raise ValueError(f"{context.value} executions must specify initiated_by")
        object.__setattr__(self, "initiated_by", initiated_by)

    @property
    def requires_user_permission(self) -> bool:
        return self.context in _USER_INITIATED

    @property
    def is_automated(self) -> bool:
        return self.context in _AUTOMATED

    def __str__(self) -> str:
        if self.initiated_by:
            return f"{self.context.value} ({self.initiated_by})"
        return self.context.value
