"""SessionStatus value object.

Single tagged status for the capture workflow. Replaces independent
"show camera / analyzing / posting / editing" flags so that invalid
combinations cannot be represented.
"""

from enum import Enum
from typing import FrozenSet


class SessionStatus(str, Enum):
    """
    Status of the capture → analyze → edit → submit workflow.

    Lifecycle:
        IDLE → CAPTURING → AWAITING_ANALYSIS → ANALYZING → EDITING
        EDITING ⇄ RE_ANALYZING
        EDITING → SUBMITTING → COMMITTED → (reset) IDLE
    """

    IDLE = "idle"
    CAPTURING = "capturing"
    AWAITING_ANALYSIS = "awaitingAnalysis"
    ANALYZING = "analyzing"
    EDITING = "editing"
    RE_ANALYZING = "reAnalyzing"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    FAILED = "failed"

    def is_busy(self) -> bool:
        """True while an asynchronous operation is in flight."""
        return self in BUSY_STATUSES

    def is_terminal(self) -> bool:
        """True when the session is over and only reset() is allowed."""
        return self in (SessionStatus.COMMITTED, SessionStatus.FAILED)


BUSY_STATUSES: FrozenSet[SessionStatus] = frozenset(
    {
        SessionStatus.CAPTURING,
        SessionStatus.ANALYZING,
        SessionStatus.RE_ANALYZING,
        SessionStatus.SUBMITTING,
    }
)
