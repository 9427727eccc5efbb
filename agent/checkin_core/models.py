"""
Value types passed between auth, API calls and the account runner.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Challenge:
    message: str
    nonce: str


@dataclass(frozen=True)
class Session:
    """Authenticated context for one pass. Never reused across cycles."""

    identity: str
    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    user_id: str


@dataclass(frozen=True)
class PointsSnapshot:
    total_points: int = 0


class CheckinResult(Enum):
    CLAIMED = "claimed"
    ALREADY_CLAIMED = "already_claimed"


@dataclass
class AccountOutcome:
    """What one credential produced during a pass: a result or an error."""

    index: int
    label: str
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None
