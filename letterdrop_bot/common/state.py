# letterdrop_bot/common/state.py

import enum
import time
from dataclasses import dataclass, field
from typing import List, Optional


class Phase(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


class RejectReason(enum.Enum):
    NO_ACTIVE_ROUND = "no_active_round"
    MALFORMED_COMMAND = "malformed_command"
    INCORRECT = "incorrect"


class HintStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ALREADY_USED = "already_used"


@dataclass(frozen=True)
class ChatEvent:
    """One inbound chat message, already normalized by its connector."""
    platform: str
    user: str
    text: str


@dataclass
class Round:
    secret_word: str
    mask: List[str]
    phase: Phase
    epoch: int = 0
    ended_by: Optional[str] = None
    started_at: float = field(default_factory=time.monotonic)


@dataclass
class HintState:
    used: bool = False
    lookup_done: bool = False
    cached_text: Optional[str] = None


@dataclass(frozen=True)
class GuessResult:
    accepted: bool
    reason: Optional[RejectReason] = None

    @classmethod
    def ok(cls) -> "GuessResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: RejectReason) -> "GuessResult":
        return cls(accepted=False, reason=reason)


@dataclass(frozen=True)
class HintResult:
    status: HintStatus
    text: Optional[str] = None
