"""Data model shared by the directory list, the session sources and the UI."""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import NamedTuple, Optional


class SessionState(Enum):
    """Session status of a directory, keyed by its leaf folder name."""

    CURRENT = "current"  # live, attached in the current tab
    CONNECTED = "connected"  # live, other clients attached
    IDLE = "idle"  # live, nobody attached
    EXITED = "exited"  # resurrectable
    NOT_CREATED = "not_created"


class LiveSession(NamedTuple):
    """A running session as reported by a session source.

    Plain `(is_current, connected_users)` tuples are accepted wherever a
    LiveSession is expected.
    """

    is_current: bool = False
    connected_users: int = 0


@dataclass(frozen=True)
class SessionStatus:
    """Result of annotating one directory against the session tables."""

    state: SessionState
    connected_users: int = 0
    exited_for: Optional[timedelta] = None

    @property
    def is_live(self) -> bool:
        return self.state in (SessionState.CURRENT, SessionState.CONNECTED, SessionState.IDLE)


@dataclass
class SessionSnapshot:
    """Read-only view of sessions at one moment.

    live: leaf name -> LiveSession
    resurrectable: leaf name -> time since the session exited
    """

    live: dict[str, LiveSession] = field(default_factory=dict)
    resurrectable: dict[str, timedelta] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.live) + len(self.resurrectable)


@dataclass(frozen=True)
class HighlightSpan:
    """Half-open [start, end) range of a row to draw in a highlight style."""

    start: int
    end: int
    style: str


@dataclass
class StyledLine:
    """One row of picker output."""

    text: str
    spans: list[HighlightSpan] = field(default_factory=list)
    selected: bool = False

    @property
    def plain(self) -> str:
        return self.text
