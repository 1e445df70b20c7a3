"""Session annotation and session-aware ordering of directories."""

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Optional

from .formatting import format_duration, get_folder_name
from .models import HighlightSpan, LiveSession, SessionState, SessionStatus

DEFAULT_IDLE_LABEL = "CREATED"

# Sort groups, lowest first.
PRIORITY_LIVE = 0
PRIORITY_RESURRECTABLE = 1
PRIORITY_NONE = 2


def classify(
    folder_name: str,
    sessions: Mapping[str, LiveSession],
    resurrectable: Optional[Mapping[str, timedelta]] = None,
) -> SessionStatus:
    """Look up the session status for a leaf folder name.

    A live session always wins over a resurrectable one of the same name.
    """
    live = sessions.get(folder_name)
    if live is not None:
        is_current, connected_users = live
        if is_current:
            return SessionStatus(SessionState.CURRENT, connected_users)
        if connected_users > 0:
            return SessionStatus(SessionState.CONNECTED, connected_users)
        return SessionStatus(SessionState.IDLE, 0)

    if resurrectable and folder_name in resurrectable:
        return SessionStatus(SessionState.EXITED, exited_for=resurrectable[folder_name])

    return SessionStatus(SessionState.NOT_CREATED)


def session_priority(
    path: str,
    sessions: Mapping[str, LiveSession],
    resurrectable: Optional[Mapping[str, timedelta]] = None,
) -> int:
    folder_name = get_folder_name(path)
    if folder_name in sessions:
        return PRIORITY_LIVE
    if resurrectable and folder_name in resurrectable:
        return PRIORITY_RESURRECTABLE
    return PRIORITY_NONE


def sort_by_session(
    paths: Iterable[str],
    sessions: Mapping[str, LiveSession],
    resurrectable: Optional[Mapping[str, timedelta]] = None,
) -> list[str]:
    """Order paths live first, then resurrectable, then the rest.

    Ties fall back to ascending order of the full path.
    """
    return sorted(paths, key=lambda p: (session_priority(p, sessions, resurrectable), p))


def status_suffix(
    status: SessionStatus,
    offset: int = 0,
    idle_label: str = DEFAULT_IDLE_LABEL,
) -> tuple[str, Optional[HighlightSpan]]:
    """Build the status suffix for a row and the span to highlight in it.

    `offset` is the length of the text the suffix is appended to, so the
    returned span indexes into the full row.
    """
    state = status.state

    if state is SessionState.CURRENT:
        prefix = " [CURRENT - "
        count = str(status.connected_users)
        start = offset + len(prefix)
        return f"{prefix}{count} users]", HighlightSpan(start, start + len(count), "users")

    if state is SessionState.CONNECTED:
        prefix = " ["
        count = str(status.connected_users)
        start = offset + len(prefix)
        return f"{prefix}{count} users]", HighlightSpan(start, start + len(count), "users")

    if state is SessionState.IDLE:
        prefix = " ["
        start = offset + len(prefix)
        return f"{prefix}{idle_label}]", HighlightSpan(start, start + len(idle_label), "idle")

    if state is SessionState.EXITED:
        prefix = " ["
        word = "EXITED"
        age = format_duration(status.exited_for or timedelta(0))
        start = offset + len(prefix)
        return f"{prefix}{word} {age}]", HighlightSpan(start, start + len(word), "exited")

    return " [NOT CREATED]", None
