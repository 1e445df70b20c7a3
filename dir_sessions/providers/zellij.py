"""Zellij session source."""

import re
from datetime import timedelta

from ..models import LiveSession, SessionSnapshot
from .base import SessionSource

# Seconds per unit as printed by `zellij list-sessions`
_UNIT_SECONDS = {
    "years": 31_557_600, "year": 31_557_600, "y": 31_557_600,
    "months": 2_630_016, "month": 2_630_016, "M": 2_630_016,
    "weeks": 604_800, "week": 604_800, "w": 604_800,
    "days": 86_400, "day": 86_400, "d": 86_400,
    "h": 3_600,
    "m": 60, "min": 60,
    "s": 1,
    "ms": 0, "us": 0, "ns": 0,
}

_AGE_TOKEN = re.compile(r"(\d+)\s*(years?|months?|weeks?|days?|min|ms|us|ns|[yMwdhms])\b")
_LINE = re.compile(r"^(?P<name>\S+)(?:\s+\[Created (?P<age>.*?) ago\])?(?P<rest>.*)$")


def parse_age(text: str) -> timedelta:
    """Parse an age like "1day 2h 3m 4s" into a timedelta. Unknown parts are ignored."""
    seconds = 0
    for amount, unit in _AGE_TOKEN.findall(text):
        seconds += int(amount) * _UNIT_SECONDS[unit]
    return timedelta(seconds=seconds)


def parse_list_sessions(output: str) -> SessionSnapshot:
    """Parse `zellij list-sessions --no-formatting` output.

    The CLI does not report attached clients, so only the current session
    is counted as having one.
    """
    snapshot = SessionSnapshot()
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        match = _LINE.match(line)
        if not match:
            continue
        name = match.group("name")
        rest = match.group("rest")
        if "EXITED" in rest:
            snapshot.resurrectable[name] = parse_age(match.group("age") or "")
        elif "(current)" in rest:
            snapshot.live[name] = LiveSession(is_current=True, connected_users=1)
        else:
            snapshot.live[name] = LiveSession(is_current=False, connected_users=0)
    return snapshot


class ZellijSource(SessionSource):
    """Sessions from the zellij terminal workspace."""

    name = "zellij"
    display_name = "Zellij"
    executable = "zellij"

    def read_snapshot(self) -> SessionSnapshot:
        output = self.run("list-sessions", "--no-formatting")
        if output is None:
            return SessionSnapshot()
        return parse_list_sessions(output)
