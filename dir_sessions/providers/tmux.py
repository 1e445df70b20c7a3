"""tmux session source."""

import os

from ..models import LiveSession, SessionSnapshot
from .base import SessionSource

LIST_FORMAT = "#{session_name}\t#{session_attached}"


def parse_list_sessions(output: str, current: str | None = None) -> SessionSnapshot:
    """Parse `tmux list-sessions -F '#{session_name}\\t#{session_attached}'` output."""
    snapshot = SessionSnapshot()
    for line in output.splitlines():
        if not line.strip():
            continue
        name, _, attached = line.partition("\t")
        try:
            clients = int(attached)
        except ValueError:
            clients = 0
        snapshot.live[name] = LiveSession(is_current=(name == current), connected_users=clients)
    return snapshot


class TmuxSource(SessionSource):
    """Sessions from a tmux server. tmux keeps no exited sessions around."""

    name = "tmux"
    display_name = "tmux"
    executable = "tmux"

    def current_session(self) -> str | None:
        """Name of the session this process runs in, if any."""
        if not os.environ.get("TMUX"):
            return None
        output = self.run("display-message", "-p", "#S")
        return output.strip() if output else None

    def read_snapshot(self) -> SessionSnapshot:
        output = self.run("list-sessions", "-F", LIST_FORMAT)
        if output is None:
            return SessionSnapshot()
        return parse_list_sessions(output, self.current_session())
