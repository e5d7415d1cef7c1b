import io

import pytest

from connect4net.errors import TransportError
from connect4net.game.dispatcher import TurnDispatcher
from connect4net.game.session import MODE_TABLE, GameSession
from connect4net.interfaces.console import Console
from connect4net.net.transport import Transport, terminate


class FakeTransport(Transport):
    """In-memory transport: scripted input lines, recorded output."""

    def __init__(self, name, lines=(), fail_writes=False):
        super().__init__(name)
        self.lines = list(lines)
        self.writes = []
        self.fail_writes = fail_writes

    def read_line(self):
        if self.closed:
            raise TransportError(f"{self.name}: transport is closed")
        if not self.lines:
            self.broken = True
            raise TransportError(f"{self.name}: connection closed by peer")
        return self.lines.pop(0)

    def write_line(self, text):
        if self.fail_writes:
            self.broken = True
            raise TransportError(f"{self.name}: write failed")
        self.writes.append(terminate(text))

    @property
    def output(self):
        return "".join(self.writes)


class ScriptedRng:
    """Stands in for random.Random in the computer opponent."""

    def __init__(self, picks):
        self.picks = list(picks)

    def randint(self, low, high):
        return self.picks.pop(0)


def make_console(stdin=""):
    return Console(stdin=io.StringIO(stdin), stdout=io.StringIO())


def console_output(console):
    return console.stdout.getvalue()


@pytest.fixture
def build_game():
    """
    Build a session and dispatcher for a mode.

    transport_lines is one list of input lines per transport the mode needs.
    """
    def build(mode, rows=6, columns=7, transport_lines=None, stdin="", picks=(), fail_writes=()):
        count = MODE_TABLE[mode].transports
        transport_lines = transport_lines or [[] for _ in range(count)]
        transports = [
            FakeTransport(f"t{i + 1}", lines, fail_writes=i in fail_writes)
            for i, lines in enumerate(transport_lines)
        ]
        console = make_console(stdin)
        session = GameSession(rows, columns, mode, transports, console, ScriptedRng(picks))
        return TurnDispatcher(session), transports, console

    return build
