"""
session.py - Game session and the per-mode move-source table

MODE_TABLE is the single place that says, for each game mode, how many remote
participants are needed and which source plays each player slot. Adding a
mode is a new table entry, not a new branch in the turn loop.
"""

import random
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from connect4net.debug import debug
from connect4net.errors import SetupError
from connect4net.game.board import Board
from connect4net.game.sources import (LocalOperatorSource, MoveSource, ScriptedOpponentSource,
                                      SourceKind, TransportSource)
from connect4net.interfaces.console import Console
from connect4net.net.transport import Transport
from connect4net.utils import GameMode, Player


@dataclass(frozen=True)
class SlotSpec:
    """
    Source kind for one player slot; transport_index is set for TRANSPORT.

    turn_notice says whether transports are told about this slot's turn
    before its move is read.
    """
    kind: SourceKind
    transport_index: Optional[int] = None
    turn_notice: bool = True


@dataclass(frozen=True)
class ModeSpec:
    transports: int
    player_one: SlotSpec
    player_two: SlotSpec

    def slot(self, player: Player) -> SlotSpec:
        if player == Player.ONE:
            return self.player_one
        if player == Player.TWO:
            return self.player_two
        raise ValueError(f"No slot for {player}")

    @property
    def networked(self) -> bool:
        return self.transports > 0

    def connection_order(self) -> Tuple[int, ...]:
        """Player numbers in the order their transports are accepted."""
        order = {}
        for player in (Player.ONE, Player.TWO):
            spec = self.slot(player)
            if spec.kind == SourceKind.TRANSPORT:
                order[spec.transport_index] = player.value
        return tuple(order[index] for index in sorted(order))


MODE_TABLE: Dict[GameMode, ModeSpec] = {
    GameMode.SERVER_VS_CLIENT: ModeSpec(
        transports=1,
        player_one=SlotSpec(SourceKind.LOCAL),
        player_two=SlotSpec(SourceKind.TRANSPORT, 0),
    ),
    GameMode.CLIENT_VS_CLIENT: ModeSpec(
        transports=2,
        player_one=SlotSpec(SourceKind.TRANSPORT, 0),
        player_two=SlotSpec(SourceKind.TRANSPORT, 1),
    ),
    GameMode.SERVER_VS_COMPUTER: ModeSpec(
        transports=0,
        player_one=SlotSpec(SourceKind.LOCAL),
        player_two=SlotSpec(SourceKind.SCRIPTED, turn_notice=False),
    ),
    GameMode.CLIENT_VS_COMPUTER: ModeSpec(
        transports=1,
        player_one=SlotSpec(SourceKind.TRANSPORT, 0),
        player_two=SlotSpec(SourceKind.SCRIPTED, turn_notice=False),
    ),
}


class GameSession:
    """
    Everything one game needs: the board, the mode, the connected transports,
    the local console and a move source per player.

    The transport set is fixed at construction and must match the mode.
    """

    def __init__(self, rows: int, columns: int, mode: GameMode,
                 transports: Sequence[Transport] = (),
                 console: Optional[Console] = None,
                 rng: Optional[random.Random] = None):
        self.mode = mode
        self.spec = MODE_TABLE[mode]
        self.transports: Tuple[Transport, ...] = tuple(transports)

        if len(self.transports) != self.spec.transports:
            raise SetupError(
                f"{mode.title} needs {self.spec.transports} connected player(s), "
                f"got {len(self.transports)}"
            )

        self.board = Board(rows, columns)
        self.console = console or Console()
        self.sources: Dict[Player, MoveSource] = {
            player: self._build_source(self.spec.slot(player), rng)
            for player in (Player.ONE, Player.TWO)
        }
        debug.info(f"Session created: {rows}x{columns}, mode {mode.value}, "
                   f"{len(self.transports)} transport(s)", "session")

    def _build_source(self, slot: SlotSpec, rng: Optional[random.Random]) -> MoveSource:
        if slot.kind == SourceKind.LOCAL:
            return LocalOperatorSource(self.console)
        if slot.kind == SourceKind.TRANSPORT:
            return TransportSource(self.transports[slot.transport_index])
        return ScriptedOpponentSource(self.console, rng)

    def source_for(self, player: Player) -> MoveSource:
        return self.sources[player]

    def notification_targets(self) -> Tuple[Transport, ...]:
        """Transports that receive boards, turn notices and announcements."""
        return self.transports

    def close(self) -> None:
        """Close every transport; the session is finished."""
        for transport in self.transports:
            transport.close()
        debug.debug("Session closed", "session")
