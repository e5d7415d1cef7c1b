"""
connect4net.game - Core game mechanics for networked Connect Four

This package contains the board, the game session with its per-mode move
sources, the broadcaster and the turn dispatcher.
"""

from connect4net.game.board import Board
from connect4net.game.dispatcher import Outcome, OutcomeKind, TurnDispatcher
from connect4net.game.session import GameSession

__all__ = ['Board', 'GameSession', 'Outcome', 'OutcomeKind', 'TurnDispatcher']
