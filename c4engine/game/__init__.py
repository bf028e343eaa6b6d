"""
c4engine.game - Board model and line detection for Connect Four

Game flow and the Gymnasium environment live in c4engine.game.rules, which
is imported on demand because it depends on the search engine.
"""

from c4engine.game.board import Board, legal_moves
from c4engine.game.scanner import winner, winning_line

__all__ = ['Board', 'legal_moves', 'winner', 'winning_line']
