"""
c4engine - Connect Four decision engine

This package provides the board model, four-in-a-row detection, a static
position evaluator and a minimax search with alpha-beta pruning that picks
moves for a computer opponent, plus request handlers and a CLI around them.
"""

# Version number
__version__ = '0.1.0'
