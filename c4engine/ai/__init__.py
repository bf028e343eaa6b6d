"""
c4engine/ai/__init__.py - Move selection for the Connect Four engine

This package contains the static evaluator (evaluate) and the minimax
search (minimax). Import from the submodules directly.
"""

__all__ = ['evaluate', 'minimax']
