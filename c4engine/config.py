"""
config.py - Search configuration for the Connect Four engine
"""

from dataclasses import dataclass
from typing import Optional

from c4engine.utils import DEFAULT_DEPTH, WIN_SCORE


@dataclass(frozen=True)
class EngineConfig:
    """Parameters of a MinimaxPlayer search."""
    depth: int = DEFAULT_DEPTH
    win_score: int = WIN_SCORE
    time_limit: Optional[float] = None  # seconds, None searches to full depth
    workers: int = 1                    # threads used for root moves

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")
        if self.win_score <= 0:
            raise ValueError(f"win_score must be positive, got {self.win_score}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

    @classmethod
    def from_args(cls, args) -> 'EngineConfig':
        """Build a config from an argparse namespace, ignoring missing options."""
        depth = getattr(args, 'depth', None)
        workers = getattr(args, 'workers', None)
        return cls(
            depth=DEFAULT_DEPTH if depth is None else depth,
            time_limit=getattr(args, 'time_limit', None),
            workers=1 if workers is None else workers,
        )
