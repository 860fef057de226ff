"""
Engine configuration.
"""

from dataclasses import dataclass
from typing import Optional

DIFFICULTY_NAMES = ("beginner", "intermediate", "advanced")


@dataclass
class EngineConfig:
    """Configuration for move selection.

    Every tunable of the difficulty tiers and of the background worker in
    one place, so a game can be replayed exactly from its config and seed.
    """

    # Difficulty
    default_difficulty: str = "beginner"
    """Tier used when choose_move() is called without one"""

    # Beginner tier
    capture_probability: float = 0.3
    """Chance that the beginner tier looks for a capture first"""

    # Advanced tier
    search_depth: int = 3
    """Minimax depth in plies; 1 switches to the single-ply scorer"""

    jitter: int = 20
    """Random tie-breaker range of the single-ply scorer (0 disables)"""

    # Worker
    min_think_time: float = 0.3
    """Lower bound of the cosmetic delay before a move is delivered (seconds)"""

    max_think_time: float = 1.0
    """Upper bound of the cosmetic delay (seconds)"""

    # Reproducibility
    random_seed: Optional[int] = None
    """Random seed for reproducible games (None for random)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.default_difficulty = str(self.default_difficulty).lower()

        if self.default_difficulty not in DIFFICULTY_NAMES:
            raise ValueError(
                f"default_difficulty should be one of {', '.join(DIFFICULTY_NAMES)}, "
                f"got {self.default_difficulty}"
            )

        if not 0.0 <= self.capture_probability <= 1.0:
            raise ValueError(
                f"capture_probability must be in [0, 1], got {self.capture_probability}"
            )

        if self.search_depth < 1:
            raise ValueError(f"search_depth must be at least 1, got {self.search_depth}")

        if self.jitter < 0:
            raise ValueError(f"jitter must be non-negative, got {self.jitter}")

        if self.min_think_time < 0:
            raise ValueError(f"min_think_time must be non-negative, got {self.min_think_time}")

        if self.max_think_time < self.min_think_time:
            raise ValueError(
                f"max_think_time ({self.max_think_time}) must not be below "
                f"min_think_time ({self.min_think_time})"
            )

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Difficulty: {self.default_difficulty}\n"
            f"  Beginner: capture_probability={self.capture_probability}\n"
            f"  Advanced: depth={self.search_depth}, jitter={self.jitter}\n"
            f"  Think time: {self.min_think_time}-{self.max_think_time}s\n"
            f"  Seed: {self.random_seed}\n"
            f")"
        )
