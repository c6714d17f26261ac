"""
Engine configuration.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
from sheeps_kittens.search.difficulty import Difficulty
from sheeps_kittens.types import GameState, Side


class GameMode(Enum):
    """Which side, if any, the computer plays."""
    LOCAL = "local"
    AI_SHEEP = "ai-sheep"
    AI_KITTEN = "ai-kitten"

    @property
    def ai_side(self) -> Optional[Side]:
        if self is GameMode.AI_SHEEP:
            return Side.SHEEP
        if self is GameMode.AI_KITTEN:
            return Side.KITTEN
        return None

    def is_ai_turn(self, state: GameState) -> bool:
        """True if the computer should move next in this state."""
        return state.winner is None and self.ai_side is state.turn


def default_log_file() -> Path:
    return Path.home() / ".sheeps_kittens" / "engine.log"


@dataclass
class EngineConfig:
    """Configuration for the computer opponent and its front-ends.

    String values for difficulty and mode are accepted and converted to
    their enums, so the config can be built straight from CLI arguments.
    """

    difficulty: Difficulty = Difficulty.MEDIUM
    """Search depth / randomness level"""

    mode: GameMode = GameMode.AI_KITTEN
    """Which side the computer plays"""

    seed: Optional[int] = None
    """Random seed for easy-mode random moves (None for random)"""

    debug: bool = False
    """Log at DEBUG level instead of INFO"""

    log_file: Path = field(default_factory=default_log_file)
    """Where the protocol front-end writes its log"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        try:
            self.difficulty = Difficulty(self.difficulty)
        except ValueError:
            raise ValueError(
                f"difficulty should be one of {[d.value for d in Difficulty]}, got {self.difficulty!r}"
            ) from None

        try:
            self.mode = GameMode(self.mode)
        except ValueError:
            raise ValueError(
                f"mode should be one of {[m.value for m in GameMode]}, got {self.mode!r}"
            ) from None

        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

        self.log_file = Path(self.log_file)

    def make_rng(self) -> random.Random:
        """Random source for move selection, seeded if a seed is set."""
        return random.Random(self.seed)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Difficulty: {self.difficulty.value}\n"
            f"  Mode: {self.mode.value}\n"
            f"  Seed: {self.seed}\n"
            f"  Log: {self.log_file} ({'debug' if self.debug else 'info'})\n"
            f")"
        )
