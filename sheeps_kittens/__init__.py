"""
Sheeps & Kittens Engine

Rules engine and computer opponent for Sheeps & Kittens, a BaghChal-style
hunt game on a 5x5 grid: four kittens try to capture five sheep by
jumping them, twenty sheep try to leave every kitten without a move.

## Architecture

The engine is organized into several key modules:

1. **game**: Rules engine
   - Immutable GameState and move descriptors
   - Tap protocol (select, deselect, reselect, move) and direct moves
   - Win detection, forfeit and status text

2. **board**: Topology and representation
   - Orthogonal adjacency everywhere, diagonals on (row + col) even nodes
   - Board strings, ASCII rendering, numpy feature planes

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - HeuristicEvaluator: captures, kitten mobility, placement progress

4. **search**: Computer opponent
   - Minimax with alpha-beta pruning
   - Captures-first, centre-first move ordering
   - Difficulty levels (depth plus random-move chance)

5. **protocol**: Line-based stdin/stdout engine protocol

6. **utils**: Puzzle suite and self-play benchmarking

## Quick Start

### As a Python Library

```python
from sheeps_kittens import create_initial_state, find_best_move, handle_tap

state = create_initial_state()
state = handle_tap(state, 2, 2)            # Sheep place on the centre
move = find_best_move(state, "medium")     # Kittens reply
```

### As an Engine Process

```bash
python -m sheeps_kittens.protocol
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__author__ = "Sheeps & Kittens Developers"
__license__ = "MIT"

from sheeps_kittens.types import (
    BOARD_SIZE,
    SHEEP_TO_WIN,
    TOTAL_SHEEP,
    Capture,
    GameMove,
    GameState,
    Move,
    Phase,
    Piece,
    Place,
    Position,
    Side,
)
from sheeps_kittens.board import get_capture_targets, get_neighbors, get_valid_moves_for_piece
from sheeps_kittens.game import (
    apply_move,
    create_initial_state,
    forfeit_game,
    get_game_status_text,
    handle_tap,
    is_legal_move,
    move_to_notation,
    notation_to_move,
)
from sheeps_kittens.evaluation import Evaluator, HeuristicEvaluator, evaluate
from sheeps_kittens.search import Difficulty, find_best_move, get_all_moves
from sheeps_kittens.config import EngineConfig, GameMode

__all__ = [
    'BOARD_SIZE',
    'SHEEP_TO_WIN',
    'TOTAL_SHEEP',
    'Capture',
    'GameMove',
    'GameState',
    'Move',
    'Phase',
    'Piece',
    'Place',
    'Position',
    'Side',
    'get_capture_targets',
    'get_neighbors',
    'get_valid_moves_for_piece',
    'apply_move',
    'create_initial_state',
    'forfeit_game',
    'get_game_status_text',
    'handle_tap',
    'is_legal_move',
    'move_to_notation',
    'notation_to_move',
    'Evaluator',
    'HeuristicEvaluator',
    'evaluate',
    'Difficulty',
    'find_best_move',
    'get_all_moves',
    'EngineConfig',
    'GameMode',
]
