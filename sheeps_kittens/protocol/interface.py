"""
Text Protocol Implementation

This module implements a line-based engine protocol, modelled on UCI, so
that a front-end (GUI, bot, test harness) can drive the rules engine and
the computer opponent over stdin/stdout.

Commands Supported:
    - skp: Identify engine
    - isready: Synchronization check
    - newgame: Reset to the starting position
    - position: Set position (startpos or board string) and apply moves
    - tap: Send a tap at (row, col) through the tap protocol
    - forfeit: Side to move concedes
    - difficulty / mode: Change engine configuration
    - moves: List legal moves
    - go: Search the current position and report the best move
    - play: Search and play the move for the side to move
    - stop: Wait for the running search
    - status / display: Show the position
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for commands
    - Search thread: Run the search on an immutable snapshot of the state
    - Searches are not interruptible; stop waits for the result

Example Session:
    GUI -> "skp"
    Engine -> "id name SheepsKittens 0.1.0"
    Engine -> "skpok"
    GUI -> "position startpos moves 22 00-11"
    GUI -> "go difficulty medium"
    Engine -> "info depth 4 score -18 nodes 5123 time 410"
    Engine -> "bestmove 12"
"""

import logging
import sys
import threading
import time
from pathlib import Path
from typing import List, Optional
from sheeps_kittens import __author__, __version__
from sheeps_kittens.board.representation import board_to_string, render_board, string_to_board
from sheeps_kittens.config import EngineConfig, GameMode, default_log_file
from sheeps_kittens.evaluation.heuristic import HeuristicEvaluator
from sheeps_kittens.game.engine import (
    apply_move,
    create_initial_state,
    forfeit_game,
    get_game_status_text,
    handle_tap,
)
from sheeps_kittens.game.notation import move_to_notation, notation_to_move
from sheeps_kittens.search.difficulty import DEPTH_MAP, Difficulty
from sheeps_kittens.search.minimax import SearchResult, choose_move, get_all_moves, search_root
from sheeps_kittens.types import TOTAL_SHEEP, GameMove, GameState, Phase, Side


def setup_logger(debug: bool = True, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Setup file-based logger for protocol debugging.

    Handlers are attached to the package logger, so search and engine
    modules logging under "sheeps_kittens.*" end up in the same file.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: Log path (default: ~/.sheeps_kittens/engine.log)

    Returns:
        Configured logger instance
    """
    log_file = Path(log_file) if log_file else default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("sheeps_kittens")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def parse_side(text: str) -> Side:
    try:
        return Side(text.lower())
    except ValueError:
        raise ValueError(f"Unknown side: {text!r} (expected 'sheep' or 'kitten')") from None


class ProtocolEngine:
    """
    Text protocol front-end for the rules engine and search.

    Attributes:
        state: Current game state
        config: Difficulty, mode, seed and logging settings
        evaluator: Position evaluator used by the search
        search_thread: Background thread for search

    Methods:
        run: Main command loop
        handle_*: One method per command
    """

    def __init__(self, config: Optional[EngineConfig] = None, evaluator=None):
        """
        Initialize the protocol engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            evaluator: Position evaluator (default: HeuristicEvaluator)
        """
        self.config = config if config else EngineConfig()
        self.state = create_initial_state()
        self.evaluator = evaluator if evaluator else HeuristicEvaluator()
        self.rng = self.config.make_rng()

        # Search state
        self.search_thread: Optional[threading.Thread] = None
        self.state_lock = threading.Lock()

        # Engine info
        self.name = "SheepsKittens"
        self.version = __version__
        self.author = __author__

        self.logger = setup_logger(debug=self.config.debug, log_file=self.config.log_file)
        self.logger.info("=== SheepsKittens Engine Started ===")
        self.logger.info(f"Log file: {self.config.log_file}")
        self.logger.debug(repr(self.config))

    def send(self, line: str):
        """Write one protocol line to stdout."""
        print(line)
        sys.stdout.flush()
        self.logger.debug(f"<<< {line}")

    def report_error(self, message: str):
        self.logger.error(message)
        print(f"# {message}", file=sys.stderr)

    def run(self):
        """
        Main command loop.

        Listens for commands on stdin and responds on stdout.
        Runs until 'quit' command is received or stdin closes.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                if not self.dispatch(command.split()):
                    break

            except EOFError:
                self.logger.info("EOF received, shutting down")
                self.wait_for_search()
                break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def dispatch(self, tokens: List[str]) -> bool:
        """
        Route a tokenized command to its handler.

        Returns:
            bool: False once the engine should stop reading commands
        """
        cmd = tokens[0].lower()

        if cmd == "skp":
            self.handle_skp()
        elif cmd == "isready":
            self.handle_isready()
        elif cmd == "newgame":
            self.handle_newgame()
        elif cmd == "position":
            self.handle_position(tokens)
        elif cmd == "tap":
            self.handle_tap(tokens)
        elif cmd == "forfeit":
            self.handle_forfeit()
        elif cmd == "difficulty":
            self.handle_difficulty(tokens)
        elif cmd == "mode":
            self.handle_mode(tokens)
        elif cmd == "moves":
            self.handle_moves()
        elif cmd == "go":
            self.handle_go(tokens)
        elif cmd == "play":
            self.handle_play()
        elif cmd == "stop":
            self.handle_stop()
        elif cmd == "status":
            self.handle_status()
        elif cmd == "display":
            self.handle_display()
        elif cmd == "quit":
            self.handle_quit()
            return False
        else:
            # Unknown command - ignore, like a UCI engine
            self.logger.debug(f"Unknown command ignored: {' '.join(tokens)}")

        return True

    def handle_skp(self):
        """
        Handle 'skp' command - identify engine.

        Response:
            id name SheepsKittens <version>
            id author <author>
            option name Difficulty type combo default medium var easy var medium var hard
            skpok
        """
        self.logger.info("Handling: skp")
        self.send(f"id name {self.name} {self.version}")
        self.send(f"id author {self.author}")
        self.send(
            "option name Difficulty type combo default "
            f"{self.config.difficulty.value} "
            + " ".join(f"var {d.value}" for d in Difficulty)
        )
        self.send("skpok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self.send("readyok")

    def handle_newgame(self):
        """Handle 'newgame' command - reset to the starting position."""
        self.logger.info("Handling: newgame - resetting game state")
        self.wait_for_search()
        with self.state_lock:
            self.state = create_initial_state()

    def handle_position(self, tokens: List[str]):
        """
        Handle 'position' command - set the game state.

        Formats:
            position startpos
            position startpos moves 22 00-11
            position board <board> turn <sheep|kitten> placed <n> captured <n>
            position board <board> turn kitten placed 20 captured 0 moves 20x22

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', '22'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            state = create_initial_state()
            move_index = 2
        elif tokens[1] == "board":
            try:
                state, move_index = self._parse_board_position(tokens)
            except ValueError as e:
                self.report_error(f"Invalid position: {e}")
                return
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        if move_index < len(tokens) and tokens[move_index] == "moves":
            moves_applied = []
            for move_str in tokens[move_index + 1:]:
                try:
                    move = notation_to_move(move_str)
                except ValueError as e:
                    self.report_error(f"Invalid move format: {move_str} - {e}")
                    break

                next_state = apply_move(state, move)
                if next_state is state:
                    self.report_error(f"Illegal move: {move_str}")
                    break

                state = next_state
                moves_applied.append(move_str)

            if moves_applied:
                self.logger.debug(f"Applied moves: {' '.join(moves_applied)}")

        self.wait_for_search()
        with self.state_lock:
            self.state = state

        self.logger.info(f"Position updated: {board_to_string(state.board)} turn={state.turn.value}")

    def _parse_board_position(self, tokens: List[str]):
        """
        Parse 'position board ...' arguments.

        Returns:
            Tuple of (GameState, index of the token after the position)

        Raises:
            ValueError: On missing or malformed fields
        """
        if len(tokens) < 3:
            raise ValueError("missing board string")

        board = string_to_board(tokens[2])
        fields = {"turn": "sheep", "placed": "0", "captured": "0"}

        i = 3
        while i < len(tokens) and tokens[i] != "moves":
            key = tokens[i]
            if key not in fields or i + 1 >= len(tokens):
                raise ValueError(f"unexpected token {key!r}")
            fields[key] = tokens[i + 1]
            i += 2

        placed = int(fields["placed"])
        captured = int(fields["captured"])
        if not 0 <= placed <= TOTAL_SHEEP:
            raise ValueError(f"placed must be between 0 and {TOTAL_SHEEP}, got {placed}")
        if not 0 <= captured <= placed:
            raise ValueError(f"captured must be between 0 and placed, got {captured}")

        state = GameState(
            board=board,
            turn=parse_side(fields["turn"]),
            phase=Phase.MOVEMENT if placed >= TOTAL_SHEEP else Phase.PLACEMENT,
            sheep_placed=placed,
            sheep_captured=captured,
        )
        return state, i

    def handle_tap(self, tokens: List[str]):
        """
        Handle 'tap <row> <col>' - one step of the tap protocol.

        Response:
            tap ok | tap ignored
            status <text>
        """
        if len(tokens) != 3:
            self.report_error("Usage: tap <row> <col>")
            return

        row, col = int(tokens[1]), int(tokens[2])

        self.wait_for_search()
        with self.state_lock:
            previous = self.state
            self.state = handle_tap(previous, row, col)
            changed = self.state is not previous

        self.send("tap ok" if changed else "tap ignored")
        self.handle_status()

        if changed and self.config.mode.is_ai_turn(self.state):
            self.logger.info(f"Computer to move ({self.config.mode.value})")
            self.handle_play()

    def handle_forfeit(self):
        """Handle 'forfeit' command - side to move concedes."""
        self.logger.info("Handling: forfeit")
        self.wait_for_search()
        with self.state_lock:
            self.state = forfeit_game(self.state)
        self.handle_status()

    def handle_difficulty(self, tokens: List[str]):
        """Handle 'difficulty <easy|medium|hard>'."""
        if len(tokens) != 2:
            self.report_error("Usage: difficulty <easy|medium|hard>")
            return
        self.config.difficulty = Difficulty(tokens[1].lower())
        self.logger.info(f"Difficulty set to {self.config.difficulty.value}")

    def handle_mode(self, tokens: List[str]):
        """Handle 'mode <local|ai-sheep|ai-kitten>'."""
        if len(tokens) != 2:
            self.report_error("Usage: mode <local|ai-sheep|ai-kitten>")
            return
        self.config.mode = GameMode(tokens[1].lower())
        self.logger.info(f"Mode set to {self.config.mode.value}")

    def handle_moves(self):
        """Handle 'moves' - list legal moves for the side to move."""
        moves = get_all_moves(self.state)
        self.send("moves " + " ".join(move_to_notation(m) for m in moves) if moves else "moves none")

    def handle_go(self, tokens: List[str]):
        """
        Handle 'go' command - start search.

        Formats:
            go                      (configured difficulty)
            go difficulty hard
            go depth 3              (fixed depth, never random)

        Args:
            tokens: Command tokens (e.g., ['go', 'depth', '3'])
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        depth = None
        difficulty = self.config.difficulty

        i = 1
        while i < len(tokens):
            if tokens[i] == "depth" and i + 1 < len(tokens):
                depth = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "difficulty" and i + 1 < len(tokens):
                difficulty = Difficulty(tokens[i + 1].lower())
                i += 2
            else:
                i += 1

        if depth is not None and depth < 1:
            self.report_error(f"Invalid depth: {depth}")
            return

        self.start_search(depth=depth, difficulty=difficulty, apply_result=False)

    def handle_play(self):
        """Handle 'play' - search with the configured difficulty and play the move."""
        self.logger.info("Handling: play")
        self.start_search(depth=None, difficulty=self.config.difficulty, apply_result=True)

    def start_search(self, depth: Optional[int], difficulty: Difficulty, apply_result: bool):
        """Start a background search over a snapshot of the current state."""
        self.wait_for_search()

        # GameState is immutable, so the reference itself is the snapshot
        with self.state_lock:
            snapshot = self.state

        self.logger.info(
            f"Starting search thread with "
            f"{f'depth={depth}' if depth is not None else f'difficulty={difficulty.value}'}"
        )

        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(snapshot, depth, difficulty, apply_result),
        )
        self.search_thread.start()

    def _search_thread(
        self,
        state: GameState,
        depth: Optional[int],
        difficulty: Difficulty,
        apply_result: bool,
    ):
        """
        Background thread for search.

        Output:
            info depth X score Y nodes Z time T
            bestmove <move> | bestmove none
            status <text>            (only when the move is played)

        Exactly one bestmove line is sent per search, including the
        fallback sent when the search itself fails.
        """
        start_time = time.time()

        try:
            if depth is not None:
                result = search_root(state, depth, self.evaluator)
                searched_depth = depth
            else:
                result = choose_move(state, difficulty, self.evaluator, self.rng)
                searched_depth = 0 if result.nodes == 0 else DEPTH_MAP[difficulty]

        except Exception as e:
            elapsed_time = time.time() - start_time
            self.logger.error(f"Search error after {elapsed_time:.3f}s: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

            # Send a legal move as fallback
            legal_moves = get_all_moves(state)
            if legal_moves:
                fallback_move = move_to_notation(legal_moves[0])
                self.logger.warning(f"Using fallback move: {fallback_move}")
                self.send(f"bestmove {fallback_move}")
            else:
                self.send("bestmove none")
            return

        elapsed_ms = int((time.time() - start_time) * 1000)
        self.logger.info(
            f"Search complete: best_move={move_to_notation(result.move) if result.move else 'None'}, "
            f"score={result.score}, nodes={result.nodes}, time={elapsed_ms}ms"
        )

        self._report(result, searched_depth, elapsed_ms)

        if apply_result and result.move is not None:
            try:
                self._play_result(state, result.move)
            except Exception as e:
                self.report_error(f"Could not play {move_to_notation(result.move)}: {e}")

        self.logger.debug("Search thread finished")

    def _play_result(self, searched: GameState, move: GameMove):
        """Play a search result unless the position changed during the search."""
        with self.state_lock:
            played = self.state is searched
            if played:
                self.state = apply_move(searched, move)

        if played:
            self.handle_status()
        else:
            self.logger.warning("Position changed during search, move not played")

    def _report(self, result: SearchResult, depth: int, elapsed_ms: int):
        if result.move is None:
            self.send("bestmove none")
            return

        self.send(
            f"info depth {depth} score {int(result.score)} nodes {result.nodes} time {elapsed_ms}"
        )
        self.send(f"bestmove {move_to_notation(result.move)}")

    def wait_for_search(self):
        """Block until the running search (if any) has finished."""
        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for search thread to finish")
            self.search_thread.join()

    def handle_stop(self):
        """
        Handle 'stop' command.

        Searches run to completion, so this waits for the current result.
        """
        self.logger.info("Handling: stop")
        self.wait_for_search()

    def handle_status(self):
        self.send(f"status {get_game_status_text(self.state)}")

    def handle_display(self):
        """Handle 'display' - print the board and counters."""
        state = self.state
        for line in render_board(state.board).splitlines():
            self.send(line)
        self.send(
            f"turn {state.turn.value} phase {state.phase.value} "
            f"placed {state.sheep_placed} captured {state.sheep_captured}"
        )
        self.handle_status()

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")

        # Wait for search to complete before quitting
        self.wait_for_search()

        self.logger.info("=== SheepsKittens Engine Stopped ===")
