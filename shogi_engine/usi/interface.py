"""
USI Protocol Implementation

This module implements the Universal Shogi Interface (USI) protocol for
communication between the engine and shogi GUIs (ShogiGUI, Shogidokoro,
...). Time controls are accepted but ignored: the engine plays at its
configured difficulty.

USI Commands Supported:
    - usi: Identify engine and list options
    - isready: Synchronization check
    - setoption: Level (beginner/intermediate/advanced), Depth
    - usinewgame: Start new game
    - position: Set board position
    - go: Start choosing a move
    - stop: Wait for the outstanding move
    - gameover: End of game, drop any outstanding move
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for USI commands
    - Worker thread: MoveWorker runs the difficulty policy
    - Communication: game generation counter (stale moves are dropped)

References:
    - USI Protocol: http://shogidokoro.starfree.jp/usi.html
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from shogi_engine import __author__, __version__
from shogi_engine.board.representation import Move
from shogi_engine.config import DIFFICULTY_NAMES, EngineConfig
from shogi_engine.errors import WorkerBusyError
from shogi_engine.policy.difficulty import DifficultyPolicy
from shogi_engine.policy.worker import MoveWorker
from shogi_engine.rules.cshogi_rules import CShogiRules

MAX_DEPTH = 6


def setup_logger(debug=True, log_dir: Optional[Path] = None):
    """
    Setup file-based logger for USI debugging.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_dir: Directory for engine.log (default: ~/.shogi_engine)

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir) if log_dir else Path.home() / ".shogi_engine"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "engine.log"

    logger = logging.getLogger("shogi_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class USIEngine:
    """
    USI-compliant engine interface.

    Handles all USI communication and hands move selection to a
    background MoveWorker.

    Attributes:
        rules: cshogi-backed rules backend
        board: Current position
        config: Engine configuration (Level and Depth options write here)
        policy: Difficulty policy choosing the moves
        worker: Background executor for the policy
    """

    def __init__(self, config: Optional[EngineConfig] = None, debug=True, log_dir: Optional[Path] = None):
        """
        Initialize USI engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            debug: Enable debug logging (default: True)
            log_dir: Directory for the log file (default: ~/.shogi_engine)
        """
        self.rules = CShogiRules()
        self.board = self.rules.new_position()
        self.config = config if config else EngineConfig()

        self.policy = DifficultyPolicy(self.rules, self.config)
        self.worker = MoveWorker(self.policy)

        # Engine info
        self.name = "ShogiEngine"
        self.version = __version__
        self.author = __author__

        self.logger = setup_logger(debug=debug, log_dir=log_dir)
        self.logger.info("=== ShogiEngine Started ===")

    def send(self, line: str) -> None:
        print(line)
        sys.stdout.flush()
        self.logger.debug(f"<<< {line}")

    def run(self):
        """
        Main USI command loop.

        Listens for USI commands on stdin and responds on stdout.
        Runs until 'quit' command is received.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                tokens = command.split()
                cmd = tokens[0].lower()

                if cmd == "usi":
                    self.handle_usi()

                elif cmd == "isready":
                    self.handle_isready()

                elif cmd == "setoption":
                    self.handle_setoption(tokens)

                elif cmd == "usinewgame":
                    self.handle_usinewgame()

                elif cmd == "position":
                    self.handle_position(tokens)

                elif cmd == "go":
                    self.handle_go(tokens)

                elif cmd == "stop":
                    self.handle_stop()

                elif cmd == "gameover":
                    self.handle_gameover(tokens)

                elif cmd == "quit":
                    self.handle_quit()
                    break

                else:
                    # Unknown command - USI says to ignore
                    self.logger.debug(f"Unknown command ignored: {command}")

            except EOFError:
                self.logger.info("EOF received, shutting down")
                break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def handle_usi(self):
        """
        Handle 'usi' command - identify engine and list options.

        Response:
            id name ShogiEngine 0.1.0
            id author ...
            option name Level type combo default beginner var ...
            option name Depth type spin default 3 min 1 max 6
            usiok
        """
        self.logger.info("Handling: usi")

        levels = " ".join(f"var {name}" for name in DIFFICULTY_NAMES)
        self.send(f"id name {self.name} {self.version}")
        self.send(f"id author {self.author}")
        self.send(f"option name Level type combo default {self.policy.difficulty.value} {levels}")
        self.send(f"option name Depth type spin default {self.config.search_depth} min 1 max {MAX_DEPTH}")
        self.send("usiok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self.send("readyok")

    def handle_setoption(self, tokens):
        """
        Handle 'setoption name <id> value <x>'.

        Level switches the difficulty tier. Depth rebuilds the policy so the
        advanced tier picks up the new depth. Other options (USI_Hash,
        USI_Ponder, ...) are ignored.
        """
        if "name" not in tokens:
            self.logger.warning("setoption without name")
            return

        name_index = tokens.index("name") + 1
        if "value" in tokens:
            value_index = tokens.index("value")
            name = " ".join(tokens[name_index:value_index])
            value = " ".join(tokens[value_index + 1:])
        else:
            name = " ".join(tokens[name_index:])
            value = ""

        self.logger.info(f"Handling: setoption {name}={value}")

        if name.lower() == "level":
            try:
                self.policy.set_difficulty(value)
                self.config.default_difficulty = self.policy.difficulty.value
            except ValueError as e:
                self.logger.error(f"Invalid Level: {e}")
                print(f"# Invalid Level: {e}", file=sys.stderr)

        elif name.lower() == "depth":
            try:
                depth = int(value)
            except ValueError:
                self.logger.error(f"Invalid Depth: {value}")
                return
            self.config.search_depth = max(1, min(MAX_DEPTH, depth))
            self._rebuild_policy()

        else:
            self.logger.debug(f"Option ignored: {name}")

    def _rebuild_policy(self):
        difficulty = self.policy.difficulty
        self.worker.wait()
        self.policy = DifficultyPolicy(self.rules, self.config, rng=self.policy.rng)
        self.policy.set_difficulty(difficulty)
        self.worker = MoveWorker(self.policy)

    def handle_usinewgame(self):
        """Handle 'usinewgame' command - reset for new game."""
        self.logger.info("Handling: usinewgame - resetting board")
        self.board = self.rules.new_position()
        self.worker.new_game()

    def handle_position(self, tokens):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves 7g7f 3c3d
            position sfen <SFEN string>
            position sfen <SFEN string> moves 7g7f

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', '7g7f'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            board = self.rules.new_position()
            move_index = 2
        elif tokens[1] == "sfen":
            try:
                move_index = tokens.index("moves")
            except ValueError:
                move_index = len(tokens)
            sfen = " ".join(tokens[2:move_index])

            try:
                board = self.rules.new_position(sfen)
            except ValueError as e:
                self.logger.error(f"Invalid SFEN: {e}")
                print(f"# Invalid SFEN: {e}", file=sys.stderr)
                return
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        if move_index < len(tokens) and tokens[move_index] == "moves":
            for move_str in tokens[move_index + 1:]:
                try:
                    move = self.rules.move_from_usi(board, move_str)
                except ValueError as e:
                    self.logger.error(f"Illegal move: {move_str} - {e}")
                    print(f"# Illegal move: {move_str}", file=sys.stderr)
                    break
                self.rules.push(board, move)

        self.board = board
        self.logger.info(f"Position updated: {self.rules.describe(self.board)}")

    def handle_go(self, tokens):
        """
        Handle 'go' command - choose a move in the background.

        Formats:
            go btime 60000 wtime 60000 byoyomi 10000
            go infinite

        Time parameters are logged and ignored.

        Output (from the worker thread):
            bestmove <move> | bestmove resign
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        if len(tokens) > 1:
            self.logger.debug(f"Time parameters ignored: {' '.join(tokens[1:])}")

        try:
            self.worker.request_move(self.board, self._on_move, on_error=self._on_error)
        except WorkerBusyError:
            self.logger.warning("go received while a move is still being computed")

    def _on_move(self, move: Optional[Move]):
        if move is None:
            self.logger.info("No legal move, resigning")
            self.send("bestmove resign")
        else:
            self.send(f"bestmove {move.usi()}")

    def _on_error(self, error: Exception):
        self.logger.error(f"Move selection failed: {error}")
        self.send("bestmove resign")

    def handle_stop(self):
        """
        Handle 'stop' command.

        Move selection is not interruptible; wait for it to finish so the
        bestmove line is sent before the next command.
        """
        self.logger.info("Handling: stop")
        if not self.worker.wait(timeout=5.0):
            self.logger.warning("Move worker did not finish within timeout")

    def handle_gameover(self, tokens):
        """Handle 'gameover win|lose|draw' - drop any outstanding move."""
        result = tokens[1] if len(tokens) > 1 else "unknown"
        self.logger.info(f"Handling: gameover {result}")
        self.worker.new_game()

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")
        self.worker.new_game()
        self.worker.wait()
        self.logger.info("=== ShogiEngine Stopped ===")
