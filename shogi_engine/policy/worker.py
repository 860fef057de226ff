"""
Background Move Worker

Runs DifficultyPolicy.choose_move() off the caller's thread so a front-end
(USI loop, GUI) keeps handling input while the engine thinks.

Threading:
    - Caller thread: request_move(), new_game(), wait()
    - Worker thread: one move selection at a time
    - Communication: a generation counter guarded by a lock

Rules:
    - At most one request is outstanding; a second one raises
      WorkerBusyError
    - The worker searches a private copy of the position
    - A cosmetic delay in [min_think_time, max_think_time] pads fast
      answers; it is drawn from its own random source so it never changes
      which move is chosen
    - new_game() bumps the generation; a result computed for an older
      generation is dropped instead of being delivered
    - The generation check and the delivery happen under one lock, so
      new_game() cannot slip in between them; the lock is re-entrant and
      the slot is already free, so a callback may request the next move
    - A RulesAuthorityError (or any other fault that escapes the policy)
      goes to on_error instead of callback
"""

import logging
import random
import threading
import time
from typing import Callable, Optional, Union

from shogi_engine.board.representation import Move
from shogi_engine.config import EngineConfig
from shogi_engine.errors import WorkerBusyError
from shogi_engine.policy.difficulty import Difficulty, DifficultyPolicy
from shogi_engine.rules.base import Position

logger = logging.getLogger(__name__)

MoveCallback = Callable[[Optional[Move]], None]
ErrorCallback = Callable[[Exception], None]


class MoveWorker:
    """
    Single-slot background executor for move selection.

    Attributes:
        policy: Policy that picks the moves
        config: Source of the think-time bounds
        generation: Current game generation
        searching: True while a request is outstanding
        last_error: Exception that aborted the last request, if any
    """

    def __init__(self, policy: DifficultyPolicy, config: Optional[EngineConfig] = None):
        self.policy = policy
        self.config = config if config else policy.config
        self.generation = 0
        self.searching = False
        self.last_error: Optional[BaseException] = None

        self._lock = threading.RLock()
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._delay_rng = random.Random()

    @property
    def busy(self) -> bool:
        with self._lock:
            return self.searching

    def new_game(self) -> int:
        """Start a new game generation; an outstanding result will be dropped."""
        with self._lock:
            self.generation += 1
            self._cancelled.set()
            logger.info(f"New game generation {self.generation}")
            return self.generation

    def request_move(
        self,
        position: Position,
        callback: MoveCallback,
        difficulty: Union[Difficulty, str, None] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> int:
        """
        Start choosing a move in the background.

        Args:
            position: Current position (copied; the original is not used again)
            callback: Called on the worker thread with the chosen Move (or None
                when there is no legal move), unless the game changed meanwhile
            difficulty: Tier to play, policy default if omitted
            on_error: Called on the worker thread with the exception when
                selection fails, unless the game changed meanwhile

        Returns:
            int: Generation the request belongs to

        Raises:
            WorkerBusyError: If a request is still outstanding
        """
        with self._lock:
            if self.searching:
                raise WorkerBusyError("A move is already being computed")

            generation = self.generation
            board = self.policy.rules.copy(position)
            self._cancelled.clear()
            self.searching = True
            self.last_error = None
            self._thread = threading.Thread(
                target=self._run,
                args=(board, callback, on_error, difficulty, generation),
                name=f"move-worker-{generation}",
                daemon=True,
            )
            self._thread.start()

        logger.debug(f"Move request started for generation {generation}")
        return generation

    def _run(
        self,
        board: Position,
        callback: MoveCallback,
        on_error: Optional[ErrorCallback],
        difficulty: Union[Difficulty, str, None],
        generation: int,
    ) -> None:
        start_time = time.monotonic()
        move = None
        error = None

        try:
            move = self.policy.choose_move(board, difficulty)
        except Exception as e:
            error = e
            logger.error(f"Move selection aborted: {e}", exc_info=True)

        self._pad_think_time(time.monotonic() - start_time)

        with self._lock:
            self.last_error = error
            self.searching = False

            if generation != self.generation:
                logger.debug(f"Discarding result for generation {generation} (now {self.generation})")
                return

            if error is None:
                callback(move)
            elif on_error is not None:
                on_error(error)

    def _pad_think_time(self, elapsed: float) -> None:
        target = self._delay_rng.uniform(self.config.min_think_time, self.config.max_think_time)
        remaining = target - elapsed
        if remaining > 0:
            # new_game() cuts the wait short
            self._cancelled.wait(remaining)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the outstanding request to finish.

        Returns:
            bool: True if no request is running any more
        """
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self.busy
