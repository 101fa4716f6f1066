import logging
from threading import Event, Lock
from typing import Callable

from miniminer.constants import PROGRESS_INTERVAL
from miniminer.utils import freeze_data, pow
from miniminer.utils.pow import BlockData

from .threaded import Threaded


class Worker(Threaded):
    """Searches the nonces congruent to `offset` modulo the worker count"""

    def __init__(
        self,
        miner: "Miner",
        offset: int,
        progress: Callable[[int], None] = None,
    ):
        super().__init__(terminate_flag=miner.stop_flag)

        self.miner = miner
        self.offset = offset
        self.progress = progress

    def run(self):
        step = self.miner.workers
        start = self.offset

        while not self.terminate_flag.is_set():
            if not self.miner.is_needed(start):
                return

            # Searching in chunks so a smaller result from another worker is noticed
            end = start + step * PROGRESS_INTERVAL

            if self.miner.max_nonce is not None:
                end = min(end, self.miner.max_nonce)

            result = pow(
                self.miner.data,
                self.miner.difficulty,
                start=start,
                step=step,
                max_nonce=end,
                stop=self.terminate_flag,
            )

            if result is not None:
                self.miner.offer(*result)
                return

            start += step * PROGRESS_INTERVAL

            if self.progress is not None:
                self.progress(start)


class Miner:
    def __init__(
        self,
        data: BlockData,
        difficulty: int,
        *,
        workers: int = 1,
        max_nonce: int = None,
        stop: Event = None,
        progress: Callable[[int], None] = None,
    ):
        if workers < 1:
            raise ValueError("There must be at least one worker")

        if difficulty < 0:
            raise ValueError("Difficulty cannot be negative")

        self.data = freeze_data(data)
        self.difficulty = difficulty
        self.workers = workers
        self.max_nonce = max_nonce
        self.progress = progress

        if stop is None:
            stop = Event()

        self.stop_flag = stop

        # Written by workers, always holds the smallest nonce found so far
        self.lock = Lock()
        self.result: tuple[str, int] | None = None

    @property
    def best_nonce(self) -> int | None:
        with self.lock:
            return None if self.result is None else self.result[1]

    def is_needed(self, nonce: int) -> bool:
        if self.max_nonce is not None and nonce >= self.max_nonce:
            return False

        best = self.best_nonce

        return best is None or nonce < best

    def offer(self, hash_result: str, nonce: int):
        with self.lock:
            if self.result is None or nonce < self.result[1]:
                self.result = (hash_result, nonce)

        logging.debug(f"Worker found nonce {nonce}")

    def stop(self):
        self.stop_flag.set()

    def run(self) -> tuple[str, int] | None:
        if self.workers == 1:
            return pow(
                self.data,
                self.difficulty,
                max_nonce=self.max_nonce,
                stop=self.stop_flag,
                progress=self.progress,
            )

        logging.debug(f"Starting {self.workers} workers")

        # Only the first worker reports progress, the others are close behind
        workers = [
            Worker(self, i, progress=self.progress if i == 0 else None)
            for i in range(self.workers)
        ]

        for w in workers:
            w.start()

        try:
            for w in workers:
                w.join()

        except KeyboardInterrupt:
            self.stop()
            raise

        # A found nonce is kept even if the search was stopped afterwards
        with self.lock:
            if self.result is not None:
                return self.result

        return None
