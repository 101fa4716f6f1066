import logging
from threading import Event
from typing import Callable

from miniminer.miner import Miner
from miniminer.utils import get_digest, is_valid_hash

from .block import Block


class ChallengeError(ValueError):
    """The challenge service sent something that is not a challenge"""


class Challenge:
    def __init__(self, difficulty: int, block: Block):
        if isinstance(difficulty, bool) or not isinstance(difficulty, int):
            raise ValueError("Difficulty must be an integer")

        if difficulty < 0:
            raise ValueError("Difficulty cannot be negative")

        self.difficulty = difficulty
        self.block = block

    def solve(
        self,
        workers: int = 1,
        stop: Event = None,
        progress: Callable[[int], None] = None,
    ) -> int | None:
        """Finds the smallest nonce for the block, None if the search was stopped"""

        miner = Miner(
            self.block.data,
            self.difficulty,
            workers=workers,
            stop=stop,
            progress=progress,
        )

        result = miner.run()

        if result is None:
            return None

        hash_result, nonce = result

        logging.info(f"Nonce found: {nonce} ({hash_result})")

        self.block.nonce = nonce

        return nonce

    def verify(self, nonce: int) -> bool:
        """Checks a nonce the same way the challenge service does"""

        digest = get_digest(self.block.get_payload(nonce))

        return is_valid_hash(digest, self.difficulty)

    def to_dict(self) -> dict:
        return {"difficulty": self.difficulty, "block": self.block.to_dict()}

    @classmethod
    def from_dict(cls, data: dict):
        if not isinstance(data, dict):
            raise ChallengeError("Challenge must be an object")

        try:
            difficulty = data["difficulty"]
            block = data["block"]

            if not isinstance(block, dict):
                raise ChallengeError("Challenge block must be an object")

            return cls(difficulty=difficulty, block=Block.from_dict(block))

        except ChallengeError:
            raise

        except (KeyError, ValueError) as e:
            raise ChallengeError(f"Invalid challenge: {e}") from e
