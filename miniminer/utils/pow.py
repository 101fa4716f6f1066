import json
import logging
from hashlib import sha256
from threading import Event
from typing import Callable, Sequence

from miniminer.constants import MAX_DIFFICULTY, PROGRESS_INTERVAL

from .misc import freeze_data

BlockData = Sequence[tuple[str, object]]


def encode_payload(data: BlockData, nonce: int) -> str:
    """
    Canonical payload for a block and a nonce

    {"data":[["<label>",<value>],...],"nonce":<nonce>} with no whitespace
    """
    payload = {"data": [[label, value] for label, value in data], "nonce": nonce}

    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def get_digest(payload: str) -> bytes:
    return sha256(payload.encode()).digest()


def get_raw_hash(payload: str) -> str:
    return sha256(payload.encode()).hexdigest()


def get_target(difficulty: int, bits: int = MAX_DIFFICULTY) -> int:
    return 2 ** (bits - difficulty)


def is_valid_hash(digest: bytes, difficulty: int) -> bool:
    """Checks if the first `difficulty` bits of the digest are zero"""

    if difficulty < 0:
        raise ValueError("Difficulty cannot be negative")

    if difficulty == 0:
        return True

    bits = len(digest) * 8

    # There are only so many bits to check
    if difficulty > bits:
        return False

    return int.from_bytes(digest, "big") < get_target(difficulty, bits)


def pow(
    data: BlockData,
    difficulty: int,
    *,
    start: int = 0,
    step: int = 1,
    max_nonce: int = None,
    stop: Event = None,
    progress: Callable[[int], None] = None,
):
    """
    Searches for the first nonce whose payload hash has enough leading zero bits

    Candidates are start, start + step, start + 2 * step, ... The search is
    unbounded unless `max_nonce` (exclusive) is given or `stop` gets set, in
    which case None is returned.
    """

    if difficulty < 0:
        raise ValueError("Difficulty cannot be negative")

    if start < 0 or step < 1:
        raise ValueError("Candidates must be non-negative and increasing")

    data = freeze_data(data)

    # Per-attempt logging only at DEBUG level
    debug = logging.getLogger().isEnabledFor(logging.DEBUG)

    nonce = start
    attempts = 0

    while max_nonce is None or nonce < max_nonce:
        if stop is not None and stop.is_set():
            logging.debug("Search stopped at nonce %d", nonce)
            return None

        digest = get_digest(encode_payload(data, nonce))

        if debug:
            logging.debug("Trying nonce %d: %s", nonce, digest.hex())

        if is_valid_hash(digest, difficulty):
            return digest.hex(), nonce

        nonce += step
        attempts += 1

        if progress is not None and attempts % PROGRESS_INTERVAL == 0:
            progress(nonce)

    return None
