import logging
from typing import NamedTuple

import requests

from miniminer.challenge import Challenge, ChallengeError
from miniminer.constants import ENDPOINT_TEMPLATE, PROBLEM_PHASE, SOLVE_PHASE


class Submission(NamedTuple):
    ok: bool
    status_code: int
    body: str


class ChallengeClient:
    """Fetches mini miner challenges and submits their solutions"""

    def __init__(self, domain: str, token: str, timeout: float = 10):
        if not domain:
            raise ValueError("A challenge domain is required")

        self.domain = domain.rstrip("/")
        self.token = token
        self.timeout = timeout

        self.session = requests.Session()

    def get_endpoint(self, phase: str) -> str:
        return ENDPOINT_TEMPLATE.format(domain=self.domain, phase=phase)

    @property
    def params(self) -> dict:
        return {"access_token": self.token}

    def get_challenge(self) -> Challenge:
        url = self.get_endpoint(PROBLEM_PHASE)

        logging.debug(f"Fetching challenge from {url}")

        response = self.session.get(url, params=self.params, timeout=self.timeout)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise ChallengeError("Challenge response is not valid JSON") from e

        challenge = Challenge.from_dict(data)

        logging.info(f"Difficulty: {challenge.difficulty}")
        logging.info(f"Block Data: {list(challenge.block.data)}")

        return challenge

    def submit(self, nonce: int) -> Submission:
        url = self.get_endpoint(SOLVE_PHASE)

        response = self.session.post(
            url, params=self.params, json={"nonce": nonce}, timeout=self.timeout
        )

        submission = Submission(
            ok=response.status_code == 200,
            status_code=response.status_code,
            body=response.text,
        )

        logging.info(f"Submitted nonce {nonce}: {response.status_code}")

        return submission

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
