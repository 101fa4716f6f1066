from unittest import TestCase
from unittest.mock import MagicMock, patch

import requests

from miniminer.challenge import ChallengeError
from miniminer.client import ChallengeClient, Submission


def make_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text

    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data

    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(str(status_code))

    return response


class ChallengeClientTests(TestCase):
    def setUp(self):
        patcher = patch("miniminer.client.client.requests.Session")
        self.session = patcher.start().return_value
        self.addCleanup(patcher.stop)

        self.client = ChallengeClient("https://example.com/", "secret", timeout=5)

    def test_endpoint(self):
        self.assertEqual(
            self.client.get_endpoint("problem"),
            "https://example.com/challenges/mini_miner/problem",
        )

    def test_get_challenge(self):
        self.session.get.return_value = make_response(
            json_data={"difficulty": 3, "block": {"nonce": None, "data": [["a", 1]]}}
        )

        challenge = self.client.get_challenge()

        self.assertEqual(challenge.difficulty, 3)
        self.assertEqual(challenge.block.data, (("a", 1),))
        self.session.get.assert_called_once_with(
            "https://example.com/challenges/mini_miner/problem",
            params={"access_token": "secret"},
            timeout=5,
        )

    def test_get_challenge_http_error(self):
        self.session.get.return_value = make_response(status_code=401)

        with self.assertRaises(requests.HTTPError):
            self.client.get_challenge()

    def test_get_challenge_bad_body(self):
        self.session.get.return_value = make_response(json_data=ValueError("bad"))

        with self.assertRaises(ChallengeError):
            self.client.get_challenge()

        self.session.get.return_value = make_response(json_data={"block": {}})

        with self.assertRaises(ChallengeError):
            self.client.get_challenge()

    def test_submit(self):
        self.session.post.return_value = make_response(text="correct")

        submission = self.client.submit(17)

        self.assertEqual(submission, Submission(ok=True, status_code=200, body="correct"))
        self.session.post.assert_called_once_with(
            "https://example.com/challenges/mini_miner/solve",
            params={"access_token": "secret"},
            json={"nonce": 17},
            timeout=5,
        )

    def test_submit_rejected(self):
        self.session.post.return_value = make_response(status_code=400, text="wrong")

        submission = self.client.submit(1)

        self.assertFalse(submission.ok)
        self.assertEqual(submission.body, "wrong")

    def test_requires_domain(self):
        with self.assertRaises(ValueError):
            ChallengeClient("", "secret")
