from unittest import TestCase

from miniminer.challenge import Block, Challenge, ChallengeError
from miniminer.utils import get_digest, is_valid_hash

CHALLENGE_DATA = {
    "difficulty": 8,
    "block": {"nonce": None, "data": [["a", 1], ["b", "x"]]},
}


class BlockTests(TestCase):
    def test_payload(self):
        block = Block([["a", 1], ["b", "x"]])

        self.assertEqual(block.data, (("a", 1), ("b", "x")))
        self.assertEqual(
            block.get_payload(0), '{"data":[["a",1],["b","x"]],"nonce":0}'
        )

        with self.assertRaises(ValueError):
            block.get_payload()

    def test_malformed_data(self):
        for data in (
            [["a"]],
            [["a", 1, 2]],
            [[1, "a"]],
            [["a", 1.5]],
            [["a", None]],
            "a",
        ):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    Block(data)

    def test_dict(self):
        block = Block.from_dict({"nonce": 3, "data": [["a", 1]]})

        self.assertEqual(block.nonce, 3)
        self.assertEqual(block.to_dict(), {"nonce": 3, "data": [["a", 1]]})


class ChallengeTests(TestCase):
    def test_solve(self):
        challenge = Challenge.from_dict(CHALLENGE_DATA)

        nonce = challenge.solve()

        self.assertEqual(challenge.block.nonce, nonce)
        self.assertTrue(challenge.verify(nonce))

        # Independent re-check of the answer
        digest = get_digest(challenge.block.get_payload(nonce))
        self.assertTrue(is_valid_hash(digest, 8))

        for j in range(nonce):
            self.assertFalse(challenge.verify(j))

    def test_solve_with_workers(self):
        serial = Challenge.from_dict(CHALLENGE_DATA).solve()
        parallel = Challenge.from_dict(CHALLENGE_DATA).solve(workers=3)

        self.assertEqual(serial, parallel)

    def test_trivial(self):
        challenge = Challenge(0, Block([("a", 1), ("b", "x")]))

        self.assertEqual(challenge.solve(), 0)
        self.assertEqual(
            challenge.to_dict(),
            {"difficulty": 0, "block": {"nonce": 0, "data": [["a", 1], ["b", "x"]]}},
        )

    def test_unsatisfiable_verify(self):
        challenge = Challenge(257, Block([("a", 1)]))

        self.assertFalse(challenge.verify(0))

    def test_invalid_challenges(self):
        for data in (
            [],
            {},
            {"difficulty": 1},
            {"difficulty": "1", "block": {"data": []}},
            {"difficulty": -1, "block": {"data": []}},
            {"difficulty": 1, "block": []},
            {"difficulty": 1, "block": {"nonce": 0}},
            {"difficulty": 1, "block": {"data": [["a"]]}},
        ):
            with self.subTest(data=data):
                with self.assertRaises(ChallengeError):
                    Challenge.from_dict(data)
