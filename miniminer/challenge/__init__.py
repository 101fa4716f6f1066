from .block import Block
from .challenge import Challenge, ChallengeError
