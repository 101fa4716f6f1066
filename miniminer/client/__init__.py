from .client import ChallengeClient, Submission
