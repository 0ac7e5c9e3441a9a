"""Challenge module: completion flow and list helpers."""

from .flow import (
    ChallengeCompletionFlow,
    ChallengeSubmissionError,
    challenge_entry_action,
    parse_challenge,
)
from .types import (
    Challenge,
    ChallengeState,
    EntryAction,
    FlowSignal,
    GeneratedImage,
)

__all__ = [
    "ChallengeCompletionFlow",
    "ChallengeSubmissionError",
    "challenge_entry_action",
    "parse_challenge",
    "Challenge",
    "ChallengeState",
    "EntryAction",
    "FlowSignal",
    "GeneratedImage",
]
