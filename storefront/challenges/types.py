"""
Type definitions for challenges and the completion flow.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChallengeState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    GENERATING = "generating"
    AWAITING_SUBMISSION = "awaiting_submission"
    COMPLETED = "completed"


class FlowSignal(str, Enum):
    """What the page should do after a fetch."""
    SHOW_TOOL = "show_tool"
    REDIRECT_COMPLETED = "redirect_completed"  # back to the challenge archive
    NOT_FOUND = "not_found"


class EntryAction(str, Enum):
    """What clicking a challenge card in the list does."""
    OPEN_TOOL = "open_tool"
    SHOW_IMAGE = "show_image"
    NONE = "none"


@dataclass
class Challenge:
    """A drawing challenge as returned by the challenges endpoint."""
    id: Any
    title: str
    description: str | None = None
    instructions: str | None = None
    is_completed: bool = False
    generated_image_url: str | None = None
    image_url: str | None = None
    thumbnail_url: str | None = None


@dataclass
class GeneratedImage:
    """Reference to an image produced by the generation tool."""
    url: str
    path: str | None = None
    image_id: int | None = None
