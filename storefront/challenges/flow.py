"""
Challenge completion flow.

Coordinates a single challenge through fetch, image generation, submission
and completion:

    LOADING -> READY -> GENERATING -> AWAITING_SUBMISSION -> COMPLETED

A challenge that is already completed when fetched goes straight to
COMPLETED and can never re-enter generation. A rejected submission keeps
the flow in AWAITING_SUBMISSION with the generated image, so the user can
retry without generating again.
"""

import logging
from typing import Any

import httpx
import sentry_sdk

from storefront.api import error_message
from storefront.content.envelope import first_key, normalize_one

from .types import (
    Challenge,
    ChallengeState,
    EntryAction,
    FlowSignal,
    GeneratedImage,
)

logger = logging.getLogger(__name__)


class ChallengeSubmissionError(Exception):
    """Raised when the backend does not confirm completion. The message is user-visible."""
    pass


def parse_challenge(record: Any) -> Challenge | None:
    """Build a Challenge from a backend record, or None if it has no id."""
    if not isinstance(record, dict) or record.get("id") is None:
        return None

    return Challenge(
        id=record["id"],
        title=record.get("title") or "",
        description=record.get("description"),
        instructions=record.get("instructions"),
        is_completed=bool(first_key(record, "is_completed", "isCompleted")),
        generated_image_url=first_key(record, "generated_image_url", "generatedImageUrl"),
        image_url=first_key(record, "image_url", "imageUrl"),
        thumbnail_url=first_key(record, "thumbnail_url", "thumbnailUrl"),
    )


def challenge_entry_action(challenge: Challenge) -> EntryAction:
    """What a click on a challenge card should do.

    Completed challenges show their generated image (if any); open ones go
    to the generation tool.
    """
    if not challenge.is_completed:
        return EntryAction.OPEN_TOOL
    if challenge.generated_image_url:
        return EntryAction.SHOW_IMAGE
    return EntryAction.NONE


class ChallengeCompletionFlow:
    """Caller-owned state for one challenge on the generation tool page."""

    def __init__(self, challenge_id: Any = None):
        self.challenge_id = challenge_id
        self.state = ChallengeState.LOADING
        self.challenge: Challenge | None = None
        self.image: GeneratedImage | None = None

    @property
    def not_started(self) -> bool:
        return (
            self.state == ChallengeState.READY
            and self.challenge is not None
            and not self.challenge.is_completed
        )

    @property
    def is_completed(self) -> bool:
        return self.state == ChallengeState.COMPLETED

    def fetched(self, envelope: Any) -> FlowSignal:
        """
        Apply a fetched challenge response, replacing any prior state.

        A flow already COMPLETED stays completed when the same challenge
        comes back with a stale not-completed record.

        Returns:
            REDIRECT_COMPLETED if the challenge is already completed,
            SHOW_TOOL if it can be attempted, NOT_FOUND if the response
            holds no challenge
        """
        challenge = parse_challenge(normalize_one(envelope))

        # Completion reached locally is kept over a stale record of the same challenge
        if (
            self.state == ChallengeState.COMPLETED
            and challenge is not None
            and self.challenge is not None
            and challenge.id == self.challenge.id
            and not challenge.is_completed
        ):
            logger.info(f"Ignoring stale record for completed challenge {challenge.id}")
            return FlowSignal.REDIRECT_COMPLETED

        self.challenge = challenge
        self.image = None

        if challenge is None:
            logger.warning(f"Challenge {self.challenge_id} not found in response")
            self.state = ChallengeState.LOADING
            return FlowSignal.NOT_FOUND

        self.challenge_id = challenge.id

        if challenge.is_completed:
            if challenge.generated_image_url:
                self.image = GeneratedImage(url=challenge.generated_image_url)
            self.state = ChallengeState.COMPLETED
            logger.info(f"Challenge {challenge.id} already completed, redirecting")
            return FlowSignal.REDIRECT_COMPLETED

        self.state = ChallengeState.READY
        return FlowSignal.SHOW_TOOL

    async def fetch(self, client, challenge_id: Any = None) -> FlowSignal:
        """Fetch the challenge through the backend client and apply it."""
        target_id = self.challenge_id if challenge_id is None else challenge_id

        # State is untouched until a response arrives
        try:
            envelope = await client.get_challenge(target_id)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching challenge {target_id}: {e}")
            raise

        self.challenge_id = target_id
        return self.fetched(envelope)

    def begin_generation(self) -> bool:
        """Enter GENERATING. No-op (False) unless the challenge is not started."""
        if not self.not_started:
            logger.info(f"Ignoring generation request in state {self.state.value}")
            return False
        self.state = ChallengeState.GENERATING
        return True

    def generation_failed(self) -> bool:
        """Return from GENERATING to READY after a failed or cancelled tool run.

        No-op (False) in any other state.
        """
        if self.state != ChallengeState.GENERATING:
            return False
        logger.info(f"Generation for challenge {self.challenge_id} failed, ready to retry")
        self.state = ChallengeState.READY
        return True

    def generated(
        self, image_url: str, image_path: str | None = None, image_id: int | None = None
    ) -> bool:
        """
        Record a successfully generated image and wait for submission.

        Returns:
            True if the flow moved to AWAITING_SUBMISSION, False if the
            event was ignored (wrong state or empty image URL)
        """
        if not (self.not_started or self.state == ChallengeState.GENERATING):
            logger.info(f"Ignoring generated image in state {self.state.value}")
            return False
        if not image_url:
            logger.warning("Generation event without an image URL, ignoring")
            return False

        self.image = GeneratedImage(url=image_url, path=image_path, image_id=image_id)
        self.state = ChallengeState.AWAITING_SUBMISSION
        return True

    async def submit(self, client) -> bool:
        """
        Submit the generated image and mark the challenge completed.

        Returns:
            True once the backend confirms completion, False if there is
            nothing to submit in the current state

        Raises:
            ChallengeSubmissionError: If the backend rejects the completion.
                The flow stays in AWAITING_SUBMISSION with the image kept.
        """
        if self.state != ChallengeState.AWAITING_SUBMISSION or self.image is None:
            logger.info(f"Nothing to submit in state {self.state.value}")
            return False

        try:
            body = await client.complete_challenge(
                self.challenge.id,
                image_id=self.image.image_id,
                generated_image_url=self.image.url,
                generated_image_path=self.image.path,
            )
        except httpx.HTTPError as e:
            logger.error(f"Error completing challenge {self.challenge.id}: {e}")
            sentry_sdk.capture_exception(e)
            raise ChallengeSubmissionError(
                error_message(e) or "Failed to complete challenge"
            ) from e

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            logger.error(f"Challenge {self.challenge.id} completion rejected: {message}")
            raise ChallengeSubmissionError(message or "Failed to complete challenge")

        self.challenge.is_completed = True
        self.challenge.generated_image_url = self.image.url
        self.state = ChallengeState.COMPLETED
        logger.info(f"Challenge {self.challenge.id} completed")
        return True
