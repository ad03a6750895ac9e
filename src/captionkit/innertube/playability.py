"""Classify the player's playability status into retrieval errors."""

from enum import Enum
import logging

from ..exceptions import ErrorKind, TranscriptRetrievalError
from .player_data import PlayerData

logger = logging.getLogger(__name__)


class PlayabilityStatus(Enum):
    """Represent the status reported in the player data's playabilityStatus."""

    OK = "OK"
    ERROR = "ERROR"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"


class PlayabilityFailedReason(Enum):
    """Represent the playability reasons that map onto specific error kinds."""

    BOT_DETECTED = "Sign in to confirm you're not a bot"
    AGE_RESTRICTED = "This video may be inappropriate for some users."
    VIDEO_UNAVAILABLE = "This video is unavailable"


def _looks_like_url(video_id: str) -> bool:
    return video_id.startswith(("http://", "https://"))


def _sub_reasons(playability: PlayerData) -> list[str]:
    return playability.run_texts(
        "errorScreen", "playerErrorMessageRenderer", "subreason"
    )


def classify_playability(player_data: PlayerData, video_id: str) -> None:
    """Raise if the player data says the video cannot be played.

    A missing or non-string status and an OK status count as playable.

    Args:
        player_data: The decoded player response.
        video_id: The video the response belongs to.

    Raises:
        TranscriptRetrievalError: REQUEST_BLOCKED for bot detection,
            AGE_RESTRICTED, INVALID_VIDEO_ID when a URL was passed as id,
            VIDEO_UNAVAILABLE, or VIDEO_UNPLAYABLE for anything else.
    """
    playability = player_data.section("playabilityStatus")
    if playability is None:
        return

    status = playability.text("status")
    if status is None or status == PlayabilityStatus.OK.value:
        return

    reason = playability.text("reason")
    log_params = {"video_id": video_id, "status": status, "reason": reason}

    if status == PlayabilityStatus.LOGIN_REQUIRED.value:
        if reason == PlayabilityFailedReason.BOT_DETECTED.value:
            logger.debug("Player data reports bot detection.", extra=log_params)
            raise TranscriptRetrievalError(ErrorKind.REQUEST_BLOCKED, video_id)
        if reason == PlayabilityFailedReason.AGE_RESTRICTED.value:
            raise TranscriptRetrievalError(ErrorKind.AGE_RESTRICTED, video_id)

    if (
        status == PlayabilityStatus.ERROR.value
        and reason == PlayabilityFailedReason.VIDEO_UNAVAILABLE.value
    ):
        if _looks_like_url(video_id):
            raise TranscriptRetrievalError(ErrorKind.INVALID_VIDEO_ID, video_id)
        raise TranscriptRetrievalError(ErrorKind.VIDEO_UNAVAILABLE, video_id)

    logger.debug("Video is unplayable.", extra=log_params)
    raise TranscriptRetrievalError(
        ErrorKind.VIDEO_UNPLAYABLE,
        video_id,
        reason=reason,
        sub_reasons=_sub_reasons(playability),
    )
