import logging
from dataclasses import dataclass

from timecards.core.errors import AuthorizationError
from timecards.models.timecard import Timecard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller: a user id plus the manager flag from the token."""

    id: str
    is_manager: bool = False


def can_modify(principal: Principal, timecard: Timecard) -> bool:
    if principal.is_manager:
        return True
    return str(timecard.owner_id) == str(principal.id)


def ensure_can_modify(principal: Principal, timecard: Timecard) -> None:
    if not can_modify(principal, timecard):
        logger.warning(
            "Timecard access denied",
            extra={"timecard_id": timecard.id, "principal_id": principal.id},
        )
        raise AuthorizationError("User not authorized")


def ensure_manager(principal: Principal) -> None:
    if not principal.is_manager:
        logger.warning("Manager view denied", extra={"principal_id": principal.id})
        raise AuthorizationError("Not authorized")
