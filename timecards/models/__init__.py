from timecards.models.timecard import Timecard
from timecards.models.user import User

__all__ = [
    "Timecard",
    "User",
]
