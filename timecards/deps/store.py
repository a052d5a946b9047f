from fastapi import Depends
from sqlalchemy.orm import Session

from timecards.database import get_db
from timecards.repositories.timecard_store import TimecardStore


def get_store(db: Session = Depends(get_db)) -> TimecardStore:
    return TimecardStore(db)
