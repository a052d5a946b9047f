from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timecards.core.errors import StoreError
from timecards.models.timecard import Timecard
from timecards.models.user import User


class TimecardStore:
    """
    Persistence for timecards over a caller-owned session.

    Each mutating call commits on its own; nothing spans more than one
    statement group. Any SQLAlchemy failure rolls the session back and
    surfaces as StoreError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(detail=f"{action}: {exc}") from exc

    def find_by_owner(self, owner_id: str) -> List[Timecard]:
        with self._guard("find_by_owner"):
            return (
                self.db.query(Timecard)
                .filter(Timecard.owner_id == str(owner_id))
                .order_by(Timecard.week_start_date.desc())
                .all()
            )

    def find_by_id(self, timecard_id: str) -> Optional[Timecard]:
        with self._guard("find_by_id"):
            return self.db.get(Timecard, str(timecard_id))

    def find_all(self) -> List[Timecard]:
        with self._guard("find_all"):
            return self.db.query(Timecard).all()

    def find_all_with_owner(self) -> List[Tuple[Timecard, Optional[str], Optional[str]]]:
        """Every timecard with its owner's name and email, by owner then newest week first."""
        with self._guard("find_all_with_owner"):
            rows = (
                self.db.query(Timecard, User.name, User.email)
                .outerjoin(User, User.id == Timecard.owner_id)
                .order_by(Timecard.owner_id.asc(), Timecard.week_start_date.desc())
                .all()
            )
            return [(row[0], row[1], row[2]) for row in rows]

    def find_one_in_window(self, owner_id: str, start: datetime, end: datetime) -> Optional[Timecard]:
        with self._guard("find_one_in_window"):
            return (
                self.db.query(Timecard)
                .filter(
                    Timecard.owner_id == str(owner_id),
                    Timecard.week_start_date >= start,
                    Timecard.week_start_date <= end,
                )
                .first()
            )

    def insert(self, timecard: Timecard) -> Timecard:
        with self._guard("insert"):
            if timecard.id is None:
                timecard.id = str(uuid4())
            self.db.add(timecard)
            self.db.commit()
            self.db.refresh(timecard)
            return timecard

    def save(self, timecard: Timecard) -> Timecard:
        with self._guard("save"):
            self.db.add(timecard)
            self.db.commit()
            self.db.refresh(timecard)
            return timecard

    def delete_by_id(self, timecard_id: str) -> None:
        with self._guard("delete_by_id"):
            self.db.query(Timecard).filter(Timecard.id == str(timecard_id)).delete(synchronize_session=False)
            self.db.commit()
