from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Index, String, false, func

from timecards.database import Base


class Timecard(Base):
    __tablename__ = "timecards"
    __table_args__ = (
        # Non-unique: duplicate weeks are allowed.
        Index("ix_timecards_owner_id_week_start_date", "owner_id", "week_start_date"),
    )

    id = Column(String, primary_key=True, index=True)

    # Not a foreign key: users are owned by the auth side and may be absent.
    owner_id = Column(String, nullable=False, index=True)

    week_start_date = Column(DateTime, nullable=False, index=True)

    # List of {"day", "jobName", "startTime", "endTime", "description"} dicts.
    entries = Column(JSON, nullable=False, default=list)

    total_hours = Column(Float, nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, server_default=func.current_timestamp()
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        server_default=func.current_timestamp(),
    )
