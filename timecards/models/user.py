from datetime import datetime

from sqlalchemy import Column, DateTime, String, func

from timecards.database import Base


class User(Base):
    """Owner directory for the manager view. The manager flag lives in the token, not here."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, server_default=func.current_timestamp()
    )
