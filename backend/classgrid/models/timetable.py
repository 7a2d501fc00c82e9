import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from classgrid.db.base import Base


class Timetable(Base):
    __tablename__ = "timetables"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    year: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    branch: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    semester: Mapped[str] = mapped_column(String(5), index=True, nullable=False)
    form_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    entries: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
