from datetime import date

from sqlalchemy import Date, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from outreach.db.session import Base
from outreach.models.common import SerialIdMixin, TimestampMixin


class Event(Base, SerialIdMixin, TimestampMixin):
    __tablename__ = "events"
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    registration_type: Mapped[str] = mapped_column(String(20), nullable=False, default="none")
    registration_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    registration_fields: Mapped[list | None] = mapped_column(JSON, nullable=True)
    max_registrations: Mapped[int | None] = mapped_column(Integer, nullable=True)
