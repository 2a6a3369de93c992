from sqlalchemy import ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from outreach.db.session import Base
from outreach.models.common import SerialIdMixin, TimestampMixin

REGISTRATION_STATUSES = ("confirmed", "waitlisted", "cancelled")

class EventRegistration(Base, SerialIdMixin, TimestampMixin):
    __tablename__ = "event_registrations"
    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="confirmed", index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
