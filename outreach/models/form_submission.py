from sqlalchemy import ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from outreach.db.session import Base
from outreach.models.common import SerialIdMixin, TimestampMixin

SUBMISSION_STATUSES = ("new", "read", "replied", "archived")

class FormSubmission(Base, SerialIdMixin, TimestampMixin):
    __tablename__ = "form_submissions"
    form_type: Mapped[str] = mapped_column(String(50), ForeignKey("form_configs.form_type"), nullable=False, index=True)
    data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new", index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
