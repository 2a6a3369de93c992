from sqlalchemy import Boolean, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from outreach.db.session import Base
from outreach.models.common import TimestampMixin

class FormConfig(Base, TimestampMixin):
    __tablename__ = "form_configs"
    form_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Ordered list of field dicts. Field ids are the keys of stored submission data,
    # so renaming one orphans the values already collected under the old id.
    fields: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    submit_button_text: Mapped[str] = mapped_column(String(100), nullable=False, default="Submit")
    success_message: Mapped[str] = mapped_column(Text, nullable=False, default="Thank you! We'll be in touch soon.")
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
