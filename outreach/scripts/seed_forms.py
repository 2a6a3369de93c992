from __future__ import annotations

from sqlalchemy.orm import Session

from outreach.data.default_forms import DEFAULT_FORM_CONFIGS, DEFAULT_SETTINGS
from outreach.db.session import SessionLocal
from outreach.models.form_config import FormConfig
from outreach.models.setting import Setting
from outreach.schemas.forms import FormFieldSpec


def seed_default_form_configs(db: Session, configs: list[dict] | None = None) -> tuple[int, int]:
    """Insert the default form configs that are missing.

    Existing rows are never touched, so admin edits survive re-runs.
    """
    created = 0
    skipped = 0

    for item in DEFAULT_FORM_CONFIGS if configs is None else configs:
        form_type = str(item["form_type"]).strip().lower()
        if db.get(FormConfig, form_type) is not None:
            skipped += 1
            continue
        fields = [FormFieldSpec.model_validate(f).to_storage() for f in item.get("fields") or []]
        db.add(
            FormConfig(
                form_type=form_type,
                title=str(item["title"]).strip(),
                description=item.get("description"),
                fields=fields,
                submit_button_text=str(item.get("submit_button_text") or "Submit"),
                success_message=str(item.get("success_message") or "Thank you! We'll be in touch soon."),
                enabled=bool(item.get("enabled", True)),
            )
        )
        created += 1

    for key, value in DEFAULT_SETTINGS.items():
        if db.get(Setting, key) is None:
            db.add(Setting(key=key, value=value))

    db.commit()
    return created, skipped


def main() -> None:
    db = SessionLocal()
    try:
        created, skipped = seed_default_form_configs(db)
        total = db.query(FormConfig).count()
    finally:
        db.close()
    print(f"form configs seed done: created={created}, skipped={skipped}, total={total}")


if __name__ == "__main__":
    main()
