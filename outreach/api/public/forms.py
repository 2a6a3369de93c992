from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from outreach.db.session import get_db
from outreach.schemas.public import PublicSubmission, SubmitResult
from outreach.services.form_configs import get_enabled_form_config, serialize_form_config
from outreach.services.rate_limit import enforce_public_submit_limit
from outreach.services.submission_mail import notify_submission
from outreach.services.submissions import submit_form

router = APIRouter()


@router.get("/{form_type}")
def get_form(form_type: str, db: Session = Depends(get_db)):
    row = get_enabled_form_config(db, form_type)
    data = serialize_form_config(row)
    data.pop("created_at", None)
    data.pop("updated_at", None)
    return data


@router.post("/{form_type}/submissions", response_model=SubmitResult)
def submit(
    form_type: str,
    payload: PublicSubmission,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    enforce_public_submit_limit(request, "forms")
    outcome = submit_form(db, form_type, payload.data, payload.honeypot)
    if outcome.stored:
        background_tasks.add_task(
            notify_submission, form_type.strip().lower(), outcome.record, outcome.reference_id, outcome.message
        )
    return outcome.response()
