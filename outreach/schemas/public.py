from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any


class PublicSubmission(BaseModel):
    """Body of a public form submit or event registration."""

    model_config = ConfigDict(populate_by_name=True)

    data: Dict[str, Any] = Field(default_factory=dict)
    # Decoy input rendered off-screen; humans leave it empty.
    honeypot: Any = Field(default=None, alias="_honeypot")


class SubmitResult(BaseModel):
    success: bool = True
    message: str
    submission_id: int


class RegistrationCount(BaseModel):
    count: int
