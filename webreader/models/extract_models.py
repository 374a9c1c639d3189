"""Request and response models for the extract endpoint."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ExtractRequest(BaseModel):
    """Body of POST /api/extract.

    Both fields are optional at the schema level so that a missing field is
    reported with the endpoint's own 400 error rather than a 422. Non-string
    JSON values are accepted: empty ones (0, false, [], {}) count as missing
    and the rest are converted to strings.
    """

    url: str | None = Field(default=None, description="Page to read")
    question: str | None = Field(default=None, description="Question about the page")

    @field_validator("url", "question", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if not value:
            return None
        return str(value)

    def is_complete(self) -> bool:
        """Check that both url and question are present and non-empty."""
        return bool(self.url) and bool(self.question)


class ExtractResponse(BaseModel):
    """Successful answer."""

    answer: str


class ErrorResponse(BaseModel):
    """Error body returned with 4xx/5xx statuses."""

    error: str
    details: str | None = Field(
        default=None, description="Provider message for backend failures"
    )
