"""Pydantic models for transactional email."""

from pydantic import BaseModel, Field, model_validator


class EmailRecipient(BaseModel):
    email: str = Field(..., min_length=1)
    name: str | None = None


class EmailRequest(BaseModel):
    to: list[EmailRecipient] = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    html: str | None = None
    text: str | None = None

    @model_validator(mode="after")
    def requires_content(self) -> "EmailRequest":
        if not self.html and not self.text:
            raise ValueError("html or text content is required")
        return self
