"""Schemas for certificate API."""

from datetime import datetime

from pydantic import Field

from learnhub.shared.schemas import CamelModel


class Certificate(CamelModel):
    """Immutable proof of course completion."""

    id: str
    user_id: str
    course_id: str
    course_name: str = Field(..., description="Course title at issuance time")
    completed_at: datetime
    score: float | None = None


class CertificateRequest(CamelModel):
    """Schema for requesting a certificate."""

    user_id: str = Field(..., min_length=1)
    score: float | None = None


class CertificateCreated(CamelModel):
    """Schema for certificate issuance response."""

    id: str
