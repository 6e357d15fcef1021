"""Pydantic models for scanned card fields and captured leads."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class LeadSource(str, Enum):
    """How a lead was captured."""

    MANUAL = "MANUAL"
    FORM = "FORM"
    OCR = "OCR"


class CardFields(BaseModel):
    """Best-effort contact fields guessed from OCR text."""

    name: str | None = Field(default=None, description="First line that looks like a name")
    email: str | None = Field(default=None, description="First email address found")
    phone: str | None = Field(default=None, description="First phone number found")
    source: Literal[LeadSource.OCR] = Field(
        default=LeadSource.OCR, description="Always OCR for machine-extracted fields"
    )

    @property
    def is_empty(self) -> bool:
        """True when nothing could be extracted."""
        return self.name is None and self.email is None and self.phone is None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Lead(BaseModel):
    """A captured contact attributed to a profile."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Lead identifier")
    profile_id: str = Field(min_length=1, description="Owning profile")
    name: str = Field(min_length=1, description="Contact name")
    email: str | None = Field(default=None, description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    notes: str | None = Field(default=None, description="Free-text notes")
    source: LeadSource = Field(default=LeadSource.FORM, description="Capture source")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation time (UTC)")


class ScanMetadata(BaseModel):
    """Processing metadata."""

    ocr_backend: str = Field(description="OCR backend used")
    extractor_backend: str = Field(description="Field extractor used")
    processing_time_ms: float = Field(description="Total processing time in ms")


class ScanResult(BaseModel):
    """Outcome of scanning one card image."""

    fields: CardFields = Field(default_factory=CardFields, description="Extracted fields")
    raw_text: str = Field(default="", description="Raw OCR text for reference")
    ok: bool = Field(default=True, description="False when the OCR step failed")
    notice: str = Field(default="", description="Message to show the user")
    error: str | None = Field(default=None, description="Why the OCR step failed")
    metadata: ScanMetadata | None = Field(default=None, description="Processing metadata")
