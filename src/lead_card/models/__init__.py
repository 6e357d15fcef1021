"""Data models for scanned cards and leads."""

from lead_card.models.lead import (
    CardFields,
    Lead,
    LeadSource,
    ScanMetadata,
    ScanResult,
)

__all__ = [
    "CardFields",
    "Lead",
    "LeadSource",
    "ScanMetadata",
    "ScanResult",
]
