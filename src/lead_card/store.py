"""JSON-lines storage for captured leads."""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from lead_card.models.lead import Lead, LeadSource

logger = logging.getLogger(__name__)


class LeadStore:
    """Append-only lead file, one JSON object per line.

    Leads are created and deleted, never edited.
    """

    def __init__(self, path: str | Path):
        """
        Args:
            path: File to store leads in. Created on first write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def add(self, lead: Lead) -> Lead:
        """Persist a new lead."""
        if self.get(lead.id) is not None:
            raise ValueError(f"Lead already exists: {lead.id}")

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(lead.model_dump_json() + "\n")

        logger.info("Stored %s lead %s for profile %s", lead.source.value, lead.id, lead.profile_id)
        return lead

    def submit(self, payload: dict[str, Any]) -> Lead:
        """
        Create a lead from a form submission.

        Args:
            payload: Submitted fields. ``profile_id`` and ``name`` are
                required; ``source`` defaults to FORM.

        Returns:
            The stored Lead.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        profile_id = payload.get("profile_id")
        name = payload.get("name")
        if not profile_id or not name:
            raise ValueError("Missing required fields")

        try:
            lead = Lead(
                profile_id=profile_id,
                name=name,
                email=payload.get("email") or None,
                phone=payload.get("phone") or None,
                notes=payload.get("notes") or None,
                source=payload.get("source") or LeadSource.FORM,
            )
        except ValidationError as e:
            raise ValueError(f"Invalid lead: {e}") from e

        return self.add(lead)

    def get(self, lead_id: str) -> Lead | None:
        for lead in self._read():
            if lead.id == lead_id:
                return lead
        return None

    def list_leads(self, profile_id: str | None = None) -> list[Lead]:
        """
        List stored leads, newest first.

        Args:
            profile_id: Only return leads of this profile.
        """
        leads = [
            lead for lead in self._read() if profile_id is None or lead.profile_id == profile_id
        ]
        return sorted(leads, key=lambda lead: lead.created_at, reverse=True)

    def delete(self, lead_id: str) -> bool:
        """
        Remove a lead.

        Returns:
            True if the lead existed.
        """
        leads = self._read()
        kept = [lead for lead in leads if lead.id != lead_id]
        if len(kept) == len(leads):
            return False

        self._path.write_text(
            "".join(lead.model_dump_json() + "\n" for lead in kept), encoding="utf-8"
        )
        logger.info("Deleted lead %s", lead_id)
        return True

    def _read(self) -> list[Lead]:
        if not self._path.exists():
            return []

        leads = []
        with self._path.open(encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    leads.append(Lead.model_validate_json(line))
                except ValidationError as e:
                    raise ValueError(f"Corrupt lead record at {self._path}:{line_no}") from e
        return leads
