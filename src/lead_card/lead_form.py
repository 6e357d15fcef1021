"""Lead capture form state."""

from dataclasses import dataclass

from lead_card.models.lead import CardFields, Lead, LeadSource

OCR_NOTE = "[OCR Scanned]"


@dataclass
class LeadForm:
    """Editable lead details awaiting confirmation.

    Values are plain strings, empty when not filled in, matching what a
    person types into the form.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    notes: str = ""
    source: LeadSource = LeadSource.MANUAL

    def apply_scan(self, fields: CardFields) -> None:
        """
        Pre-fill the form from a successful card scan.

        Fields the scan could not find keep whatever was already entered.
        The form is marked as OCR-sourced and the notes are annotated.

        Args:
            fields: Fields extracted from the card.
        """
        self.name = fields.name or self.name
        self.email = fields.email or self.email
        self.phone = fields.phone or self.phone
        self.source = LeadSource.OCR
        self.notes = f"{self.notes}\n{OCR_NOTE}" if self.notes else OCR_NOTE

    def reset(self) -> None:
        """Clear the form back to an empty manual entry."""
        self.name = ""
        self.email = ""
        self.phone = ""
        self.notes = ""
        self.source = LeadSource.MANUAL

    def to_lead(self, profile_id: str) -> Lead:
        """
        Confirm the form into a lead record.

        Args:
            profile_id: Profile that captured the lead.

        Returns:
            New Lead.

        Raises:
            ValueError: If no name has been entered.
        """
        if not self.name.strip():
            raise ValueError("At least a name is required.")

        return Lead(
            profile_id=profile_id,
            name=self.name.strip(),
            email=self.email.strip() or None,
            phone=self.phone.strip() or None,
            notes=self.notes or None,
            source=self.source,
        )
