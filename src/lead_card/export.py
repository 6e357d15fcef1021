"""Lead export to vCard, CSV and JSON."""

import csv
import io
import json

from lead_card.models.lead import Lead

CSV_FIELDS = ["id", "profile_id", "name", "email", "phone", "notes", "source", "created_at"]


def _escape(value: str) -> str:
    """Escape a vCard 3.0 text value."""
    return (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace(",", "\\,")
        .replace(";", "\\;")
    )


def lead_to_vcard(lead: Lead) -> str:
    """Render one lead as a vCard 3.0 entry."""
    name = _escape(lead.name)
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"FN:{name}",
        f"N:{name};;;;",
        f"TEL;TYPE=CELL:{lead.phone}" if lead.phone else "",
        f"EMAIL;TYPE=WORK:{lead.email}" if lead.email else "",
        f"NOTE:{_escape(lead.notes)}" if lead.notes else "",
        "END:VCARD",
    ]
    return "\n".join(line for line in lines if line)


def leads_to_vcard(leads: list[Lead]) -> str:
    return "\n".join(lead_to_vcard(lead) for lead in leads) + ("\n" if leads else "")


def leads_to_csv(leads: list[Lead]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for lead in leads:
        row = lead.model_dump(mode="json")
        writer.writerow({k: row.get(k) or "" for k in CSV_FIELDS})
    return output.getvalue()


def leads_to_json(leads: list[Lead]) -> str:
    return json.dumps(
        [lead.model_dump(mode="json") for lead in leads], indent=2, ensure_ascii=False
    )
