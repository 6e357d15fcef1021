"""Business card scanning and lead capture."""

from lead_card.extractor.heuristic import classify
from lead_card.lead_form import LeadForm
from lead_card.models.lead import CardFields, Lead, LeadSource
from lead_card.scanner import CardScanner

__version__ = "0.1.0"
__all__ = ["CardFields", "CardScanner", "Lead", "LeadForm", "LeadSource", "classify"]
