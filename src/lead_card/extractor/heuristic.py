"""Regex-based name/email/phone extraction from business card text."""

import re

from lead_card.extractor.base import Extractor
from lead_card.models.lead import CardFields

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Digits are ASCII only; \s also accepts Unicode spaces such as NBSP
PHONE_PATTERN = re.compile(
    r"(\+?[0-9]{1,4}[-.\s]?)?(\(?[0-9]{3}\)?[-.\s]?)?[0-9]{3}[-.\s]?[0-9]{4}"
)
# Postal codes, IDs and phone fragments disqualify a line from being a name
DIGIT_RUN_PATTERN = re.compile(r"[0-9]{5,}")

MIN_LINE_LENGTH = 3


def _candidate_lines(raw_text: str) -> list[str]:
    """Split OCR text into trimmed lines, dropping short noise."""
    lines = (line.strip() for line in raw_text.split("\n"))
    return [line for line in lines if len(line) >= MIN_LINE_LENGTH]


def classify(raw_text: str) -> CardFields:
    """
    Guess name, email and phone from OCR text in a single pass.

    Each field is taken from the first line that qualifies for it, top to
    bottom. A line that yields the email is not considered for anything else.
    Once a field is set it is never overwritten.

    Args:
        raw_text: Newline-separated OCR output for one card image.

    Returns:
        CardFields; fields with no qualifying line are None.
    """
    name = email = phone = None

    for line in _candidate_lines(raw_text):
        email_match = EMAIL_PATTERN.search(line)
        phone_match = PHONE_PATTERN.search(line)

        if email is None and email_match:
            email = email_match.group(0)
        elif phone is None and phone_match:
            phone = phone_match.group(0)
        elif name is None and "@" not in line and not DIGIT_RUN_PATTERN.search(line):
            name = line

        if name is not None and email is not None and phone is not None:
            break

    return CardFields(name=name, email=email, phone=phone)


class HeuristicExtractor(Extractor):
    """Extractor backed by :func:`classify`."""

    @property
    def name(self) -> str:
        return "heuristic"

    def extract(self, ocr_text: str) -> CardFields:
        return classify(ocr_text)
