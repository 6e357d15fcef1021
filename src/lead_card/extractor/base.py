"""Abstract base class for field extractors."""

from abc import ABC, abstractmethod

from lead_card.models.lead import CardFields


class Extractor(ABC):
    """Abstract base class for turning OCR text into card fields."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this extractor."""
        ...

    @abstractmethod
    def extract(self, ocr_text: str) -> CardFields:
        """
        Extract contact fields from OCR text.

        Args:
            ocr_text: Raw text extracted from OCR, one line per text line.

        Returns:
            CardFields with whatever could be extracted. Fields that could
            not be found are None.
        """
        ...
