"""Abstract base class for OCR backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class OCRBox:
    """Single recognised text line with position."""

    text: str
    """Detected text content."""

    confidence: float
    """Confidence score (0.0-1.0)."""

    bbox: tuple[float, float, float, float]
    """Bounding box as (x_min, y_min, x_max, y_max)."""


@dataclass
class OCRResult:
    """Result from OCR processing."""

    text: str
    """Recognised lines joined with newlines."""

    confidence: float
    """Average confidence score (0.0-1.0)."""

    boxes: list[OCRBox] = field(default_factory=list)
    """Recognised lines with positions, in reading order."""

    @classmethod
    def from_boxes(cls, boxes: list[OCRBox]) -> "OCRResult":
        """Build a result whose text is one line per box."""
        if not boxes:
            return cls(text="", confidence=0.0, boxes=[])

        avg_confidence = sum(box.confidence for box in boxes) / len(boxes)
        return cls(
            text="\n".join(box.text for box in boxes),
            confidence=float(avg_confidence),
            boxes=list(boxes),
        )


class OCRBackend(ABC):
    """Abstract base class for OCR backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this OCR backend."""
        ...

    @abstractmethod
    def extract(self, image_path: str | Path) -> OCRResult:
        """
        Extract text from an image.

        Args:
            image_path: Path to the image file.

        Returns:
            OCRResult containing extracted text and metadata.

        Raises:
            FileNotFoundError: If the image file does not exist.
            ValueError: If the image cannot be processed.
        """
        ...
