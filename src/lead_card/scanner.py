"""Business card scanner: OCR followed by field extraction."""

import asyncio
import logging
import time
from pathlib import Path

from lead_card.extractor.base import Extractor
from lead_card.extractor.heuristic import HeuristicExtractor
from lead_card.models.lead import CardFields, ScanMetadata, ScanResult
from lead_card.ocr.base import OCRBackend

logger = logging.getLogger(__name__)

SCAN_SUCCEEDED = "Card details extracted!"
SCAN_FAILED = "Failed to read card. Please enter manually."


class CardScanner:
    """Turns a card image into pre-fill fields for the lead form."""

    def __init__(self, ocr: OCRBackend, extractor: Extractor | None = None):
        """
        Initialize the scanner with OCR and extractor backends.

        Args:
            ocr: OCR backend for text extraction.
            extractor: Field extractor. Defaults to HeuristicExtractor.
        """
        self._ocr = ocr
        self._extractor = extractor or HeuristicExtractor()

    def scan(self, image_path: str | Path) -> ScanResult:
        """
        Scan a business card image.

        OCR failures do not propagate. They produce a result with empty
        fields, ``ok=False`` and a notice asking the user to type the
        details in.

        Args:
            image_path: Path to the business card image.

        Returns:
            ScanResult with the extracted fields and a user-facing notice.
        """
        start_time = time.perf_counter()

        try:
            ocr_result = self._ocr.extract(image_path)
        except Exception as e:
            logger.warning("OCR failed for %s: %s", image_path, e)
            return ScanResult(fields=CardFields(), ok=False, notice=SCAN_FAILED, error=str(e))

        return self._finish(ocr_result.text, start_time)

    def scan_text(self, raw_text: str) -> ScanResult:
        """Extract fields from text that has already been recognised."""
        return self._finish(raw_text, time.perf_counter(), ocr_backend="text")

    def scan_ocr_only(self, image_path: str | Path) -> str:
        """
        Run only OCR on the image, without field extraction.

        Useful for debugging or checking OCR quality.

        Args:
            image_path: Path to the business card image.

        Returns:
            Raw OCR text.
        """
        return self._ocr.extract(image_path).text

    async def scan_async(self, image_path: str | Path) -> ScanResult:
        """Run :meth:`scan` in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(self.scan, image_path)

    def _finish(
        self, raw_text: str, start_time: float, ocr_backend: str | None = None
    ) -> ScanResult:
        fields = self._extractor.extract(raw_text)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if fields.is_empty:
            logger.info("No contact fields found in OCR text")

        return ScanResult(
            fields=fields,
            raw_text=raw_text,
            ok=True,
            notice=SCAN_SUCCEEDED,
            metadata=ScanMetadata(
                ocr_backend=ocr_backend or self._ocr.name,
                extractor_backend=self._extractor.name,
                processing_time_ms=round(elapsed_ms, 2),
            ),
        )
