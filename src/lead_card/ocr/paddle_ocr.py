"""PaddleOCR backend implementation."""

import logging
import os
from pathlib import Path

from paddleocr import PaddleOCR

from lead_card.ocr.base import OCRBackend, OCRBox, OCRResult
from lead_card.preprocessing import CardCropper, load_image

logger = logging.getLogger(__name__)


# Disable OneDNN/MKLDNN to avoid PIR compatibility issues with PaddlePaddle 3.x
# See: https://github.com/PaddlePaddle/PaddleOCR/discussions/17350
os.environ.setdefault("FLAGS_use_mkldnn", "0")


class PaddleOCRBackend(OCRBackend):
    """OCR backend using PaddleOCR."""

    def __init__(self, lang: str = "en", auto_crop: bool = True):
        """
        Initialize PaddleOCR backend.

        Args:
            lang: PaddleOCR language code. Default is "en" for English.
            auto_crop: Crop the card out of the photo before recognition.
        """
        self._lang = lang
        self._cropper = CardCropper() if auto_crop else None
        self._ocr = PaddleOCR(lang=lang, enable_mkldnn=False)

    @property
    def name(self) -> str:
        return f"paddleocr:{self._lang}"

    def extract(self, image_path: str | Path) -> OCRResult:
        """Extract text from an image using PaddleOCR."""
        img = load_image(image_path)
        if self._cropper:
            img = self._cropper.crop(img)

        result = self._ocr.predict(img)
        if not result or not result[0]:
            return OCRResult(text="", confidence=0.0, boxes=[])

        # PaddleOCR 3.x returns one result per input with rec_texts, rec_scores, rec_polys
        page = result[0]
        texts = page.get("rec_texts", [])
        scores = page.get("rec_scores", [])
        polys = page.get("rec_polys", [])

        boxes = []
        for text, score, poly in zip(texts, scores, polys):
            points = poly.tolist() if hasattr(poly, "tolist") else poly
            xs = [p[0] for p in points]
            ys = [p[1] for p in points]
            boxes.append(
                OCRBox(
                    text=text,
                    confidence=float(score),
                    bbox=(min(xs), min(ys), max(xs), max(ys)),
                )
            )

        logger.debug("PaddleOCR recognised %d line(s) in %s", len(boxes), image_path)
        return OCRResult.from_boxes(boxes)
