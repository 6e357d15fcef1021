"""Tesseract OCR backend implementation."""

import logging
from pathlib import Path

import cv2
import pytesseract
from PIL import Image, ImageOps

from lead_card.ocr.base import OCRBackend, OCRBox, OCRResult
from lead_card.preprocessing import CardCropper, load_image

logger = logging.getLogger(__name__)


class TesseractOCRBackend(OCRBackend):
    """OCR backend using the Tesseract binary through pytesseract."""

    def __init__(
        self,
        lang: str = "eng",
        auto_crop: bool = True,
        tesseract_cmd: str | None = None,
    ):
        """
        Initialize Tesseract backend.

        Args:
            lang: Tesseract language code, e.g. "eng" or "eng+deu".
            auto_crop: Crop the card out of the photo before recognition.
            tesseract_cmd: Path to the tesseract executable when not on PATH.
        """
        self._lang = lang
        self._cropper = CardCropper() if auto_crop else None
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @property
    def name(self) -> str:
        return f"tesseract:{self._lang}"

    def extract(self, image_path: str | Path) -> OCRResult:
        """Extract text from an image using Tesseract."""
        img = load_image(image_path)
        if self._cropper:
            img = self._cropper.crop(img)

        try:
            data = pytesseract.image_to_data(
                self._prepare(img),
                lang=self._lang,
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise ValueError(
                "Tesseract binary not found. Install tesseract-ocr or set TESSERACT_CMD"
            ) from e
        except pytesseract.TesseractError as e:
            raise ValueError(f"Tesseract failed: {e}") from e

        boxes = self._group_lines(data)
        logger.debug("Tesseract recognised %d line(s) in %s", len(boxes), image_path)
        return OCRResult.from_boxes(boxes)

    def _prepare(self, img) -> Image.Image:
        """Grayscale and stretch contrast, which Tesseract reads best."""
        rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        return ImageOps.autocontrast(ImageOps.grayscale(Image.fromarray(rgb)))

    def _group_lines(self, data: dict) -> list[OCRBox]:
        """
        Merge word-level Tesseract output into lines.

        Args:
            data: Output of ``image_to_data`` as a dict of parallel lists.

        Returns:
            One OCRBox per text line, in Tesseract's reading order.
        """
        lines: dict[tuple[int, int, int], list[int]] = {}
        for i, word in enumerate(data["text"]):
            conf = float(data["conf"][i])
            if not word.strip() or conf < 0:
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, []).append(i)

        boxes = []
        for indices in lines.values():
            lefts = [data["left"][i] for i in indices]
            tops = [data["top"][i] for i in indices]
            rights = [data["left"][i] + data["width"][i] for i in indices]
            bottoms = [data["top"][i] + data["height"][i] for i in indices]
            confs = [float(data["conf"][i]) for i in indices]
            boxes.append(
                OCRBox(
                    text=" ".join(data["text"][i].strip() for i in indices),
                    confidence=sum(confs) / len(confs) / 100,
                    bbox=(
                        float(min(lefts)),
                        float(min(tops)),
                        float(max(rights)),
                        float(max(bottoms)),
                    ),
                )
            )
        return boxes
