"""Tests for OCR result types and backends."""

import cv2
import numpy as np
import pytest
import pytesseract

from lead_card.ocr import create_ocr_backend
from lead_card.ocr.base import OCRBox, OCRResult
from lead_card.ocr.tesseract_ocr import TesseractOCRBackend


def _tesseract_data(words):
    """Build an image_to_data style dict from (text, conf, block, par, line, left) tuples."""
    data = {k: [] for k in ("text", "conf", "block_num", "par_num", "line_num",
                            "left", "top", "width", "height")}
    for text, conf, block, par, line, left in words:
        data["text"].append(text)
        data["conf"].append(conf)
        data["block_num"].append(block)
        data["par_num"].append(par)
        data["line_num"].append(line)
        data["left"].append(left)
        data["top"].append(line * 30)
        data["width"].append(len(text) * 10)
        data["height"].append(20)
    return data


class TestOCRResult:
    """Test OCRResult and OCRBox dataclasses."""

    def test_ocr_box_creation(self):
        """Test OCRBox can be created."""
        box = OCRBox(text="Test", confidence=0.9, bbox=(10.0, 20.0, 110.0, 50.0))
        assert box.text == "Test"
        assert box.confidence == 0.9
        assert box.bbox == (10.0, 20.0, 110.0, 50.0)

    def test_from_boxes(self):
        """Test a result is built one line per box."""
        boxes = [
            OCRBox(text="John Doe", confidence=0.8, bbox=(0.0, 0.0, 80.0, 20.0)),
            OCRBox(text="john@example.com", confidence=0.6, bbox=(0.0, 30.0, 160.0, 50.0)),
        ]
        result = OCRResult.from_boxes(boxes)

        assert result.text == "John Doe\njohn@example.com"
        assert result.confidence == pytest.approx(0.7)
        assert result.boxes == boxes

    def test_from_no_boxes(self):
        """Test an empty box list gives an empty result."""
        result = OCRResult.from_boxes([])
        assert result.text == ""
        assert result.confidence == 0.0
        assert result.boxes == []


class TestCreateOCRBackend:
    """Test the OCR backend factory."""

    def test_unknown_engine(self):
        """Test unknown engines are rejected."""
        with pytest.raises(ValueError, match="Unknown OCR engine"):
            create_ocr_backend("easyocr")

    def test_tesseract_language_mapping(self):
        """Test short language codes are translated for Tesseract."""
        backend = create_ocr_backend("Tesseract", "en")
        assert isinstance(backend, TesseractOCRBackend)
        assert backend.name == "tesseract:eng"

    def test_tesseract_language_passthrough(self):
        """Test Tesseract codes are passed through untouched."""
        assert create_ocr_backend("tesseract", "eng+deu").name == "tesseract:eng+deu"


class TestTesseractOCRBackend:
    """Test TesseractOCRBackend with pytesseract mocked out."""

    def test_group_lines(self):
        """Test words are merged into lines and empty words dropped."""
        data = _tesseract_data([
            ("", -1, 1, 0, 0, 0),
            ("John", 90, 1, 1, 1, 10),
            ("Doe", 80, 1, 1, 1, 60),
            ("  ", 95, 1, 1, 2, 0),
            ("john@example.com", 70, 1, 1, 2, 10),
            ("noise", -1, 2, 1, 1, 10),
        ])

        boxes = TesseractOCRBackend(auto_crop=False)._group_lines(data)

        assert [b.text for b in boxes] == ["John Doe", "john@example.com"]
        assert boxes[0].confidence == pytest.approx(0.85)
        assert boxes[0].bbox == (10.0, 30.0, 90.0, 50.0)

    def test_extract(self, tmp_path, monkeypatch):
        """Test extract reads the image and joins recognised lines."""
        image_path = tmp_path / "card.png"
        cv2.imwrite(str(image_path), np.full((120, 200, 3), 255, dtype=np.uint8))

        calls = {}

        def fake_image_to_data(image, lang, output_type):
            calls["lang"] = lang
            calls["mode"] = image.mode
            return _tesseract_data([
                ("Jane", 96, 1, 1, 1, 0),
                ("Smith", 94, 1, 1, 1, 50),
                ("jane@firm.co", 90, 1, 1, 2, 0),
            ])

        monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

        result = TesseractOCRBackend(lang="eng").extract(image_path)

        assert result.text == "Jane Smith\njane@firm.co"
        assert calls == {"lang": "eng", "mode": "L"}

    def test_extract_missing_file(self, tmp_path):
        """Test a missing image raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            TesseractOCRBackend().extract(tmp_path / "missing.png")

    def test_extract_binary_missing(self, tmp_path, monkeypatch):
        """Test a missing tesseract binary surfaces as ValueError."""
        image_path = tmp_path / "card.png"
        cv2.imwrite(str(image_path), np.zeros((50, 50, 3), dtype=np.uint8))

        def raise_not_found(*args, **kwargs):
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(pytesseract, "image_to_data", raise_not_found)

        with pytest.raises(ValueError, match="Tesseract binary not found"):
            TesseractOCRBackend().extract(image_path)
