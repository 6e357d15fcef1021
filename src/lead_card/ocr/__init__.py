"""OCR backends for text extraction from images.

Engine libraries are heavy, so backends are imported on first use by
:func:`create_ocr_backend`.
"""

from lead_card.ocr.base import OCRBackend, OCRBox, OCRResult

ENGINES = ("paddle", "tesseract")

# Short codes accepted on the command line, mapped to Tesseract traineddata names
TESSERACT_LANGS = {
    "en": "eng",
    "ch": "chi_sim",
    "chinese_cht": "chi_tra",
    "fr": "fra",
    "german": "deu",
    "de": "deu",
    "es": "spa",
    "it": "ita",
    "pt": "por",
    "japan": "jpn",
    "korean": "kor",
}


def create_ocr_backend(
    engine: str = "paddle",
    lang: str = "en",
    auto_crop: bool = True,
    tesseract_cmd: str | None = None,
) -> OCRBackend:
    """
    Create an OCR backend by engine name.

    Args:
        engine: "paddle" or "tesseract".
        lang: Language code. Short codes such as "en" are translated for Tesseract.
        auto_crop: Crop the card out of the photo before recognition.
        tesseract_cmd: Path to the tesseract executable, Tesseract only.

    Returns:
        A ready OCRBackend.

    Raises:
        ValueError: If the engine is unknown.
    """
    engine = engine.lower()
    if engine == "paddle":
        from lead_card.ocr.paddle_ocr import PaddleOCRBackend

        return PaddleOCRBackend(lang=lang, auto_crop=auto_crop)
    if engine == "tesseract":
        from lead_card.ocr.tesseract_ocr import TesseractOCRBackend

        return TesseractOCRBackend(
            lang=TESSERACT_LANGS.get(lang, lang),
            auto_crop=auto_crop,
            tesseract_cmd=tesseract_cmd,
        )
    raise ValueError(f"Unknown OCR engine: {engine}. Use one of: {', '.join(ENGINES)}")


__all__ = ["OCRBackend", "OCRBox", "OCRResult", "ENGINES", "create_ocr_backend"]
