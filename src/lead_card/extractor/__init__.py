"""Extractors for structured contact fields from OCR text."""

from lead_card.extractor.base import Extractor
from lead_card.extractor.heuristic import HeuristicExtractor, classify

__all__ = ["Extractor", "HeuristicExtractor", "classify"]
