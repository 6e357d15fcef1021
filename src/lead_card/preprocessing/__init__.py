"""Image loading and card region cropping ahead of OCR."""

from lead_card.preprocessing.card_cropper import CardCropper, load_image

__all__ = ["CardCropper", "load_image"]
