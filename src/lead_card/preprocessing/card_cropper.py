"""Business card region cropping."""

import logging
from pathlib import Path

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def load_image(image_path: str | Path) -> np.ndarray:
    """
    Read an image from disk as a BGR array.

    Raises:
        FileNotFoundError: If the image file does not exist.
        ValueError: If OpenCV cannot decode the file.
    """
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(str(path))
    if img is None:
        raise ValueError(f"Cannot read image: {path}")
    return img


def fit_within(img: np.ndarray, max_dim: int) -> np.ndarray:
    """Downscale so neither side exceeds max_dim. Smaller images are returned as is."""
    h, w = img.shape[:2]
    if max(h, w) <= max_dim:
        return img

    scale = max_dim / max(h, w)
    new_w, new_h = int(w * scale), int(h * scale)
    logger.debug("Resizing image from %dx%d to %dx%d", w, h, new_w, new_h)
    return cv2.resize(img, (new_w, new_h), interpolation=cv2.INTER_AREA)


class CardCropper:
    """Find the business card in a photo and flatten it.

    The card is taken to be the largest convex quadrilateral within the
    configured area bounds. A bright-region mask is tried first (white
    cards on a darker desk), then plain Canny edges.
    """

    # Detection runs on a copy no larger than this
    MAX_PROCESS_DIM = 1500
    # Images handed to OCR are no larger than this
    MAX_OCR_DIM = 2000

    def __init__(
        self,
        min_area_ratio: float = 0.05,
        max_area_ratio: float = 0.85,
        canny_low: int = 50,
        canny_high: int = 150,
        epsilon_factor: float = 0.02,
    ):
        """
        Args:
            min_area_ratio: Minimum card area as ratio of image area.
            max_area_ratio: Maximum card area as ratio of image area.
            canny_low: Lower threshold for Canny edge detection.
            canny_high: Upper threshold for Canny edge detection.
            epsilon_factor: Polygon approximation tolerance, relative to perimeter.
        """
        self._min_area_ratio = min_area_ratio
        self._max_area_ratio = max_area_ratio
        self._canny_low = canny_low
        self._canny_high = canny_high
        self._epsilon_factor = epsilon_factor

    def crop(self, img: np.ndarray | None) -> np.ndarray | None:
        """
        Return the flattened card, or the whole image when no card is found.

        Either way the result fits within MAX_OCR_DIM.

        Args:
            img: Input image as BGR numpy array.

        Returns:
            BGR image ready for OCR, or None for an empty input.
        """
        if img is None or img.size == 0:
            return None

        contour = self.find_card(img)
        if contour is None:
            logger.debug("No card outline found, using the full image")
            return fit_within(img, self.MAX_OCR_DIM)

        return fit_within(self._warp(img, contour), self.MAX_OCR_DIM)

    def find_card(self, img: np.ndarray | None) -> np.ndarray | None:
        """
        Locate the card outline.

        Args:
            img: Input image as BGR numpy array.

        Returns:
            4-point contour in the coordinates of ``img``, or None.
        """
        if img is None or img.size == 0:
            return None

        h, w = img.shape[:2]
        small = fit_within(img, self.MAX_PROCESS_DIM)
        scale = small.shape[1] / w

        for strategy in (self._bright_region_edges, self._canny_edges):
            contours, _ = cv2.findContours(
                strategy(small), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
            )
            contour = self._largest_quad(contours, small.shape)
            if contour is not None:
                logger.debug("Card found using %s", strategy.__name__)
                if scale != 1.0:
                    contour = (contour.astype(np.float32) / scale).astype(np.int32)
                return contour

        return None

    def _bright_region_edges(self, img: np.ndarray) -> np.ndarray:
        """Outline of bright regions, taken from the LAB lightness channel."""
        lightness = cv2.cvtColor(img, cv2.COLOR_BGR2LAB)[:, :, 0]
        _, mask = cv2.threshold(lightness, 180, 255, cv2.THRESH_BINARY)

        kernel = np.ones((7, 7), np.uint8)
        mask = cv2.morphologyEx(mask, cv2.MORPH_CLOSE, kernel, iterations=3)
        mask = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel, iterations=2)

        edges = cv2.Canny(mask, 50, 150)
        return cv2.dilate(edges, kernel, iterations=2)

    def _canny_edges(self, img: np.ndarray) -> np.ndarray:
        gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        blurred = cv2.GaussianBlur(gray, (5, 5), 0)
        edges = cv2.Canny(blurred, self._canny_low, self._canny_high)
        return cv2.dilate(edges, np.ones((3, 3), np.uint8), iterations=2)

    def _largest_quad(self, contours, img_shape: tuple) -> np.ndarray | None:
        """Largest convex 4-gon whose area lies within the configured ratios."""
        img_area = img_shape[0] * img_shape[1]
        min_area = img_area * self._min_area_ratio
        max_area = img_area * self._max_area_ratio

        best = None
        best_area = 0.0
        for contour in contours:
            area = cv2.contourArea(contour)
            if area < min_area or area > max_area or area <= best_area:
                continue

            epsilon = self._epsilon_factor * cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(contour, epsilon, True)
            if len(approx) == 4 and cv2.isContourConvex(approx):
                best, best_area = approx, area

        return best

    def _warp(self, img: np.ndarray, contour: np.ndarray) -> np.ndarray:
        """Perspective-correct the quadrilateral into an upright rectangle."""
        corners = order_corners(contour.reshape(4, 2).astype(np.float32))
        tl, tr, br, bl = corners

        width = max(int(max(np.linalg.norm(tl - tr), np.linalg.norm(br - bl))), 100)
        height = max(int(max(np.linalg.norm(tl - bl), np.linalg.norm(tr - br))), 60)

        dst = np.array(
            [[0, 0], [width - 1, 0], [width - 1, height - 1], [0, height - 1]],
            dtype=np.float32,
        )
        matrix = cv2.getPerspectiveTransform(corners, dst)
        return cv2.warpPerspective(img, matrix, (width, height))


def order_corners(pts: np.ndarray) -> np.ndarray:
    """
    Order 4 points as top-left, top-right, bottom-right, bottom-left.

    Args:
        pts: 4 points as (4, 2) array.

    Returns:
        Ordered points as (4, 2) float32 array.
    """
    rect = np.zeros((4, 2), dtype=np.float32)

    # x+y is smallest at top-left and largest at bottom-right
    s = pts.sum(axis=1)
    rect[0] = pts[np.argmin(s)]
    rect[2] = pts[np.argmax(s)]

    # y-x is smallest at top-right and largest at bottom-left
    d = np.diff(pts, axis=1)
    rect[1] = pts[np.argmin(d)]
    rect[3] = pts[np.argmax(d)]

    return rect
