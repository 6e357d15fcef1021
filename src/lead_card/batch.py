"""Batch scanning of multiple business card images."""

import csv
import io
import json
import time
from dataclasses import dataclass, field
from pathlib import Path

from lead_card.scanner import CardScanner


@dataclass
class BatchResult:
    """Result of scanning multiple images."""

    results: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    total_time_ms: float = 0.0

    @property
    def total(self) -> int:
        """Total number of processed images."""
        return len(self.results) + len(self.errors)

    @property
    def succeeded(self) -> int:
        """Number of successfully scanned images."""
        return len(self.results)

    @property
    def failed(self) -> int:
        """Number of images that could not be read."""
        return len(self.errors)


class BatchProcessor:
    """Scan multiple business card images, one failure at a time."""

    IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp", ".tif", ".tiff"}

    CSV_FIELDS = ["image_path", "name", "email", "phone", "source", "error"]

    def __init__(self, scanner: CardScanner):
        """
        Args:
            scanner: CardScanner used for each image.
        """
        self._scanner = scanner

    def process(self, image_paths: list[Path]) -> BatchResult:
        """
        Scan every image. A failed image is recorded in ``errors`` and the
        batch carries on.

        Args:
            image_paths: List of image paths to process.

        Returns:
            BatchResult with extracted fields and errors.
        """
        start_time = time.perf_counter()
        results: list[dict] = []
        errors: list[dict] = []

        for path in image_paths:
            scan = self._scanner.scan(path)
            if scan.ok:
                result = scan.fields.model_dump(mode="json")
                result["image_path"] = str(path)
                results.append(result)
            else:
                errors.append({"image_path": str(path), "error": scan.error or scan.notice})

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return BatchResult(
            results=results,
            errors=errors,
            total_time_ms=round(elapsed_ms, 2),
        )

    def collect_images(self, inputs: list[Path]) -> list[Path]:
        """
        Collect image paths from files and directories.

        Directories are not searched recursively.

        Args:
            inputs: List of file paths or directories.

        Returns:
            Sorted, de-duplicated list of image file paths.
        """
        images: set[Path] = set()

        for path in inputs:
            if path.is_dir():
                images.update(
                    p for p in path.iterdir()
                    if p.is_file() and p.suffix.lower() in self.IMAGE_EXTENSIONS
                )
            elif path.is_file() and path.suffix.lower() in self.IMAGE_EXTENSIONS:
                images.add(path)

        return sorted(images)

    def to_json(self, result: BatchResult) -> str:
        """Format batch result as JSON with a metadata summary."""
        output = {
            "metadata": {
                "total": result.total,
                "succeeded": result.succeeded,
                "failed": result.failed,
                "total_time_ms": result.total_time_ms,
            },
            "results": result.results,
            "errors": result.errors,
        }
        return json.dumps(output, indent=2, ensure_ascii=False)

    def to_csv(self, result: BatchResult) -> str:
        """Format batch result as CSV, one row per image."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=self.CSV_FIELDS)
        writer.writeheader()

        for item in result.results:
            row = {k: item.get(k) or "" for k in self.CSV_FIELDS}
            row["error"] = ""
            writer.writerow(row)

        for item in result.errors:
            row = {k: "" for k in self.CSV_FIELDS}
            row["image_path"] = item["image_path"]
            row["error"] = item["error"]
            writer.writerow(row)

        return output.getvalue()
