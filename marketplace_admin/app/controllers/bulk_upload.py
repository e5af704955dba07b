"""
Bulk product upload.

The operator provides one JSON file holding an array of product
objects and any number of image files.  Each product may list image
file names under ``images``; they are matched against the uploaded
files by name.  Products are created one at a time with a short pause
between requests so the backend is not flooded, and a failing product
never stops the rest of the batch.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..core.config import settings
from ..services.product_service import ImageFile, ProductService
from .base import Controller


logger = logging.getLogger(__name__)


class BulkUploadError(ValueError):
    """The products file could not be used."""


def parse_products_file(content: Union[str, bytes]) -> List[Dict[str, Any]]:
    """Decode the products file; it must hold a JSON array."""
    try:
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig")
        products = json.loads(content)
    except ValueError as exc:
        raise BulkUploadError(f"Invalid JSON file: {exc}") from exc
    if not isinstance(products, list):
        raise BulkUploadError("Products file must contain an array of products")
    return products


@dataclass
class UploadProgress:
    current: int
    total: int
    current_product: str


@dataclass
class BulkUploadResult:
    success: List[Dict[str, Any]] = field(default_factory=list)
    failed: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.success) + len(self.failed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "success_count": len(self.success),
            "failed_count": len(self.failed),
            "success": self.success,
            "failed": self.failed,
        }


class BulkUpload(Controller):
    def __init__(
        self,
        products: ProductService,
        *,
        user_id: Any = None,
        delay: float = settings.bulk_upload_delay,
        sleep: Callable[[float], None] = time.sleep,
        on_progress: Optional[Callable[[UploadProgress], None]] = None,
    ) -> None:
        super().__init__()
        self.products = products
        self.user_id = user_id
        self.delay = delay
        self.sleep = sleep
        self.on_progress = on_progress
        self.uploading = False
        self.error: Optional[str] = None
        self.result: Optional[BulkUploadResult] = None

    def product_fields(self, product: Dict[str, Any]) -> List[Tuple[str, str]]:
        parts: List[Tuple[str, str]] = [("user_id", str(self.user_id))]
        for key, value in product.items():
            if key == "images" or value is None or value == "":
                continue
            if isinstance(value, bool):
                parts.append((key, "true" if value else "false"))
            elif isinstance(value, (list, dict)):
                parts.append((key, json.dumps(value)))
            else:
                parts.append((key, str(value)))
        return parts

    @staticmethod
    def product_images(product: Dict[str, Any], images_by_name: Dict[str, ImageFile]) -> List[ImageFile]:
        names = product.get("images")
        if not isinstance(names, list):
            return []
        return [images_by_name[name] for name in names if name in images_by_name]

    def run(
        self,
        products_file: Union[str, bytes, None],
        images: Sequence[ImageFile] = (),
    ) -> Optional[BulkUploadResult]:
        """Upload every product in the file; returns ``None`` if nothing was sent."""
        self.error = None
        self.result = None
        if not products_file:
            self.error = "Please select a products JSON file"
            return None
        if not self.user_id:
            self.error = "Please enter a User ID"
            return None
        try:
            products = parse_products_file(products_file)
        except BulkUploadError as exc:
            self.error = str(exc)
            return None

        images_by_name = {image.filename: image for image in images}
        result = BulkUploadResult()
        self.uploading = True
        try:
            for index, product in enumerate(products, start=1):
                if not isinstance(product, dict):
                    result.failed.append(
                        {"index": index, "title": None, "error": "Product entry must be an object"}
                    )
                    continue
                title = product.get("title")
                if self.on_progress is not None:
                    self.on_progress(UploadProgress(index, len(products), title or f"Product {index}"))
                if index > 1 and self.delay > 0:
                    self.sleep(self.delay)
                response = self.products.create_product(
                    self.product_fields(product), self.product_images(product, images_by_name)
                )
                if response.ok:
                    data = response.data if isinstance(response.data, dict) else {}
                    result.success.append({"index": index, "title": title, "product_id": data.get("id")})
                else:
                    result.failed.append(
                        {"index": index, "title": title, "error": response.error_message("Upload failed")}
                    )
        finally:
            self.uploading = False
        logger.info(
            "Bulk upload for user %s: %d created, %d failed",
            self.user_id,
            len(result.success),
            len(result.failed),
        )
        self.result = result
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "uploading": self.uploading,
            "error": self.error,
            "result": self.result.to_dict() if self.result else None,
        }
