"""
Product endpoints.

Creation and update are multipart requests so that image files can be
attached.  Callers pass the text fields as ``(name, value)`` pairs and
the images as :class:`ImageFile` objects; repeated names are allowed.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

from ..core.http import ApiClient, FilePart
from ..schemas.common import ApiResult


@dataclass
class ImageFile:
    """An image selected for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    def as_part(self, field: str = "images") -> FilePart:
        return field, (self.filename, self.content, self.content_type)


class ProductService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        category_id: Any = "",
    ) -> ApiResult:
        return self.client.get(
            "/v2/product/all", page=page, limit=limit, search=search, category_id=category_id
        )

    def get_product(self, product_id: Any) -> ApiResult:
        return self.client.get(f"/v2/product/{product_id}")

    def create_product(
        self, fields: Iterable[Tuple[str, str]], images: Sequence[ImageFile] = ()
    ) -> ApiResult:
        """Create a product on behalf of a user (``user_id`` is one of the fields)."""
        return self.client.request(
            "POST", "/v2/product/admin/add", form=list(fields), files=_parts(images)
        )

    def update_product(
        self, product_id: Any, fields: Iterable[Tuple[str, str]], images: Sequence[ImageFile] = ()
    ) -> ApiResult:
        return self.client.request(
            "PUT", f"/v2/product/{product_id}", form=list(fields), files=_parts(images)
        )

    def delete_product(self, product_id: Any) -> ApiResult:
        return self.client.delete("/v2/product", id=product_id)


def _parts(images: Sequence[ImageFile]) -> List[FilePart]:
    return [image.as_part() for image in images]
