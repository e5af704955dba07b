"""
Master data lookups.

Categories, brands, sizes, conditions, colors and materials populate
the selectors of the product forms.  Sub-categories are looked up by
their parent id, so the same endpoint also returns the third level of
the category tree when given a sub-category id.
"""

from typing import Any

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class MasterService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_categories(self) -> ApiResult:
        return self.client.get("/v2/master/categories")

    def get_sub_categories(self, category_id: Any) -> ApiResult:
        return self.client.get("/v2/master/sub-categories", category_id=category_id)

    def get_brands(self, search: str = "", sub_category_id: Any = "") -> ApiResult:
        return self.client.get("/v2/master/brands", search=search, sub_category_id=sub_category_id)

    def get_sizes(self, category_id: Any = "") -> ApiResult:
        return self.client.get("/v2/master/sizes", category_id=category_id)

    def get_conditions(self) -> ApiResult:
        return self.client.get("/v2/master/conditions")

    def get_colors(self) -> ApiResult:
        return self.client.get("/v2/master/colors")

    def get_materials(self) -> ApiResult:
        return self.client.get("/v2/master/materials")
