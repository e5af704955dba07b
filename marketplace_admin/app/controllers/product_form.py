"""
Add / edit product form.

The form mirrors the product fields and submits them as multipart so
images can be attached.  Brand, colors and materials are either picked
from master data or typed in as a custom value ("Other"), never both:

* choosing "Other" clears the picked values;
* picking a value while "Other" is on clears the custom text and turns
  "Other" off;
* submitting with "Other" on and no custom text is refused before any
  request is made.

At most 2 colors, 3 materials and 20 images are accepted; a rejected
action leaves the selection as it was and sets :attr:`ProductForm.error`.

Category mapping on the edit screen: the product's ``sub_category_id``
holds the *third* level of the category tree.  The form loads it into
``sub_sub_category_id``, resolves the second level by scanning the
category's children, and sends the third level back as
``sub_category_id``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.config import settings
from ..schemas.common import ApiResult
from ..services.master_service import MasterService
from ..services.product_service import ImageFile, ProductService
from .base import Controller, FormOutcome, ViewState


logger = logging.getLogger(__name__)

OTHER = "other"
MAX_IMAGES = 20

TEXT_FIELDS = (
    "title",
    "description",
    "price",
    "category_id",
    "sub_category_id",
    "sub_sub_category_id",
    "size_id",
    "condition_id",
    "search_tags",
)
BOOLEAN_FIELDS = ("status", "is_approved", "is_sold", "is_hidden")


def _bool_text(value: Any) -> str:
    return "true" if value else "false"


def _as_id_list(raw: Any) -> List[int]:
    """Color and material ids arrive either as a list or a JSON string."""
    if not raw:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unparsable id list %r", raw)
            return []
    if not isinstance(raw, list):
        return []
    return [int(value) for value in raw]


def _options(result: ApiResult) -> List[Dict[str, Any]]:
    """Master data lists come back under ``data`` or ``list``."""
    if not result.ok or not isinstance(result.body, dict):
        return []
    for key in ("data", "list"):
        value = result.body.get(key)
        if isinstance(value, list):
            return value
    return []


class SingleChoiceField:
    """A dropdown with an "Other" entry backed by a free text value."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.selected: str = ""
        self.other = False
        self.custom = ""

    def select(self, value: Any) -> None:
        if value == OTHER:
            self.selected = ""
            self.other = True
        else:
            self.selected = "" if value is None else str(value)
            self.other = False
            self.custom = ""

    def load(self, selected: Any, custom: Optional[str]) -> None:
        self.selected = str(selected) if selected else ""
        self.custom = custom or ""
        self.other = not self.selected and bool(self.custom.strip())

    def validate(self) -> Optional[str]:
        if self.other and not self.custom.strip():
            return f"Please enter a custom {self.label} name"
        return None


class MultiChoiceField:
    """A capped multi-select with an "Other" toggle backed by free text."""

    def __init__(self, label: str, plural: str, limit: int) -> None:
        self.label = label
        self.plural = plural
        self.limit = limit
        self.selected: List[int] = []
        self.other = False
        self.custom = ""

    def toggle(self, value: Any) -> Optional[str]:
        """Toggle one value; returns an error message when refused."""
        if value == OTHER:
            self.toggle_other()
            return None
        value = int(value)
        if value in self.selected:
            self.selected = [v for v in self.selected if v != value]
            return None
        if len(self.selected) >= self.limit:
            return f"Maximum {self.limit} {self.plural} allowed"
        self.selected = self.selected + [value]
        self.other = False
        self.custom = ""
        return None

    def toggle_other(self) -> None:
        if self.other:
            self.other = False
            self.custom = ""
        else:
            self.other = True
            self.selected = []

    def load(self, selected: Any, custom: Optional[str]) -> None:
        self.selected = _as_id_list(selected)
        self.custom = custom or ""
        self.other = not self.selected and bool(self.custom.strip())

    def validate(self) -> Optional[str]:
        if self.other and not self.custom.strip():
            return f"Please enter a custom {self.label} name"
        return None


class ProductForm(Controller):
    """Create a product for a user, or edit an existing one.

    Pass ``user_id`` to create and ``product_id`` to edit.
    """

    def __init__(
        self,
        products: ProductService,
        master: Optional[MasterService] = None,
        *,
        product_id: Any = None,
        user_id: Any = None,
        redirect_delay: float = settings.redirect_delay,
    ) -> None:
        super().__init__()
        if (product_id is None) == (user_id is None):
            raise ValueError("ProductForm needs exactly one of product_id or user_id")
        self.products = products
        self.master = master
        self.product_id = product_id
        self.user_id = user_id
        self.redirect_delay = redirect_delay

        self.fields: Dict[str, Any] = {name: "" for name in TEXT_FIELDS}
        self.fields.update(status=True, is_approved=True, is_sold=False, is_hidden=False)
        self.brand = SingleChoiceField("brand")
        self.colors = MultiChoiceField("color", "colors", 2)
        self.materials = MultiChoiceField("material", "materials", 3)
        self.existing_images: List[Any] = []
        self.new_images: List[ImageFile] = []
        self.options: Dict[str, List[Dict[str, Any]]] = {}

        self.state = ViewState.IDLE if self.is_edit else ViewState.LOADED
        self.product: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.product_id is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self) -> ViewState:
        """Fetch the product being edited and fill the form from it."""
        if not self.is_edit:
            return self.state
        generation = self._begin()
        self.state = ViewState.LOADING
        self.error = None
        result = self.products.get_product(self.product_id)
        if not self._is_current(generation):
            return self.state
        if not result.ok:
            self.error = result.error_message("Failed to fetch product")
            self.state = ViewState.ERRORED
            return self.state
        if not result.data:
            self.state = ViewState.NOT_FOUND
            return self.state
        self.fill_from_product(result.data)
        if self.master is not None and self.fields["category_id"] and self.fields["sub_sub_category_id"]:
            self.resolve_sub_category()
        self.state = ViewState.LOADED
        return self.state

    def fill_from_product(self, product: Dict[str, Any]) -> None:
        self.product = product
        self.fields.update(
            title=product.get("title") or "",
            description=product.get("description") or "",
            price=product.get("price") or "",
            category_id=product.get("category_id") or "",
            sub_category_id="",
            sub_sub_category_id=product.get("sub_category_id") or "",
            size_id=product.get("size_id") or "",
            condition_id=product.get("condition_id") or "",
            search_tags=product.get("search_tags") or "",
            status=product.get("status") if product.get("status") is not None else True,
            is_approved=product.get("is_approved") if product.get("is_approved") is not None else True,
            is_sold=bool(product.get("is_sold")),
            is_hidden=bool(product.get("is_hidden")),
        )
        self.brand.load(product.get("brand_id"), product.get("custom_brand"))
        self.colors.load(product.get("color_ids"), product.get("custom_color"))
        self.materials.load(product.get("material_ids"), product.get("custom_material"))
        self.existing_images = list(product.get("images") or [])

    def resolve_sub_category(self) -> Optional[str]:
        """Find the second level category that contains the stored third level."""
        target = str(self.fields["sub_sub_category_id"])
        for sub in _options(self.master.get_sub_categories(self.fields["category_id"])):
            children = _options(self.master.get_sub_categories(sub.get("id")))
            if any(str(child.get("id")) == target for child in children):
                self.fields["sub_category_id"] = str(sub.get("id"))
                return self.fields["sub_category_id"]
        return None

    def load_options(self) -> Dict[str, List[Dict[str, Any]]]:
        """Fetch the master data used by the selectors; failures yield empty lists."""
        if self.master is None:
            return self.options
        self.options = {
            "categories": _options(self.master.get_categories()),
            "brands": _options(self.master.get_brands(sub_category_id=self.fields["sub_category_id"])),
            "conditions": _options(self.master.get_conditions()),
            "colors": _options(self.master.get_colors()),
            "materials": _options(self.master.get_materials()),
        }
        if self.fields["category_id"]:
            self.options["sub_categories"] = _options(
                self.master.get_sub_categories(self.fields["category_id"])
            )
            self.options["sizes"] = _options(self.master.get_sizes(self.fields["category_id"]))
        return self.options

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def set_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise ValueError(f"Unknown product field {name!r}")
        if name == "category_id" and str(value) != str(self.fields["category_id"]):
            self.fields.update(sub_category_id="", sub_sub_category_id="", size_id="")
        elif name == "sub_category_id" and str(value) != str(self.fields["sub_category_id"]):
            self.fields.update(sub_sub_category_id="")
        self.fields[name] = value

    def select_brand(self, value: Any) -> None:
        self.error = None
        self.brand.select(value)

    def set_custom_brand(self, text: str) -> None:
        self.error = None
        self.brand.custom = text

    def toggle_color(self, value: Any) -> bool:
        self.error = self.colors.toggle(value)
        return self.error is None

    def set_custom_color(self, text: str) -> None:
        self.error = None
        self.colors.custom = text

    def toggle_material(self, value: Any) -> bool:
        self.error = self.materials.toggle(value)
        return self.error is None

    def set_custom_material(self, text: str) -> None:
        self.error = None
        self.materials.custom = text

    def add_images(self, images: Sequence[ImageFile]) -> bool:
        if len(self.existing_images) + len(self.new_images) + len(images) > MAX_IMAGES:
            self.error = f"Maximum {MAX_IMAGES} images allowed"
            return False
        self.new_images.extend(images)
        self.error = None
        return True

    def remove_existing_image(self, index: int) -> None:
        del self.existing_images[index]

    def remove_new_image(self, index: int) -> None:
        del self.new_images[index]

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def validate(self) -> Optional[str]:
        for choice in (self.brand, self.colors, self.materials):
            message = choice.validate()
            if message:
                return message
        if len(self.existing_images) + len(self.new_images) > MAX_IMAGES:
            return f"Maximum {MAX_IMAGES} images allowed"
        return None

    def build_fields(self) -> List[Tuple[str, str]]:
        """Multipart text fields; empty optional values are left out."""
        fields = self.fields
        parts: List[Tuple[str, str]] = []
        if not self.is_edit:
            parts.append(("user_id", str(self.user_id)))
        for name in ("title", "description", "price"):
            parts.append((name, str(fields[name])))
        if fields["category_id"]:
            parts.append(("category_id", str(fields["category_id"])))
        sub_category = fields["sub_sub_category_id"] if self.is_edit else fields["sub_category_id"]
        if sub_category:
            parts.append(("sub_category_id", str(sub_category)))
        if self.brand.selected:
            parts.append(("brand_id", self.brand.selected))
        if self.brand.custom.strip():
            parts.append(("custom_brand", self.brand.custom))
        for name in ("size_id", "condition_id"):
            if fields[name]:
                parts.append((name, str(fields[name])))
        for key, choice in (("color", self.colors), ("material", self.materials)):
            if choice.selected:
                parts.append((f"{key}_ids", json.dumps(choice.selected)))
            if choice.custom.strip():
                parts.append((f"custom_{key}", choice.custom))
        booleans = BOOLEAN_FIELDS if self.is_edit else ("status", "is_approved")
        for name in booleans:
            parts.append((name, _bool_text(fields[name])))
        if fields["search_tags"]:
            parts.append(("search_tags", str(fields["search_tags"])))
        if self.is_edit:
            for index, image in enumerate(self.existing_images):
                if isinstance(image, dict):
                    image = image.get("full") or image.get("thumb")
                parts.append((f"existingImages[{index}]", str(image)))
        return parts

    def submit(self) -> FormOutcome:
        self.error = None
        self.success = None
        message = self.validate()
        if message:
            self.error = message
            return FormOutcome(success=False, message=message)
        if self.is_edit:
            result = self.products.update_product(self.product_id, self.build_fields(), self.new_images)
            failure, done, redirect = (
                "Failed to update product",
                "Product updated successfully!",
                f"/products/{self.product_id}",
            )
        else:
            result = self.products.create_product(self.build_fields(), self.new_images)
            failure, done, redirect = (
                "Failed to create product",
                "Product created successfully!",
                f"/users/{self.user_id}",
            )
        if not result.ok:
            self.error = result.error_message(failure)
            return FormOutcome(success=False, message=self.error)
        self.success = done
        logger.info("%s (%s)", done, self.product_id or f"user {self.user_id}")
        return FormOutcome(
            success=True,
            message=done,
            redirect_to=redirect,
            redirect_after=self.redirect_delay,
            data=result.data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "product_id": self.product_id,
            "user_id": self.user_id,
            "fields": dict(self.fields),
            "brand": {"brand_id": self.brand.selected, "other": self.brand.other, "custom": self.brand.custom},
            "colors": {"ids": self.colors.selected, "other": self.colors.other, "custom": self.colors.custom},
            "materials": {
                "ids": self.materials.selected,
                "other": self.materials.other,
                "custom": self.materials.custom,
            },
            "existing_images": self.existing_images,
            "new_images": [image.filename for image in self.new_images],
            "options": self.options,
            "error": self.error,
            "success": self.success,
        }
