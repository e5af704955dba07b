"""
Product screens: list, detail, add, edit, delete and bulk upload.

Add and edit accept ``multipart/form-data`` with the same field names
the backend uses (``title``, ``brand_id``, ``color_ids``, ...) plus any
number of ``images`` files.  ``brand_id=other`` together with
``custom_brand`` selects a custom brand; colors and materials switch to
their custom value when ``custom_color`` / ``custom_material`` is sent
without ids.
"""

import json
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from marketplace_admin.app.api.deps import detail_view, get_client, list_view, outcome_view
from marketplace_admin.app.controllers.base import ViewState
from marketplace_admin.app.controllers.bulk_upload import BulkUpload
from marketplace_admin.app.controllers.details import ProductDetail
from marketplace_admin.app.controllers.lists import ProductsList
from marketplace_admin.app.controllers.product_form import (
    BOOLEAN_FIELDS,
    OTHER,
    TEXT_FIELDS,
    MultiChoiceField,
    ProductForm,
)
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.views import BulkUploadRead, DetailView, ListView, MessageRead, OutcomeRead
from marketplace_admin.app.services.master_service import MasterService
from marketplace_admin.app.services.product_service import ImageFile, ProductService


router = APIRouter()

TRUE_VALUES = {"1", "true", "yes", "on"}


async def _images(data: FormData) -> List[ImageFile]:
    images = []
    for upload in data.getlist("images"):
        if isinstance(upload, UploadFile):
            images.append(
                ImageFile(
                    filename=upload.filename or "image",
                    content=await upload.read(),
                    content_type=upload.content_type or "application/octet-stream",
                )
            )
    return images


def _id_values(data: FormData, name: str) -> List[Any]:
    values = [value for value in data.getlist(name) if isinstance(value, str) and value != ""]
    if len(values) == 1 and values[0].startswith("["):
        return json.loads(values[0])
    return values


def _apply_choice(choice: MultiChoiceField, ids: List[Any], custom: Optional[str]) -> Optional[str]:
    if ids:
        choice.selected = []
        choice.other = False
        choice.custom = ""
        for value in ids:
            message = choice.toggle(value)
            if message:
                return message
    elif custom:
        if not choice.other:
            choice.toggle_other()
        choice.custom = custom
    return None


def _apply_form(form: ProductForm, data: FormData) -> Optional[str]:
    """Copy submitted values onto the form; returns an error if one was refused."""
    for name in TEXT_FIELDS:
        if name in data:
            form.set_field(name, data[name])
    for name in BOOLEAN_FIELDS:
        if name in data:
            form.set_field(name, str(data[name]).lower() in TRUE_VALUES)
    if "brand_id" in data:
        form.select_brand(data["brand_id"])
    custom_brand = data.get("custom_brand")
    if custom_brand and not form.brand.selected:
        if not form.brand.other:
            form.select_brand(OTHER)
        form.set_custom_brand(str(custom_brand))
    try:
        for key, choice in (("color", form.colors), ("material", form.materials)):
            message = _apply_choice(choice, _id_values(data, f"{key}_ids"), data.get(f"custom_{key}"))
            if message:
                return message
    except ValueError as exc:
        return f"Invalid id list: {exc}"
    return None


async def _submit(form: ProductForm, request: Request) -> dict:
    data = await request.form()
    message = _apply_form(form, data)
    if message is None:
        images = await _images(data)
        if images and not form.add_images(images):
            message = form.error
    if message:
        form.error = message
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=form.to_dict())
    return outcome_view(await run_in_threadpool(form.submit))


@router.get("/", response_model=ListView)
def list_products(
    page: int = Query(1, ge=1),
    search: str = "",
    category_id: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    controller = ProductsList(ProductService(client), settings.page_size)
    return list_view(controller, page, search, category_id=category_id)


@router.get("/{product_id}", response_model=DetailView)
def get_product(product_id: int, client: ApiClient = Depends(get_client)) -> dict:
    """Product with image URLs, display price and creation date."""
    return detail_view(ProductDetail(ProductService(client)), product_id)


@router.get("/{product_id}/form")
def get_product_form(product_id: int, client: ApiClient = Depends(get_client)) -> dict:
    """Edit form prefilled from the product, with the selector options."""
    form = ProductForm(ProductService(client), MasterService(client), product_id=product_id)
    if form.load() is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=form.to_dict())
    form.load_options()
    return form.to_dict()


@router.post("/", response_model=OutcomeRead)
async def create_product(request: Request, client: ApiClient = Depends(get_client)) -> dict:
    """Create a product for ``user_id`` from a multipart form."""
    data = await request.form()
    user_id = data.get("user_id")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="user_id is required")
    form = ProductForm(ProductService(client), MasterService(client), user_id=user_id)
    return await _submit(form, request)


@router.put("/{product_id}", response_model=OutcomeRead)
async def update_product(product_id: int, request: Request, client: ApiClient = Depends(get_client)) -> dict:
    form = ProductForm(ProductService(client), MasterService(client), product_id=product_id)
    state = await run_in_threadpool(form.load)
    if state is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=form.to_dict())
    if state is ViewState.ERRORED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=form.to_dict())
    return await _submit(form, request)


@router.delete("/{product_id}", response_model=MessageRead)
def delete_product(product_id: int, client: ApiClient = Depends(get_client)) -> dict:
    result = ProductService(client).delete_product(product_id)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error_message("Failed to delete product"),
        )
    return {"message": result.message or "Product deleted"}


@router.post("/bulk", response_model=BulkUploadRead)
async def bulk_upload(request: Request, client: ApiClient = Depends(get_client)) -> dict:
    """Create every product of an uploaded JSON file, one after the other."""
    data = await request.form()
    products_file = data.get("products_file")
    content = await products_file.read() if isinstance(products_file, UploadFile) else None
    uploader = BulkUpload(
        ProductService(client),
        user_id=data.get("user_id"),
        delay=settings.bulk_upload_delay,
    )
    result = await run_in_threadpool(uploader.run, content, await _images(data))
    if result is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=uploader.to_dict())
    return uploader.to_dict()
