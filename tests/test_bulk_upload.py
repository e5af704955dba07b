"""
Tests for the bulk product upload.
"""

import json
from unittest.mock import MagicMock

import pytest

from marketplace_admin.app.controllers.bulk_upload import (
    BulkUpload,
    BulkUploadError,
    parse_products_file,
)
from marketplace_admin.app.services.product_service import ImageFile, ProductService

from factories import failed, ok


@pytest.fixture
def products():
    return MagicMock(spec=ProductService)


def products_file(items):
    return json.dumps(items).encode()


def test_parse_rejects_invalid_json():
    with pytest.raises(BulkUploadError, match="Invalid JSON file"):
        parse_products_file(b"{not json")


def test_parse_rejects_non_array():
    with pytest.raises(BulkUploadError, match="must contain an array"):
        parse_products_file('{"title": "one"}')


def test_non_utf8_file_is_reported_as_invalid_json(products):
    upload = BulkUpload(products, user_id=7, delay=0)

    assert upload.run(b"\xff\xfe[{\"title\": \"A\"}\x80]") is None
    assert upload.error.startswith("Invalid JSON file")
    products.create_product.assert_not_called()


def test_utf16_file_is_rejected():
    with pytest.raises(BulkUploadError, match="Invalid JSON file"):
        parse_products_file("[1]".encode("utf-16"))


def test_requires_file_then_user(products):
    upload = BulkUpload(products, user_id=None)

    assert upload.run(None) is None
    assert upload.error == "Please select a products JSON file"
    assert upload.run(products_file([])) is None
    assert upload.error == "Please enter a User ID"
    products.create_product.assert_not_called()


def test_invalid_file_sends_nothing(products):
    upload = BulkUpload(products, user_id=3)

    assert upload.run(b"[{]") is None
    assert upload.error.startswith("Invalid JSON file")
    products.create_product.assert_not_called()


def test_every_product_is_attempted(products):
    products.create_product.side_effect = [ok({"id": 1}), failed("Price missing"), ok({"id": 3})]
    sleeps = []
    progress = []
    upload = BulkUpload(
        products,
        user_id=3,
        delay=0.3,
        sleep=sleeps.append,
        on_progress=progress.append,
    )

    result = upload.run(products_file([{"title": "A"}, {"title": "B"}, {"title": "C"}]))

    assert products.create_product.call_count == 3
    assert len(result.success) == 2
    assert len(result.failed) == 1
    assert result.total == 3
    assert result.failed[0] == {"index": 2, "title": "B", "error": "Price missing"}
    assert result.success[1]["product_id"] == 3
    assert sleeps == [0.3, 0.3]
    assert [p.current for p in progress] == [1, 2, 3]
    assert not upload.uploading


def test_product_fields_and_images_are_matched_by_name(products):
    products.create_product.return_value = ok({"id": 1})
    front = ImageFile("front.jpg", b"1", "image/jpeg")
    back = ImageFile("back.jpg", b"2", "image/jpeg")
    upload = BulkUpload(products, user_id=3, delay=0)

    upload.run(
        products_file(
            [
                {
                    "title": "Bag",
                    "price": 20,
                    "is_sold": False,
                    "color_ids": [1, 2],
                    "description": "",
                    "images": ["back.jpg", "missing.jpg"],
                }
            ]
        ),
        [front, back],
    )

    fields, images = products.create_product.call_args.args
    assert fields == [
        ("user_id", "3"),
        ("title", "Bag"),
        ("price", "20"),
        ("is_sold", "false"),
        ("color_ids", "[1, 2]"),
    ]
    assert images == [back]


def test_non_object_entry_is_recorded_as_failure(products):
    products.create_product.return_value = ok({"id": 1})
    upload = BulkUpload(products, user_id=3, delay=0)

    result = upload.run(products_file(["oops", {"title": "Fine"}]))

    assert result.failed[0]["error"] == "Product entry must be an object"
    assert len(result.success) == 1
    assert upload.to_dict()["result"]["success_count"] == 1
