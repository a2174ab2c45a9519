from aliviral.domain.products.entities import (
    DEFAULT_FEATURES,
    DEFAULT_TITLE,
    PRICE_SENTINEL,
    ProductRecord,
)
from aliviral.domain.products.images import PLACEHOLDER_IMAGE


def test_defaults():
    record = ProductRecord(name=DEFAULT_TITLE)

    assert record.current_price == PRICE_SENTINEL
    assert record.discount == "0%"
    assert record.images == [PLACEHOLDER_IMAGE]
    assert record.image == PLACEHOLDER_IMAGE
    assert record.features == list(DEFAULT_FEATURES)
    assert record.has_only_placeholder()


def test_image_is_first_of_images():
    record = ProductRecord(name="x", images=["https://a.alicdn.com/kf/1.jpg", "https://a.alicdn.com/kf/2.jpg"])
    assert record.image == "https://a.alicdn.com/kf/1.jpg"


def test_description_truncated_to_250():
    record = ProductRecord(name="x", description="  " + "d" * 400)
    assert record.description == "d" * 250


def test_usable_name():
    assert ProductRecord(name="Lamp").has_usable_name()
    assert not ProductRecord(name="   ").has_usable_name()


def test_merge_images_replaces_placeholder():
    record = ProductRecord(name="x")

    added = record.merge_images(["//a.alicdn.com/kf/1.jpg", "https://a.alicdn.com/kf/1.jpg", "not a url"])

    assert added == 1
    assert record.images == ["https://a.alicdn.com/kf/1.jpg"]
    assert record.image == "https://a.alicdn.com/kf/1.jpg"


def test_merge_images_only_garbage_keeps_placeholder():
    record = ProductRecord(name="x")
    assert record.merge_images(["", "https://a.alicdn.com/logo.png"]) == 0
    assert record.images == [PLACEHOLDER_IMAGE]


def test_merge_images_respects_limit():
    record = ProductRecord(name="x", images=["https://a.alicdn.com/kf/0.jpg"])
    record.merge_images([f"https://a.alicdn.com/kf/{i}.jpg" for i in range(1, 10)], limit=3)
    assert len(record.images) == 3


def test_to_dict_uses_consumer_keys():
    data = ProductRecord(name="Lamp", current_price="$5", url="https://www.aliexpress.com/item/1.html").to_dict()

    assert data["name"] == "Lamp"
    assert data["currentPrice"] == "$5"
    assert data["originalPrice"] == ""
    assert data["url"] == "https://www.aliexpress.com/item/1.html"
    assert set(data) == {
        "name", "currentPrice", "originalPrice", "discount", "description", "image",
        "images", "videos", "rating", "reviews", "features", "url",
    }
