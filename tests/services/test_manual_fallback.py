from aliviral.domain.products.images import PLACEHOLDER_IMAGE
from aliviral.infrastructure.parsers import ProductExtractor
from aliviral.infrastructure.services import ManualEntry, build_manual_record, parse_image_list


def test_parse_image_list_accepts_newlines_and_commas():
    raw = "https://a.alicdn.com/kf/1.jpg,\n\n https://a.alicdn.com/kf/2.jpg ,https://a.alicdn.com/kf/3.jpg"
    assert parse_image_list(raw) == [
        "https://a.alicdn.com/kf/1.jpg",
        "https://a.alicdn.com/kf/2.jpg",
        "https://a.alicdn.com/kf/3.jpg",
    ]
    assert parse_image_list(None) == []


def test_empty_form_uses_manual_defaults():
    record = build_manual_record(ManualEntry())

    assert record.name == "Manual Product"
    assert record.current_price == "$0.00"
    assert record.original_price == ""
    assert record.discount == "0%"
    assert record.description == "Manual description."
    assert record.rating == "N/A"
    assert record.reviews == "0"
    assert record.features == ["Premium Quality", "Best Deal"]
    assert record.images == [PLACEHOLDER_IMAGE]


def test_form_fields_and_images():
    entry = ManualEntry(
        title="  Desk Lamp ",
        price="$12.00",
        original_price="$20.00",
        discount="40",
        image_urls="//a.alicdn.com/kf/1.jpg\nhttps://a.alicdn.com/kf/1.jpg\nhttps://a.alicdn.com/logo.png",
    )

    record = build_manual_record(entry, source_url="https://www.aliexpress.com/item/1.html")

    assert record.name == "Desk Lamp"
    assert record.current_price == "$12.00"
    assert record.original_price == "$20.00"
    assert record.discount == "40%"
    # плейсхолдер заменён, дубликат и логотип отброшены
    assert record.images == ["https://a.alicdn.com/kf/1.jpg"]
    assert record.image == "https://a.alicdn.com/kf/1.jpg"
    assert record.url == "https://www.aliexpress.com/item/1.html"


def test_discount_with_percent_is_kept():
    assert build_manual_record(ManualEntry(discount="15%")).discount == "15%"


def test_pasted_html_goes_through_extractor(make_product_html):
    entry = ManualEntry(
        title="ignored",
        source_html=make_product_html("Pasted Watch"),
        image_urls="https://a.alicdn.com/kf/9.jpg",
    )

    record = build_manual_record(entry, ProductExtractor(), source_url="https://www.aliexpress.com/item/9.html")

    assert record.name == "Pasted Watch"
    assert record.images == ["https://a.alicdn.com/kf/9.jpg"]
    assert record.url == "https://www.aliexpress.com/item/9.html"


def test_unusable_pasted_html_falls_back_to_form():
    entry = ManualEntry(title="From Form", source_html="<html><title>AliExpress</title></html>")

    record = build_manual_record(entry, ProductExtractor())

    assert record.name == "From Form"
    assert record.rating == "N/A"


def test_pasted_html_without_extractor_is_ignored(make_product_html):
    record = build_manual_record(ManualEntry(source_html=make_product_html("Pasted")))
    assert record.name == "Manual Product"
