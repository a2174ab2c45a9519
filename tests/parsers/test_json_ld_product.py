import json

from bs4 import BeautifulSoup

from aliviral.infrastructure.parsers.extractors.json_ld import (
    OfferPrice,
    find_json_ld_product,
    product_description,
    product_images,
    product_offer_price,
    product_rating,
    product_review_count,
)


def _soup(*blocks) -> BeautifulSoup:
    scripts = "".join(
        f'<script type="application/ld+json">{b if isinstance(b, str) else json.dumps(b)}</script>'
        for b in blocks
    )
    return BeautifulSoup(f"<html><head>{scripts}</head><body></body></html>", "lxml")


# ──────────────────────────────────────────────────────────────────────────────
#                          📦 Поиск Product
# ──────────────────────────────────────────────────────────────────────────────

def test_product_inside_graph_with_type_list():
    soup = _soup(
        {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "BreadcrumbList", "name": "crumbs"},
                {"@type": ["Product", "Thing"], "name": "Desk Lamp"},
            ],
        }
    )
    assert find_json_ld_product(soup)["name"] == "Desk Lamp"


def test_broken_block_is_skipped():
    soup = _soup("{not json", {"@type": "Product", "name": "Kettle"})
    assert find_json_ld_product(soup)["name"] == "Kettle"


def test_no_product_block():
    assert find_json_ld_product(_soup({"@type": "Organization"})) is None


# ──────────────────────────────────────────────────────────────────────────────
#                          💰 Цены предложений
# ──────────────────────────────────────────────────────────────────────────────

def test_aggregate_offer_with_nested_offers():
    product = {
        "@type": "Product",
        "offers": {"@type": "AggregateOffer", "offers": [{"price": "12.50", "priceCurrency": "eur"}]},
    }
    assert product_offer_price(product) == OfferPrice(amount="12.50", currency="EUR")


def test_low_price_integral_float():
    product = {"offers": [{"lowPrice": 9.0, "priceCurrency": "USD"}]}
    assert product_offer_price(product) == OfferPrice(amount="9", currency="USD")


def test_price_specification_fallback():
    product = {"offers": {"priceSpecification": {"price": 5.5, "priceCurrency": "GBP"}}}
    assert product_offer_price(product) == OfferPrice(amount="5.5", currency="GBP")


def test_offer_without_price():
    assert product_offer_price({"offers": {"availability": "InStock"}}) is None
    assert product_offer_price(None) is None


# ──────────────────────────────────────────────────────────────────────────────
#                          🏷️ Остальные поля
# ──────────────────────────────────────────────────────────────────────────────

def test_description_html_is_stripped():
    assert product_description({"description": "<p>Soft <b>cotton</b></p>"}) == "Soft cotton"
    assert product_description({"description": {"@value": "Plain text"}}) == "Plain text"
    assert product_description({"description": "   "}) is None


def test_images_accept_strings_and_objects():
    product = {
        "image": [
            "https://ae01.alicdn.com/kf/A.jpg",
            {"@type": "ImageObject", "contentUrl": "https://ae01.alicdn.com/kf/B.jpg"},
            42,
        ]
    }
    assert product_images(product) == [
        "https://ae01.alicdn.com/kf/A.jpg",
        "https://ae01.alicdn.com/kf/B.jpg",
    ]


def test_rating_and_review_count():
    product = {"aggregateRating": {"ratingValue": 4.7, "ratingCount": "321"}}
    assert product_rating(product) == "4.7"
    assert product_review_count(product) == "321"
    assert product_rating({"aggregateRating": "n/a"}) is None
