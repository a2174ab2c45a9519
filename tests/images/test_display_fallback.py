from aliviral.domain.products.entities import ProductRecord
from aliviral.domain.products.images import PLACEHOLDER_IMAGE
from aliviral.infrastructure.images import (
    DisplayAttempt,
    ImageLoadState,
    on_load_error,
    proxy_rewrite,
    resolve_display_url,
    start_attempt,
)

IMG = "https://ae01.alicdn.com/kf/S1.jpg"


def _record(*images):
    return ProductRecord(name="Lamp", images=list(images) or [PLACEHOLDER_IMAGE])


def test_proxy_rewrite_strips_scheme_and_encodes():
    assert proxy_rewrite(IMG) == "https://images.weserv.nl/?url=ae01.alicdn.com%2Fkf%2FS1.jpg"
    assert proxy_rewrite("//ae01.alicdn.com/a.jpg", "https://p.example/?u=") == "https://p.example/?u=ae01.alicdn.com%2Fa.jpg"


def test_direct_then_proxy_then_placeholder():
    record = _record(IMG)
    attempt = start_attempt(record)

    # 1) сначала оригинал
    assert attempt.state is ImageLoadState.DIRECT
    assert resolve_display_url(record, attempt) == IMG

    # 2) ошибка загрузки → ровно одна попытка через прокси
    attempt = on_load_error(attempt)
    assert attempt.state is ImageLoadState.PROXY_RETRIED
    assert resolve_display_url(record, attempt) == proxy_rewrite(IMG)

    # 3) повторная ошибка → терминальное состояние, рендерер показывает плейсхолдер
    attempt = on_load_error(attempt)
    assert attempt.state is ImageLoadState.FAILED
    assert resolve_display_url(record, attempt) is None

    # 4) дальше автомат не двигается
    assert on_load_error(attempt) == attempt


def test_resolve_without_attempt_uses_primary_image():
    assert resolve_display_url(_record(IMG, "https://ae01.alicdn.com/kf/S2.jpg")) == IMG


def test_start_attempt_out_of_range_falls_back_to_placeholder():
    assert start_attempt(_record(IMG), index=5) == DisplayAttempt(original_url=PLACEHOLDER_IMAGE)
    assert start_attempt(_record(IMG, "https://ae01.alicdn.com/kf/S2.jpg"), index=1).original_url.endswith("S2.jpg")


def test_custom_proxy_base():
    attempt = on_load_error(start_attempt(_record(IMG)))
    url = resolve_display_url(_record(IMG), attempt, proxy_base="https://img.proxy/?src=")
    assert url == "https://img.proxy/?src=ae01.alicdn.com%2Fkf%2FS1.jpg"
