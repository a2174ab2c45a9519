from aliviral.errors import (
    AppError,
    ExtractionIncomplete,
    FetchExhausted,
    ParseFailure,
    ProxyFailure,
    ResolutionFailure,
)


def test_proxy_failure_log_extra():
    failure = ProxyFailure("Status 429", backend="codetabs", url="https://x/item/1.html", status_code=429)

    assert isinstance(failure, AppError)
    assert failure.to_log_extra() == {
        "error_code": "proxy_failure",
        "backend": "codetabs",
        "url": "https://x/item/1.html",
        "status_code": 429,
    }


def test_fetch_exhausted_keeps_history_and_last_message():
    failures = [
        ProxyFailure("Status 500", backend="allorigins_raw"),
        ProxyFailure("Content too short.", backend="thingproxy"),
    ]

    exhausted = FetchExhausted("https://x/item/1.html", failures)

    assert exhausted.message == "All proxies failed for https://x/item/1.html: Content too short."
    assert exhausted.failures == failures
    assert exhausted.to_log_extra()["backends"] == ["allorigins_raw", "thingproxy"]


def test_fetch_exhausted_without_backends():
    assert "no backends configured" in FetchExhausted("u", []).message


def test_messages():
    assert ExtractionIncomplete("u").message == "Incomplete data extracted."
    assert ResolutionFailure("https://s.click.aliexpress.com/e/_x").url.endswith("_x")
    parse = ParseFailure("window.runParams", details="Unexpected '}'")
    assert parse.message == "Failed to parse window.runParams"
    assert parse.to_log_extra() == {"error_code": "parse_failure", "details": "Unexpected '}'"}
