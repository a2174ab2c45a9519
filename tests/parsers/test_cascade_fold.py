import pytest

from aliviral.infrastructure.parsers.cascade import first_present, is_present


def _boom(_subject):
    raise KeyError("missing")


def test_first_present_value_wins():
    extractors = (lambda s: None, lambda s: "  ", lambda s: s["a"], lambda s: "late")
    assert first_present(extractors, {"a": "first"}) == "first"


def test_failing_extractor_is_skipped():
    assert first_present((_boom, lambda s: "ok"), {}, field="title") == "ok"


def test_nothing_present_returns_none():
    assert first_present((lambda s: [], lambda s: {}, _boom), {}) is None
    assert first_present((), {}) is None


def test_later_extractors_are_not_called():
    calls = []

    def first(_s):
        calls.append("first")
        return "x"

    def second(_s):
        calls.append("second")
        return "y"

    assert first_present((first, second), None) == "x"
    assert calls == ["first"]


@pytest.mark.parametrize(
    "value, expected",
    [(None, False), ("", False), ("  ", False), ([], False), ({}, False), ("x", True), (0, True), ([1], True)],
)
def test_is_present(value, expected):
    assert is_present(value) is expected
