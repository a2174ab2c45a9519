import pytest

from aliviral.errors import ParseFailure
from aliviral.infrastructure.parsers.extractors.state_object import (
    find_state_object,
    parse_object_literal,
    scan_object_literal,
)


# ──────────────────────────────────────────────────────────────────────────────
#                          🔍 Сканер скобок
# ──────────────────────────────────────────────────────────────────────────────

def test_braces_inside_strings_are_ignored():
    text = """var x = {"a": "}{", b: '{'}; tail()"""
    assert scan_object_literal(text) == """{"a": "}{", b: '{'}"""


def test_escaped_quote_does_not_close_string():
    text = r'state = {"a": "he said \"}\" loudly", "b": 1};'
    assert scan_object_literal(text) == r'{"a": "he said \"}\" loudly", "b": 1}'


def test_nested_objects():
    assert scan_object_literal("x={a:{b:{c:1}}}, y={}") == "{a:{b:{c:1}}}"


@pytest.mark.parametrize("text", ["no braces at all", "x = {a: {b: 1}"])
def test_missing_or_unclosed_object(text):
    assert scan_object_literal(text) is None


# ──────────────────────────────────────────────────────────────────────────────
#                          🧾 Разбор литерала
# ──────────────────────────────────────────────────────────────────────────────

def test_strict_json_parses():
    assert parse_object_literal('{"a": [1, 2]}') == {"a": [1, 2]}


def test_js_literal_falls_back_to_json5():
    raw = "{titleModule: {subject: 'Watch',}, count: 3,}"
    assert parse_object_literal(raw) == {"titleModule": {"subject": "Watch"}, "count": 3}


def test_unparseable_literal_raises_parse_failure():
    with pytest.raises(ParseFailure) as exc_info:
        parse_object_literal("{broken: }", source="window.runParams")
    assert "window.runParams" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ValueError)


# ──────────────────────────────────────────────────────────────────────────────
#                          🧩 Поиск state-объекта
# ──────────────────────────────────────────────────────────────────────────────

def test_finds_run_params_with_js_syntax():
    html = "<script>window.runParams = {data: {titleModule: {subject: 'Smart Watch'}}};</script>"
    assert find_state_object(html) == {"data": {"titleModule": {"subject": "Smart Watch"}}}


def test_name_priority_beats_document_order():
    html = (
        '<script>window.__INIT_DATA__ = {"init": 1};</script>'
        '<script>window.runParams = {"run": 2};</script>'
    )
    assert find_state_object(html) == {"run": 2}


def test_broken_occurrence_is_skipped():
    html = (
        "<script>window.runParams = {broken: };</script>"
        '<script>window.runParams = {"ok": true};</script>'
    )
    assert find_state_object(html) == {"ok": True}


def test_empty_object_and_lookalike_names_are_ignored():
    html = '<script>window.runParams = {}; var notrunParams = {"x": 1};</script>'
    assert find_state_object(html) is None


def test_no_html():
    assert find_state_object("") is None
