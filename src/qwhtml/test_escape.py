from markupsafe import Markup

from qwhtml.escape import EscapeMode, Escaper, apply, escape
from qwhtml.sink import StringSink


def test_escape_replaces_structural_characters():
    assert escape("Hi & bye") == "Hi &amp; bye"
    assert escape('<a href="x">') == "&lt;a href=&#34;x&#34;&gt;"


def test_escape_returns_plain_str():
    assert type(escape("<b>")) is str


def test_escape_is_not_idempotent():
    assert escape(escape("&")) == "&amp;amp;"


def test_markup_is_already_safe():
    assert escape(Markup("<b>bold</b>")) == "<b>bold</b>"


def test_apply_respects_mode():
    assert apply("<", EscapeMode.PASS_THRU) == "<"
    assert apply("<", EscapeMode.ESCAPE) == "&lt;"


def test_mode_from_flag():
    assert EscapeMode.of(True) is EscapeMode.ESCAPE
    assert EscapeMode.of(False) is EscapeMode.PASS_THRU


def test_escaper_escapes_each_chunk():
    inner = StringSink()
    escaper = Escaper(inner)
    escaper.write_str("<")
    escaper.write_str("a & b")
    escaper.write_str(">")
    assert inner.chunks == ["&lt;", "a &amp; b", "&gt;"]
