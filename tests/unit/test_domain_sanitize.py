from portable_content.domain.sanitize import (
    clean_paragraphs,
    clean_single_line,
    clean_token,
    collapse_newlines,
    normalize_kind,
    normalize_line_endings,
    strip_control_chars,
)


def test_strip_control_chars_keeps_whitespace_and_unicode():
    assert strip_control_chars("a\x00b\x07c\td\ne\rf\x7fü") == "abc\td\ne\rfü"


def test_normalize_line_endings():
    assert normalize_line_endings("a\r\nb\rc\nd") == "a\nb\nc\nd"


def test_bare_cr_run_is_single_break():
    assert normalize_line_endings("B\r\rC") == "B\nC"


def test_collapse_newlines_keeps_paragraph_break():
    assert collapse_newlines("a\n\n\n\n\nb") == "a\n\nb"
    assert collapse_newlines("a\n\nb") == "a\n\nb"


def test_clean_token():
    assert clean_token("  note  ") == "note"
    assert clean_token("blog-post!") == "blogpost"
    assert clean_token("my_type_2") == "my_type_2"
    assert clean_token(42) == "42"
    assert clean_token(["note"]) == ""


def test_clean_single_line_collapses_whitespace():
    assert clean_single_line("  Test   Multiple   Spaces  ") == "Test Multiple Spaces"
    assert clean_single_line("Line\none\ttab") == "Line one tab"


def test_clean_single_line_empty_is_none():
    assert clean_single_line("   ") is None
    assert clean_single_line("\x00\x01") is None
    assert clean_single_line({"x": 1}) is None


def test_clean_single_line_control_chars_before_trim():
    # Removing a leading control char must not leave leading whitespace behind
    assert clean_single_line("\x00 Title") == "Title"


def test_clean_paragraphs():
    assert clean_paragraphs("A\r\nB\r\rC\n\n\n\nD") == "A\nB\nC\n\nD"
    assert clean_paragraphs("Test\x00Summary") == "TestSummary"
    assert clean_paragraphs("") is None


def test_normalize_kind():
    assert normalize_kind("  Markdown ") == "markdown"
    assert normalize_kind(None) == ""
    assert normalize_kind(3) == ""
