from helpers.normalization import normalize_text, clean_whitespace, NormalizedText


SAMPLES = [
    "",
    "   ",
    "one line",
    "  Jane Doe  \r\n\r\n  jane@example.com\n\n\n",
    "a\rb\r\nc\n",
    "\t\tindented\t\n \n trailing   ",
]


def test_empty_input():
    assert normalize_text("") == NormalizedText((), "")
    assert normalize_text(None) == NormalizedText((), "")


def test_lines_trimmed_and_blank_lines_dropped():
    norm = normalize_text("  Jane Doe  \r\n\r\n  jane@example.com\n\n\n")
    assert norm.lines == ("Jane Doe", "jane@example.com")
    assert norm.joined == "Jane Doe\njane@example.com"


def test_mixed_line_endings():
    assert normalize_text("a\rb\r\nc\n").lines == ("a", "b", "c")


def test_no_empty_lines_ever():
    for s in SAMPLES:
        assert all(l for l in normalize_text(s).lines)


def test_joined_is_newline_join_of_lines():
    for s in SAMPLES:
        norm = normalize_text(s)
        assert "\n".join(norm.lines) == norm.joined


def test_clean_whitespace():
    assert clean_whitespace("  Dubai ,\n UAE ") == "Dubai , UAE"
    assert clean_whitespace(None) == ""
