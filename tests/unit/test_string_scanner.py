from app.streaming.scanner import (
    StringScanner,
    count_unescaped_quotes,
    find_string_end,
    skip_whitespace,
)


def _structural(text: str) -> str:
    scanner = StringScanner()
    return "".join(ch for ch in text if scanner.feed(ch))


class TestStringScanner:
    def test_braces_outside_strings_are_structural(self) -> None:
        assert _structural('{"a":"b"}') == "{:}"

    def test_braces_inside_strings_are_not_structural(self) -> None:
        assert _structural('{"a":"{x}"}') == "{:}"

    def test_escaped_quote_does_not_close_string(self) -> None:
        assert _structural(r'{"a":"say \"}\" now"}') == "{:}"

    def test_escaped_backslash_before_quote_closes_string(self) -> None:
        assert _structural(r'{"a":"x\\"}') == "{:}"

    def test_tracks_open_string_at_end(self) -> None:
        scanner = StringScanner()
        for ch in '{"a":"hel':
            scanner.feed(ch)
        assert scanner.in_string is True


class TestFindStringEnd:
    def test_returns_index_of_closing_quote(self) -> None:
        text = '"abc", 1'
        assert find_string_end(text, 0) == 4

    def test_skips_escaped_quote(self) -> None:
        text = r'"a\"b"'
        assert find_string_end(text, 0) == len(text) - 1

    def test_returns_none_when_unterminated(self) -> None:
        assert find_string_end('"abc', 0) is None

    def test_returns_none_on_dangling_escape(self) -> None:
        assert find_string_end('"abc\\', 0) is None


class TestCountUnescapedQuotes:
    def test_counts_plain_quotes(self) -> None:
        assert count_unescaped_quotes('{"a":"1","b":"hel') == 7

    def test_ignores_escaped_quotes(self) -> None:
        assert count_unescaped_quotes(r'"a \"b\" c"') == 2


class TestSkipWhitespace:
    def test_skips_spaces_and_newlines(self) -> None:
        assert skip_whitespace("a \n\t b", 1) == 5

    def test_stops_at_end(self) -> None:
        assert skip_whitespace("a  ", 1) == 3
