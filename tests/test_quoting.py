import pytest

from envsource.quoting import quote, unquote


@pytest.mark.parametrize(
    "literal, expected",
    [
        ('""', ""),
        ('"plain"', "plain"),
        ('"Hello\\nWorld"', "Hello\nWorld"),
        ('"tab\\there"', "tab\there"),
        ('"\\a\\b\\f\\r\\v\\\\"', "\a\b\f\r\v\\"),
        ('"\\x41\\101"', "AA"),
        ('"\\u00e9\\U0001F600"', "é\U0001F600"),
        ('"\\xe4\\xb8\\x96"', "世"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('"# not a comment"', "# not a comment"),
        ("'x'", "x"),
        ("'\\''", "'"),
        ("`raw\\nvalue`", "raw\\nvalue"),
        ("`a\rb`", "ab"),
    ],
)
def test_unquote(literal, expected):
    assert unquote(literal) == expected


@pytest.mark.parametrize(
    "literal",
    [
        "",
        '"',
        '"abc',
        "abc",
        '"a"b"',
        "'ab'",
        "''",
        '"a\nb"',
        '"\\q"',
        '"\\\'"',
        "'\\\"'",
        '"trailing\\"',
        '"\\x4"',
        '"\\xzz"',
        '"\\12"',
        '"\\400"',
        '"\\ud800"',
        '"\\U00110000"',
        '"\\xff"',
        "`a`b`",
        "\"a'",
    ],
)
def test_unquote_rejects_malformed_literals(literal):
    with pytest.raises(ValueError):
        unquote(literal)


def test_quote_escapes():
    assert quote("") == '""'
    assert quote('a"b\\c') == '"a\\"b\\\\c"'
    assert quote("line1\nline2\t") == '"line1\\nline2\\t"'
    assert quote("\x00\x7f") == '"\\x00\\x7f"'
    assert quote("café") == '"café"'


@pytest.mark.parametrize(
    "value",
    ["", "simple", "with spaces  and # hash", 'quo"te', "back\\slash", "multi\nline\r\n", "\x00\x01\x1b", "é世\U0001F600", "\u200b"],
)
def test_unquote_inverts_quote(value):
    assert unquote(quote(value)) == value
