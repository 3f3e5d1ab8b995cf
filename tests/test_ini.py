import pytest

from sessini import ini
from sessini.exceptions import ErrorKind


def test_ini_section():
    cfg = ini.parse("[this is a section]")
    assert isinstance(cfg, ini.NewSession)
    assert cfg.name == "this is a section"


def test_ini_property():
    cfg = ini.parse("こんにちは=konnichiwa")
    assert isinstance(cfg, ini.KeyValue)
    assert cfg.key == "こんにちは"
    assert cfg.value == "konnichiwa"


def test_ini_property_with_spaces():
    cfg = ini.parse("key = value")
    assert isinstance(cfg, ini.KeyValue)
    assert cfg.key == "key"
    assert cfg.value == "value"


@pytest.mark.parametrize(
    "line, name",
    [
        ("[server]", "server"),
        ("   [server]   ", "server"),
        ("[ spaced name ]", "spaced name"),
        ("[]", ""),
        ("[server] ; trailing comment", "server"),
        ("[server] # trailing comment", "server"),
        ("'[quoted]'", "quoted"),
    ],
)
def test_ini_section_forms(line: str, name: str):
    assert ini.parse(line) == ini.NewSession(name)


@pytest.mark.parametrize(
    "line",
    ["", "   ", "\t", "; a comment", "  # a comment", "; key = 'value'"],
)
def test_ini_empty(line: str):
    assert ini.parse(line) == ini.Empty()


@pytest.mark.parametrize(
    "line, key, value",
    [
        ("key=val ; trailing comment", "key", "val"),
        ("key=val# trailing comment", "key", "val"),
        ("name = 'hello ; world'", "name", "hello ; world"),
        ('key = "a = b # c"', "key", "a = b # c"),
        ("key = '[not a header]'", "key", "[not a header]"),
        ("'quoted key' = v", "quoted key", "v"),
        ("\tkey = v", "key", "v"),
        ("key = two words", "key", "two words"),
    ],
)
def test_ini_property_forms(line: str, key: str, value: str):
    assert ini.parse(line) == ini.KeyValue(key, value)


@pytest.mark.parametrize(
    "line, value",
    [
        (r"key = a\;b", "a;b"),
        (r"key = a\#b", "a#b"),
        (r"key = a\\b", "a\\b"),
        (r"key = say \"hi\"", 'say "hi"'),
        (r"key = it\'s", "it's"),
        # Only structural characters can be escaped, anything else is kept as is.
        (r"key = C:\Program Files\app", r"C:\Program Files\app"),
        (r"key = a\nb", r"a\nb"),
        # A dangling backslash is dropped.
        ("key = v\\", "v"),
    ],
)
def test_ini_escape_unquoted(line: str, value: str):
    assert ini.parse(line) == ini.KeyValue("key", value)


def test_ini_escape_assign_in_key():
    assert ini.parse(r"a\=b = c") == ini.KeyValue("a=b", "c")


@pytest.mark.parametrize(
    "line, value",
    [
        (r"key = 'it\'s'", "it's"),
        (r'key = "say \"hi\""', 'say "hi"'),
        # Escaping the other quote does nothing inside quotes.
        (r"""key = "it\'s" """, r"it\'s"),
        (r"key = 'a\;b'", r"a\;b"),
        (r"key = 'a\\b'", r"a\\b"),
    ],
)
def test_ini_escape_quoted(line: str, value: str):
    assert ini.parse(line) == ini.KeyValue("key", value)


def test_ini_quoted_value_is_stripped():
    assert ini.parse("key = '  padded  '") == ini.KeyValue("key", "padded")


def test_ini_text_after_quote_joins_part():
    assert ini.parse("key = 'a' b") == ini.KeyValue("key", "ab")
    assert ini.parse("key = 'a' \"b\"") == ini.KeyValue("key", "ab")


@pytest.mark.parametrize(
    "line, kind",
    [
        ("key='unterminated", ErrorKind.UNCLOSED_QUOTE),
        ('key = "a ; b', ErrorKind.UNCLOSED_QUOTE),
        (r"key = 'ends in escape\'", ErrorKind.UNCLOSED_QUOTE),
        ("key = val'ue", ErrorKind.INVALID_QUOTE_POSITION),
        ("ke\"y = value", ErrorKind.INVALID_QUOTE_POSITION),
        ("[a][b]", ErrorKind.INVALID_SESSION_NAME_FORMAT),
        ("[a]]", ErrorKind.INVALID_SESSION_NAME_FORMAT),
        ("[hanging bracket", ErrorKind.INVALID_SESSION_NAME_FORMAT),
        ("just words", ErrorKind.INVALID_SESSION_NAME_FORMAT),
        ("key # = value", ErrorKind.INVALID_SESSION_NAME_FORMAT),
        ("= a =", ErrorKind.INVALID_ASSIGNMENT),
        ("=empty property key", ErrorKind.EXTRA_KEY_OR_VALUE),
        ("key =", ErrorKind.EXTRA_KEY_OR_VALUE),
        ("key = ''", ErrorKind.EXTRA_KEY_OR_VALUE),
        ("a = b = c", ErrorKind.EXTRA_KEY_OR_VALUE),
    ],
)
def test_ini_invalid(line: str, kind: ErrorKind):
    assert ini.parse(line) == ini.Invalid(kind)


def test_ini_comment_before_quote_is_not_an_error():
    # The scan stops at the comment, so the stray quote is never seen.
    assert ini.parse("key = value ; don't") == ini.KeyValue("key", "value")
