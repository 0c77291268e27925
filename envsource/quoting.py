"""
Quoted value decoding.

`unquote` is the default unquote strategy used by `SourcerConfig`. It
accepts a complete literal, delimiters included, and interprets the usual
backslash escapes. `quote` is its inverse and is used when definitions are
written back out.
"""

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
}

_QUOTE_ESCAPES = {value: f"\\{key}" for key, value in _SIMPLE_ESCAPES.items()}

_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCTAL_DIGITS = "01234567"


def _read_hex(body: str, start: int, width: int) -> int:
    digits = body[start:start + width]
    if len(digits) != width or any(c not in _HEX_DIGITS for c in digits):
        raise ValueError(f"invalid hex escape at offset {start - 2}")
    return int(digits, 16)


def _decode_escapes(body: str, delimiter: str) -> str:
    """Decode backslash escapes in `body` (the text between the delimiters)."""
    out = bytearray()
    i = 0
    n = len(body)
    while i < n:
        char = body[i]
        if char == delimiter:
            raise ValueError(f"unescaped {delimiter} inside quoted value")
        if char != "\\":
            out += char.encode("utf-8", "surrogatepass")
            i += 1
            continue

        if i + 1 >= n:
            raise ValueError("trailing backslash")
        code = body[i + 1]
        i += 2

        if code in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[code].encode("utf-8")
        elif code in "\"'":
            # Only the active delimiter may be escaped.
            if code != delimiter:
                raise ValueError(f"invalid escape \\{code}")
            out += code.encode("utf-8")
        elif code == "x":
            out.append(_read_hex(body, i, 2))
            i += 2
        elif code in ("u", "U"):
            width = 4 if code == "u" else 8
            value = _read_hex(body, i, width)
            i += width
            if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                raise ValueError(f"invalid code point \\{code}{body[i - width:i]}")
            out += chr(value).encode("utf-8")
        elif code in _OCTAL_DIGITS:
            digits = body[i - 1:i + 2]
            if len(digits) != 3 or any(c not in _OCTAL_DIGITS for c in digits):
                raise ValueError("invalid octal escape")
            value = int(digits, 8)
            if value > 0xFF:
                raise ValueError(f"octal escape \\{digits} out of range")
            out.append(value)
            i += 2
        else:
            raise ValueError(f"invalid escape \\{code}")

    try:
        return out.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(f"escaped bytes are not valid UTF-8: {exc.reason}") from exc


def unquote(s: str) -> str:
    """Interpret `s` as a quoted literal and return the value it denotes.

    `s` must start and end with the same delimiter: a double quote, a
    single quote or a backtick. Backtick literals are raw. Single quoted
    literals must decode to exactly one character.

    Raises:
        ValueError: If `s` is not a well-formed literal
    """
    if len(s) < 2:
        raise ValueError(f"quoted value {s!r} is too short")
    delimiter = s[0]
    if delimiter != s[-1] or delimiter not in "\"'`":
        raise ValueError(f"value {s!r} is not enclosed in matching quotes")
    body = s[1:-1]

    if delimiter == "`":
        if "`" in body:
            raise ValueError("backtick inside raw quoted value")
        return body.replace("\r", "")

    if "\n" in body:
        raise ValueError("newline inside quoted value")

    if "\\" not in body and delimiter not in body:
        result = body
    else:
        result = _decode_escapes(body, delimiter)

    if delimiter == "'" and len(result) != 1:
        raise ValueError(f"single quoted value must be one character, got {len(result)}")
    return result


def quote(s: str) -> str:
    """Return a double quoted literal that `unquote` maps back to `s`."""
    parts = ['"']
    for char in s:
        if char == '"':
            parts.append('\\"')
        elif char in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        else:
            point = ord(char)
            if point < 0x80:
                parts.append(f"\\x{point:02x}")
            elif point <= 0xFFFF:
                parts.append(f"\\u{point:04x}")
            else:
                parts.append(f"\\U{point:08x}")
    parts.append('"')
    return "".join(parts)
