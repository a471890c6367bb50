"""Reader/writer for the Lua table-literal subset used by WoW saved variables.

Saved-variables files are a sequence of global assignments whose values are
literals: strings, numbers, booleans, ``nil`` and (nested) table constructors.
Parsing produces a generic tree; interpreting that tree is left to callers, so
"is this valid table syntax" stays separate from "does this sub-tree have the
shape I expect".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Literal

from .errors import LuaSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterator

TokenKind = Literal["name", "string", "number", "symbol", "eof"]

# Lua's own parser stops at about this depth too.
MAX_TABLE_DEPTH: Final[int] = 200
_KEYWORDS: Final[frozenset[str]] = frozenset({"true", "false", "nil", "local"})
_SYMBOLS: Final[frozenset[str]] = frozenset("{}[]=,;-.")
_SIMPLE_ESCAPES: Final[dict[str, int]] = {
    "n": 0x0A,
    "t": 0x09,
    "r": 0x0D,
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "v": 0x0B,
    "\\": 0x5C,
    '"': 0x22,
    "'": 0x27,
    "\n": 0x0A,
}
_WRITE_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass(slots=True)
class LuaField:
    """One table constructor field; ``key`` is ``None`` for positional items."""

    key: LuaValue
    value: LuaValue
    positional: bool = False


@dataclass(slots=True)
class LuaTable:
    fields: list[LuaField] = field(default_factory=list)

    def items(self) -> Iterator[tuple[LuaValue, LuaValue]]:
        for entry in self.fields:
            yield entry.key, entry.value

    def get(self, key: str) -> LuaValue:
        """Return the last value stored under a string key, or ``None``."""

        found: LuaValue = None
        for entry in self.fields:
            if not entry.positional and entry.key == key and isinstance(entry.key, str):
                found = entry.value
        return found


LuaValue = str | int | float | bool | LuaTable | None


@dataclass(frozen=True, slots=True)
class _Token:
    kind: TokenKind
    value: str | int | float
    line: int


class _Lexer:
    """Splits source text into tokens, skipping whitespace and comments."""

    __slots__ = ("_line", "_pos", "_text")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1

    def tokens(self) -> list[_Token]:
        tokens: list[_Token] = []
        while True:
            token = self._next_token()
            tokens.append(token)
            if token.kind == "eof":
                return tokens

    def _error(self, message: str) -> LuaSyntaxError:
        return LuaSyntaxError(message, line=self._line)

    def _peek(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self._text[index] if index < len(self._text) else ""

    def _next_token(self) -> _Token:
        self._skip_blank()
        char = self._peek()
        line = self._line
        if not char:
            return _Token("eof", "", line)
        if char in "\"'":
            return _Token("string", self._read_short_string(char), line)
        if char == "[" and self._peek(1) in ("[", "="):
            level = self._long_bracket_level()
            if level is not None:
                return _Token("string", self._read_long_bracket(level), line)
        if char.isdigit() or (char == "." and self._peek(1).isdigit()):
            return _Token("number", self._read_number(), line)
        if char.isalpha() or char == "_":
            return _Token("name", self._read_name(), line)
        if char in _SYMBOLS:
            self._pos += 1
            return _Token("symbol", char, line)
        raise self._error(f"unexpected character {char!r}")

    def _skip_blank(self) -> None:
        while self._pos < len(self._text):
            char = self._text[self._pos]
            if char == "\n":
                self._line += 1
                self._pos += 1
            elif char.isspace():
                self._pos += 1
            elif char == "-" and self._peek(1) == "-":
                self._pos += 2
                self._skip_comment()
            else:
                return

    def _skip_comment(self) -> None:
        if self._peek() == "[":
            level = self._long_bracket_level()
            if level is not None:
                self._read_long_bracket(level)
                return
        end = self._text.find("\n", self._pos)
        self._pos = len(self._text) if end == -1 else end

    def _long_bracket_level(self) -> int | None:
        """Return the ``=`` count of a long bracket opening at the cursor, if any."""

        offset = 1
        while self._peek(offset) == "=":
            offset += 1
        if self._peek(offset) == "[":
            return offset - 1
        return None

    def _read_long_bracket(self, level: int) -> str:
        self._pos += level + 2
        if self._peek() == "\r":
            self._pos += 1
        if self._peek() == "\n":
            self._pos += 1
            self._line += 1
        closing = "]" + "=" * level + "]"
        end = self._text.find(closing, self._pos)
        if end == -1:
            raise self._error("unfinished long string or comment")
        content = self._text[self._pos : end]
        self._line += content.count("\n")
        self._pos = end + len(closing)
        return content

    def _read_short_string(self, quote: str) -> str:
        self._pos += 1
        buffer = bytearray()
        while True:
            char = self._peek()
            if not char or char == "\n":
                raise self._error("unfinished string")
            self._pos += 1
            if char == quote:
                return buffer.decode("utf-8", errors="surrogateescape")
            if char == "\\":
                self._read_escape(buffer)
            else:
                buffer += char.encode("utf-8", errors="surrogateescape")

    def _read_escape(self, buffer: bytearray) -> None:
        char = self._peek()
        if not char:
            raise self._error("unfinished string")
        if char in _SIMPLE_ESCAPES:
            self._pos += 1
            if char == "\n":
                self._line += 1
            buffer.append(_SIMPLE_ESCAPES[char])
        elif char == "\r":
            self._pos += 1
            if self._peek() == "\n":
                self._pos += 1
            self._line += 1
            buffer.append(0x0A)
        elif char.isdigit():
            digits = ""
            while len(digits) < 3 and self._peek().isdigit():
                digits += self._peek()
                self._pos += 1
            value = int(digits)
            if value > 255:
                raise self._error(f"decimal escape too large: \\{digits}")
            buffer.append(value)
        elif char == "x":
            hex_digits = self._text[self._pos + 1 : self._pos + 3]
            if len(hex_digits) != 2 or any(c not in "0123456789abcdefABCDEF" for c in hex_digits):
                raise self._error("hexadecimal digit expected")
            self._pos += 3
            buffer.append(int(hex_digits, 16))
        elif char == "z":
            self._pos += 1
            while self._peek().isspace():
                if self._peek() == "\n":
                    self._line += 1
                self._pos += 1
        else:
            raise self._error(f"invalid escape sequence \\{char}")

    def _read_number(self) -> int | float:
        start = self._pos
        if self._peek() == "0" and self._peek(1) in ("x", "X"):
            self._pos += 2
            while self._peek() and self._peek() in "0123456789abcdefABCDEF":
                self._pos += 1
            literal = self._text[start : self._pos]
            if len(literal) == 2:
                raise self._error(f"malformed number {literal!r}")
            return int(literal, 16)
        while self._peek().isdigit():
            self._pos += 1
        is_float = False
        if self._peek() == ".":
            is_float = True
            self._pos += 1
            while self._peek().isdigit():
                self._pos += 1
        if self._peek() in ("e", "E"):
            is_float = True
            self._pos += 1
            if self._peek() in ("+", "-"):
                self._pos += 1
            if not self._peek().isdigit():
                raise self._error("malformed number exponent")
            while self._peek().isdigit():
                self._pos += 1
        literal = self._text[start : self._pos]
        if self._peek().isalpha() or self._peek() == "_":
            raise self._error(f"malformed number near {literal!r}")
        return float(literal) if is_float else int(literal)

    def _read_name(self) -> str:
        start = self._pos
        while self._peek().isalnum() or self._peek() == "_":
            self._pos += 1
        return self._text[start : self._pos]


class _Parser:
    __slots__ = ("_depth", "_index", "_tokens")

    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._index = 0
        self._depth = 0

    @property
    def _current(self) -> _Token:
        return self._tokens[self._index]

    def _lookahead(self, offset: int = 1) -> _Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> _Token:
        token = self._current
        if token.kind != "eof":
            self._index += 1
        return token

    def _is_symbol(self, symbol: str) -> bool:
        return self._current.kind == "symbol" and self._current.value == symbol

    def _expect_symbol(self, symbol: str) -> None:
        if not self._is_symbol(symbol):
            raise self._error(f"'{symbol}' expected")
        self._advance()

    def _error(self, message: str) -> LuaSyntaxError:
        token = self._current
        near = "<eof>" if token.kind == "eof" else repr(token.value)
        return LuaSyntaxError(f"{message} near {near}", line=token.line)

    def parse_chunk(self) -> dict[str, LuaValue]:
        assignments: dict[str, LuaValue] = {}
        while self._current.kind != "eof":
            if self._is_symbol(";"):
                self._advance()
                continue
            if self._current.kind == "name" and self._current.value == "local":
                self._advance()
            target = self._parse_target()
            self._expect_symbol("=")
            assignments[target] = self._parse_value()
        return assignments

    def _parse_target(self) -> str:
        token = self._current
        if token.kind != "name" or token.value in _KEYWORDS:
            raise self._error("variable name expected")
        self._advance()
        parts = [str(token.value)]
        while self._is_symbol("."):
            self._advance()
            part = self._current
            if part.kind != "name" or part.value in _KEYWORDS:
                raise self._error("field name expected")
            self._advance()
            parts.append(str(part.value))
        return ".".join(parts)

    def _parse_value(self) -> LuaValue:
        token = self._current
        if token.kind == "string":
            self._advance()
            return str(token.value)
        if token.kind == "number":
            self._advance()
            return token.value
        if token.kind == "symbol" and token.value == "-":
            self._advance()
            number = self._current
            if number.kind != "number":
                raise self._error("number expected after '-'")
            self._advance()
            return -number.value  # type: ignore[operator]
        if token.kind == "symbol" and token.value == "{":
            return self._parse_table()
        if token.kind == "name":
            if token.value == "true":
                self._advance()
                return True
            if token.value == "false":
                self._advance()
                return False
            if token.value == "nil":
                self._advance()
                return None
        raise self._error("literal value expected")

    def _parse_table(self) -> LuaTable:
        if self._depth >= MAX_TABLE_DEPTH:
            raise self._error("table constructors nested too deeply")
        self._expect_symbol("{")
        self._depth += 1
        table = LuaTable()
        while not self._is_symbol("}"):
            table.fields.append(self._parse_field())
            if self._is_symbol(",") or self._is_symbol(";"):
                self._advance()
            elif not self._is_symbol("}"):
                raise self._error("'}' expected")
        self._advance()
        self._depth -= 1
        return table

    def _parse_field(self) -> LuaField:
        if self._is_symbol("["):
            self._advance()
            key = self._parse_value()
            self._expect_symbol("]")
            self._expect_symbol("=")
            return LuaField(key=key, value=self._parse_value())
        lookahead = self._lookahead()
        if (
            self._current.kind == "name"
            and self._current.value not in _KEYWORDS
            and lookahead.kind == "symbol"
            and lookahead.value == "="
        ):
            key = str(self._advance().value)
            self._advance()
            return LuaField(key=key, value=self._parse_value())
        return LuaField(key=None, value=self._parse_value(), positional=True)


def parse_chunk(text: str) -> dict[str, LuaValue]:
    """Parse saved-variables text into ``{global name: value}``.

    Raises ``LuaSyntaxError`` when the text is not a sequence of literal
    assignments. A name assigned twice keeps its last value, as Lua would.
    """

    if text.startswith("\ufeff"):
        text = text[1:]
    return _Parser(_Lexer(text).tokens()).parse_chunk()


def quote_string(value: str) -> str:
    """Render ``value`` as a double-quoted Lua string literal."""

    parts: list[str] = ['"']
    for char in value:
        escaped = _WRITE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
            continue
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            # Undecodable byte smuggled through surrogateescape on read.
            parts.append(f"\\{code - 0xDC00:03d}")
        elif code < 0x20 or code == 0x7F:
            parts.append(f"\\{code:03d}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


__all__ = ["MAX_TABLE_DEPTH", "LuaField", "LuaTable", "LuaValue", "parse_chunk", "quote_string"]
