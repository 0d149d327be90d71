"""
Small hand-written scanner shared by the Kotlin and Swift extractors.

It knows just enough lexical structure to walk declarations: words,
annotations, punctuation, string literals and comments. Bodies are
extracted by counting delimiters and lists are split only at separators
that sit outside every bracket pair.
"""

from dataclasses import dataclass


WORD = "word"
ANNOTATION = "annotation"
STRING = "string"
PUNCT = "punct"

# Opening delimiter -> closing delimiter, used for depth-aware splitting
BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}


class UnbalancedDelimiterError(ValueError):
    """Raised when a body runs to the end of the text without closing.

    ``body`` holds everything from the start index to the end of the text,
    which is what a plain depth counter would have captured.
    """

    def __init__(self, start: int, body: str):
        super().__init__(f"Unbalanced delimiters in body starting at offset {start}")
        self.start = start
        self.body = body


@dataclass(frozen=True)
class Token:
    """A lexical token with its [start, end) offsets in the source text"""
    kind: str
    value: str
    start: int
    end: int


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def skip_trivia(text: str, pos: int, end: int | None = None) -> int:
    """Skip whitespace and comments, returning the next significant offset"""
    if end is None:
        end = len(text)
    while pos < end:
        ch = text[pos]
        if ch.isspace():
            pos += 1
        elif text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = end if newline == -1 else newline + 1
        elif text.startswith("/*", pos):
            # Kotlin and Swift both allow nested block comments
            depth = 0
            while pos < end:
                if text.startswith("/*", pos):
                    depth += 1
                    pos += 2
                elif text.startswith("*/", pos):
                    depth -= 1
                    pos += 2
                    if depth == 0:
                        break
                else:
                    pos += 1
        else:
            break
    return min(pos, end)


def skip_string(text: str, pos: int) -> int:
    """Skip a string or character literal starting at ``pos``.

    Returns the offset just past the closing quote. Interpolations
    (``${...}`` in Kotlin, ``\\(...)`` in Swift) are skipped as balanced
    bodies so quotes nested inside them do not end the literal.
    """
    quote = text[pos]
    if text.startswith('"""', pos):
        quote = '"""'
    i = pos + len(quote)
    while i < len(text):
        if text.startswith(quote, i):
            return i + len(quote)
        ch = text[i]
        if ch == "\\":
            if text.startswith("(", i + 1):
                i = _skip_interpolation(text, i + 2, "(", ")")
            else:
                i += 2
        elif ch == "$" and text.startswith("{", i + 1):
            i = _skip_interpolation(text, i + 2, "{", "}")
        elif ch == "\n" and quote == "'":
            # Stray apostrophe, not a character literal
            return pos + 1
        else:
            i += 1
    return len(text)


def _skip_interpolation(text: str, start: int, opening: str, closing: str) -> int:
    try:
        return find_closing(text, start, opening, closing) + 1
    except UnbalancedDelimiterError:
        return len(text)


def next_token(text: str, pos: int, end: int | None = None) -> Token | None:
    """Return the token at or after ``pos``, or None at the end of the range"""
    if end is None:
        end = len(text)
    pos = skip_trivia(text, pos, end)
    if pos >= end:
        return None

    ch = text[pos]
    if ch in "\"'":
        stop = min(skip_string(text, pos), end)
        return Token(STRING, text[pos:stop], pos, stop)

    if ch == "`":
        # Kotlin backtick-quoted identifier
        close = text.find("`", pos + 1, end)
        stop = end if close == -1 else close + 1
        return Token(WORD, text[pos + 1:stop - 1], pos, stop)

    if ch == "@" and pos + 1 < end and _is_word_char(text[pos + 1]):
        stop = pos + 1
        while stop < end and _is_word_char(text[stop]):
            stop += 1
        return Token(ANNOTATION, text[pos + 1:stop], pos, stop)

    if _is_word_char(ch):
        stop = pos
        while stop < end and _is_word_char(text[stop]):
            stop += 1
        return Token(WORD, text[pos:stop], pos, stop)

    for symbol in ("->", "::"):
        if text.startswith(symbol, pos):
            return Token(PUNCT, symbol, pos, pos + 2)

    return Token(PUNCT, ch, pos, pos + 1)


def find_closing(text: str, start: int, opening: str = "{", closing: str = "}") -> int:
    """Find the delimiter that closes a body whose opening delimiter ends at ``start``.

    Depth starts at 1. Comments and string literals are skipped. Returns
    the index of the closing delimiter, or raises UnbalancedDelimiterError
    when the text ends first.
    """
    depth = 1
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            i = skip_string(text, i)
            continue
        if text.startswith("//", i) or text.startswith("/*", i):
            i = skip_trivia(text, i)
            continue
        if ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise UnbalancedDelimiterError(start, text[start:])


def extract_body(text: str, start: int, opening: str = "{", closing: str = "}") -> str:
    """Return the text between ``start`` and the matching closing delimiter"""
    return text[start:find_closing(text, start, opening, closing)]


def strip_comments(text: str) -> str:
    """Replace each comment, with the whitespace after it, by one space.

    String literals are copied unchanged, so ``"//"`` inside one survives.
    """
    parts = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            stop = skip_string(text, i)
            parts.append(text[i:stop])
            i = stop
        elif text.startswith("//", i) or text.startswith("/*", i):
            parts.append(" ")
            i = skip_trivia(text, i)
        else:
            parts.append(ch)
            i += 1
    return "".join(parts)


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on ``separator`` only where no bracket of any kind is open.

    ``Map<String, Int>`` stays in one piece when splitting on commas. The
    ``>`` of an arrow (``->``) never closes an angle bracket, and after a
    top-level ``=`` (a default value) ``<`` and ``>`` are comparisons.
    Empty segments (e.g. from a trailing comma) are dropped.
    """
    depths = {opening: 0 for opening in BRACKETS}
    closers = {closing: opening for opening, closing in BRACKETS.items()}
    parts = []
    current = []
    in_default = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            stop = skip_string(text, i)
            current.append(text[i:stop])
            i = stop
            continue
        if ch in BRACKETS and not (ch == "<" and in_default):
            depths[ch] += 1
        elif ch in closers and not (ch == ">" and (in_default or (i > 0 and text[i - 1] == "-"))):
            opening = closers[ch]
            depths[opening] = max(depths[opening] - 1, 0)
        elif text.startswith(separator, i) and not any(depths.values()):
            parts.append("".join(current))
            current = []
            in_default = False
            i += len(separator)
            continue
        elif ch == "=" and not any(depths.values()):
            in_default = True
        current.append(ch)
        i += 1
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def capture_type(text: str, pos: int, end: int | None = None) -> tuple[str, int]:
    """Capture a type annotation starting at ``pos``.

    Stops at a top-level brace, ``=``, ``;``, newline or comment. Returns the
    stripped type text and the offset where capture stopped.
    """
    if end is None:
        end = len(text)
    while pos < end and text[pos] in " \t":
        pos += 1
    depth = 0
    i = pos
    while i < end:
        ch = text[i]
        if text.startswith("//", i) or text.startswith("/*", i):
            break
        if ch in "([<":
            depth += 1
        elif ch in ")]>" and not (ch == ">" and i > 0 and text[i - 1] == "-"):
            if depth == 0:
                break
            depth -= 1
        elif depth == 0 and ch in "{}=;\n":
            break
        i += 1
    return text[pos:i].strip(), i
