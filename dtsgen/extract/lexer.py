"""Quote-aware lexical helpers shared by the scanner, classifier and resolver.

None of these functions parse TypeScript. They only know enough about
strings, comments and brackets to avoid being fooled by a `{` inside a
string literal or a `,` inside a nested object.
"""

from __future__ import annotations

from collections.abc import Iterator

OPENERS = "{[("
CLOSERS = "}])"
QUOTES = "'\"`"


class BracketCounter:
    """Running bracket depth across lines.

    Single and double quoted strings end at the end of a line; template
    literals and block comments carry over to the next one.
    """

    def __init__(self) -> None:
        self.depth = 0
        self._in_template = False
        self._in_block_comment = False

    def feed(self, line: str) -> int:
        """Consume one line and return the updated depth."""
        for ch in self._code_chars(line):
            if ch in OPENERS:
                self.depth += 1
            elif ch in CLOSERS:
                self.depth -= 1
        return self.depth

    def _code_chars(self, line: str) -> Iterator[str]:
        quote = "`" if self._in_template else None
        i = 0
        n = len(line)
        while i < n:
            ch = line[i]
            if self._in_block_comment:
                if line.startswith("*/", i):
                    self._in_block_comment = False
                    i += 2
                else:
                    i += 1
                continue
            if quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote:
                    quote = None
                i += 1
                continue
            if line.startswith("//", i):
                break
            if line.startswith("/*", i):
                self._in_block_comment = True
                i += 2
                continue
            if ch in QUOTES:
                quote = ch
            else:
                yield ch
            i += 1
        self._in_template = quote == "`"


def iter_code(text: str, angles: bool = False) -> Iterator[tuple[int, str, int]]:
    """Yield (index, char, depth) for every character outside string literals.

    Depth is the bracket depth *before* the character is applied, so an
    opening bracket is reported at its outer depth. With *angles*, `<` and
    `>` count as brackets too (the `>` of `=>` never does).
    """
    depth = 0
    quote: str | None = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in QUOTES:
            quote = ch
            i += 1
            continue
        yield i, ch, depth
        if ch in OPENERS or (angles and ch == "<"):
            depth += 1
        elif ch in CLOSERS or (angles and ch == ">" and text[i - 1 : i] != "="):
            depth -= 1
        i += 1


def split_top_level(text: str, sep: str = ",", angles: bool = False) -> list[str]:
    """Split on *sep* where it appears outside brackets and strings.

    Pieces are stripped; empty ones (e.g. after a trailing comma) are dropped.
    """
    parts: list[str] = []
    start = 0
    for i, ch, depth in iter_code(text, angles):
        if ch == sep and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def find_top_level(text: str, char: str, angles: bool = False) -> int:
    """Index of the first top-level *char*, or -1."""
    for i, ch, depth in iter_code(text, angles):
        if ch == char and depth == 0:
            return i
    return -1


def find_assignment(text: str) -> int:
    """Index of the first top-level assignment `=`, or -1.

    Skips the `=` of `=>`, `==`, `===`, `!=`, `<=` and `>=`.
    """
    for i, ch, depth in iter_code(text):
        if ch != "=" or depth != 0:
            continue
        prev = text[i - 1] if i > 0 else ""
        nxt = text[i + 1] if i + 1 < len(text) else ""
        if nxt in ("=", ">") or prev in ("=", "!", "<", ">"):
            continue
        return i
    return -1


def find_closing(text: str, open_index: int, angles: bool = False) -> int:
    """Index of the bracket closing the one at *open_index*, or -1."""
    target: int | None = None
    for i, ch, depth in iter_code(text, angles):
        if i < open_index:
            continue
        if i == open_index:
            target = depth
            continue
        closes = ch in CLOSERS or (angles and ch == ">" and text[i - 1] != "=")
        if closes and depth - 1 == target:
            return i
    return -1


def strip_line_comments(text: str) -> str:
    """Remove `// ...` comments, leaving `//` inside strings alone."""
    lines = []
    for line in text.split("\n"):
        cut = None
        for i, ch, _depth in iter_code(line):
            if ch == "/" and line.startswith("//", i):
                cut = i
                break
        lines.append(line[:cut].rstrip() if cut is not None else line)
    return "\n".join(lines)


def mask_strings(text: str) -> str:
    """Blank out the contents of string literals, keeping the quotes."""
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                out.append(" " * len(text[i : i + 2]))
                i += 2
                continue
            if ch == quote:
                quote = None
                out.append(ch)
            else:
                out.append("\n" if ch == "\n" else " ")
            i += 1
            continue
        if ch in QUOTES:
            quote = ch
        out.append(ch)
        i += 1
    return "".join(out)
