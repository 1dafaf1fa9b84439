"""Literal-shape type inference for initializer expressions."""

from __future__ import annotations

import re
from typing import Literal

FallbackType = Literal["any", "string"]

ARRAY_TYPE = "any[]"

_NUMBER_RE = re.compile(
    r"""
    -?
    (?:
        0[xX][0-9a-fA-F](?:_?[0-9a-fA-F])*
      | 0[oO][0-7](?:_?[0-7])*
      | 0[bB][01](?:_?[01])*
      | (?:\d(?:_?\d)*(?:\.(?:\d(?:_?\d)*)?)? | \.\d(?:_?\d)*)
        (?:[eE][+-]?\d(?:_?\d)*)?
    )
    """,
    re.VERBOSE,
)


def is_number_literal(text: str) -> bool:
    return bool(_NUMBER_RE.fullmatch(text))


def is_string_literal(text: str) -> bool:
    if len(text) < 2 or text[0] not in "'\"" or text[-1] != text[0]:
        return False
    # Reject things like 'a' + 'b' where the first quote closes early.
    quote = text[0]
    i = 1
    while i < len(text) - 1:
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return False
        i += 1
    return i == len(text) - 1


def is_literal_type(type_text: str) -> bool:
    """True when *type_text* came from one of the literal rules."""
    return (
        type_text in ("true", "false", ARRAY_TYPE)
        or is_number_literal(type_text)
        or is_string_literal(type_text)
    )


def infer_value_type(expression: str, fallback: FallbackType = "any") -> str:
    """Return the declared type for a literal initializer.

    Rules, first match wins: boolean and numeric literals keep their value,
    array literals become ``any[]``, quoted strings keep their value, and
    everything else becomes *fallback*. The expression is never evaluated.
    """
    value = expression.strip()
    if value in ("true", "false"):
        return value
    if is_number_literal(value):
        return value
    if value.startswith("[") and value.endswith("]"):
        return ARRAY_TYPE
    if is_string_literal(value):
        return value
    return fallback
