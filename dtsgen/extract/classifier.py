"""Turns raw scanner blocks into canonical declaration text."""

from __future__ import annotations

import re

from dtsgen.extract.inference import FallbackType, infer_value_type, is_literal_type
from dtsgen.extract.lexer import (
    find_assignment,
    find_closing,
    find_top_level,
    iter_code,
    split_top_level,
    strip_line_comments,
)
from dtsgen.extract.models import DeclaredSymbol, RawBlock, SymbolKind

INDENT = "  "

_VARIABLE_RE = re.compile(
    r"^(?P<export>export\s+)?(?:declare\s+)?(?P<keyword>const|let|var)\s+(?P<name>[\w$]+)"
    r"\s*(?P<optional>!)?\s*(?::\s*(?P<annotation>.+))?$",
    re.DOTALL,
)
_FUNCTION_RE = re.compile(
    r"^(?P<export>export\s+)?(?P<default>default\s+)?(?:declare\s+)?(?:async\s+)?"
    r"function\s*\*?\s*(?P<name>[\w$]*)\s*",
)
_INTERFACE_RE = re.compile(r"^(?P<export>export\s+)?(?:declare\s+)?interface\s")
_TYPE_ALIAS_RE = re.compile(r"^(?P<export>export\s+)?(?:declare\s+)?type\s+[\w$]+\s*[<=]")
_REEXPORT_RE = re.compile(
    r"^export\s+(?:type\s+)?(?:\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s*['\"]",
    re.DOTALL,
)
_TYPE_SUFFIX_RE = re.compile(r"\s+(?:as\s+const|satisfies\s+[\w$.<>\[\], |&]+)$")
_IDENTIFIER_KEY_RE = re.compile(r"^(?:[\w$]+|'[^']*'|\"[^\"]*\"|\[.+\])$", re.DOTALL)

# After these, a `{` in a return type opens an object type, not the body.
_TYPE_CONTINUATIONS = (":", "|", "&", ",", "<", "=>", "(", "[", "?", "keyof", "typeof")


def classify(block: RawBlock, fallback: FallbackType = "any") -> DeclaredSymbol | None:
    """Render *block* as declaration text, or None when its shape is unknown."""
    text = strip_line_comments(block.body).strip()
    if not text:
        return None

    function = _classify_function(text)
    if function is not None:
        signature, name, has_body = function
        return DeclaredSymbol(
            kind=SymbolKind.FUNCTION,
            text=signature,
            comment=block.preceding_comment,
            name=name,
            has_body=has_body,
        )

    rendered = (
        _classify_variable(text, fallback)
        or _classify_interface_or_type(text)
        or _classify_reexport(text)
        or _classify_other(text)
    )
    if rendered is None:
        return None
    kind, body = rendered
    return DeclaredSymbol(kind=kind, text=body, comment=block.preceding_comment)


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------


def _classify_variable(text: str, fallback: FallbackType) -> tuple[SymbolKind, str] | None:
    if not re.match(r"^(?:export\s+)?(?:declare\s+)?(?:const|let|var)\s", text):
        return None

    text = text.rstrip().rstrip(";").rstrip()
    eq = find_assignment(text)
    lhs = text if eq == -1 else text[:eq]
    m = _VARIABLE_RE.match(lhs.strip())
    if m is None:
        return None

    annotation = (m.group("annotation") or "").strip() or None
    if eq == -1:
        value_type = annotation or "any"
    else:
        value = _TYPE_SUFFIX_RE.sub("", text[eq + 1 :].strip())
        value_type = _variable_type(value, annotation, fallback)

    keyword = m.group("keyword")
    prefix = "export declare" if m.group("export") else "declare"
    return SymbolKind(keyword), f"{prefix} {keyword} {m.group('name')}: {value_type};"


def _variable_type(value: str, annotation: str | None, fallback: FallbackType) -> str:
    if value.startswith("{") and value.endswith("}"):
        if annotation:
            return annotation
        return object_literal_type(value, fallback)
    inferred = infer_value_type(value, fallback)
    if annotation and not is_literal_type(inferred):
        return annotation
    return inferred


def object_literal_type(literal: str, fallback: FallbackType = "any", level: int = 0) -> str:
    """Structural type for an object literal, field by field in source order."""
    inner = literal.strip()[1:-1]
    lines: list[str] = []
    for prop in split_top_level(inner):
        field = _field_type(prop, fallback, level + 1)
        if field is not None:
            lines.append(f"{INDENT * (level + 1)}{field}")
    if not lines:
        return "{}"
    return "{\n" + "\n".join(lines) + "\n" + INDENT * level + "}"


def _field_type(prop: str, fallback: FallbackType, level: int) -> str | None:
    if prop.startswith("..."):
        return None

    colon = find_top_level(prop, ":")
    if colon == -1:
        # Shorthand `{ name }`; methods and getters are skipped.
        if re.fullmatch(r"[\w$]+", prop):
            return f"{prop}: {fallback};"
        return None

    key = prop[:colon].strip()
    if not _IDENTIFIER_KEY_RE.match(key):
        return None
    value = _TYPE_SUFFIX_RE.sub("", prop[colon + 1 :].strip())
    if value.startswith("{") and value.endswith("}"):
        value_type = object_literal_type(value, fallback, level)
    else:
        value_type = infer_value_type(value, fallback)
    return f"{key}: {value_type};"


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


def _classify_function(text: str) -> tuple[str, str, bool] | None:
    """Signature text, function name and whether a body follows."""
    m = _FUNCTION_RE.match(text)
    if m is None:
        return None

    rest = text[m.end() :]
    generics = ""
    if rest.startswith("<"):
        close = find_closing(rest, 0, angles=True)
        if close == -1:
            return None
        generics = rest[: close + 1]
        rest = rest[close + 1 :].lstrip()

    if not rest.startswith("("):
        return None
    close = find_closing(rest, 0)
    if close == -1:
        return None

    params = ", ".join(_strip_default(p) for p in split_top_level(rest[1:close], angles=True))
    return_type, has_body = _signature_tail(rest[close + 1 :])

    signature = f"function {m.group('name')}{generics}({params})"
    if return_type:
        signature += f": {return_type}"

    if m.group("default"):
        prefix = "export default"
    elif m.group("export"):
        prefix = "export declare"
    else:
        prefix = "declare"
    return f"{prefix} {signature};", m.group("name"), has_body


def _strip_default(param: str) -> str:
    eq = find_assignment(param)
    if eq == -1:
        return " ".join(param.split())
    return " ".join(param[:eq].split())


def _signature_tail(tail: str) -> tuple[str | None, bool]:
    """Declared return type after the parameter list, and whether a body follows."""
    tail = tail.lstrip()
    if not tail.startswith(":"):
        return None, tail.startswith("{")
    tail = tail[1:]

    end = len(tail)
    has_body = False
    for i, ch, depth in iter_code(tail, angles=True):
        if ch == ";" and depth == 0:
            end = i
            break
        if ch == "{" and depth == 0:
            before = tail[:i].strip()
            if before and not before.endswith(_TYPE_CONTINUATIONS):
                end = i
                has_body = True
                break
    return " ".join(tail[:end].split()) or None, has_body


# ---------------------------------------------------------------------------
# Interfaces, type aliases, re-exports, everything else
# ---------------------------------------------------------------------------


def _classify_interface_or_type(text: str) -> tuple[SymbolKind, str] | None:
    for kind, pattern in (
        (SymbolKind.INTERFACE, _INTERFACE_RE),
        (SymbolKind.TYPE, _TYPE_ALIAS_RE),
    ):
        m = pattern.match(text)
        if m is None:
            continue
        body = text[m.end("export") :] if m.group("export") else text
        body = re.sub(r"^declare\s+", "", body)
        prefix = "export declare" if m.group("export") else "declare"
        return kind, f"{prefix} {body}"
    return None


def _classify_reexport(text: str) -> tuple[SymbolKind, str] | None:
    if _REEXPORT_RE.match(text):
        return SymbolKind.REEXPORT, text
    return None


def _classify_other(text: str) -> tuple[SymbolKind, str] | None:
    if not re.match(r"^export\b", text):
        return None
    return SymbolKind.OTHER, text if text.endswith(";") else f"{text};"
