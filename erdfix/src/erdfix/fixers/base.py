"""Span-level text editing helpers shared by the fixers.

Fixers never rebuild the diagram: they splice the source text at offsets
found by the tokenizer, so everything outside the targeted defect is
preserved byte for byte.
"""

from typing import Callable, Iterable, List, Optional, Tuple
import re
from erdfix.ir.erd import Entity, Span
from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.tokenizer import find_entity_block

# A fixer rewrites the whole ERD text for one warning
Fixer = Callable[[str, ErdWarning], FixResult]

DEFAULT_INDENT = "    "

_BLANK_RUNS = re.compile(r"\n\s*\n\s*\n")
_WHITESPACE_ONLY_LINES = re.compile(r"^[ \t]+$", re.MULTILINE)


def cleanup_whitespace(text: str) -> str:
    """Collapse runs of blank lines to one and blank out whitespace-only lines."""
    text = _BLANK_RUNS.sub("\n\n", text)
    return _WHITESPACE_ONLY_LINES.sub("", text)


def cleanup_region(text: str, start: int, end: int) -> str:
    """Apply ``cleanup_whitespace`` to ``text[start:end]`` only."""
    return text[:start] + cleanup_whitespace(text[start:end]) + text[end:]


def _line_bounds(text: str, start: int, end: int) -> Tuple[int, int]:
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    if line_end == -1:
        line_end = len(text)
    return line_start, line_end


def remove_span(text: str, span: Span) -> str:
    """
    Delete ``text[start:end]``.

    When the span is alone on its line the whole line goes, newline included.
    Otherwise the span goes with the blanks that follow it, or with the
    blanks before it when nothing else follows on the line.
    """
    start, end = span
    line_start, line_end = _line_bounds(text, start, end)
    if not text[line_start:start].strip() and not text[end:line_end].strip():
        if line_end < len(text):
            return text[:line_start] + text[line_end + 1:]
        if line_start > 0:
            return text[: line_start - 1]
        return ""

    if not text[end:line_end].strip():
        while start > line_start and text[start - 1] in " \t":
            start -= 1
    while end < len(text) and text[end] in " \t":
        end += 1
    return text[:start] + text[end:]


def remove_spans(text: str, spans: Iterable[Span]) -> str:
    """Delete several spans, last first, so earlier offsets stay valid."""
    for span in sorted(spans, key=lambda s: s[0], reverse=True):
        text = remove_span(text, span)
    return text


def block_indent(text: str, entity: Entity) -> str:
    """Indentation used by the first declaration that starts its own line."""
    for attr in entity.attributes:
        line_start = text.rfind("\n", 0, attr.span[0]) + 1
        prefix = text[line_start:attr.span[0]]
        if not prefix.strip():
            return prefix
    return DEFAULT_INDENT


def insert_before_closing_brace(text: str, entity: Entity, declarations: List[str], indent: str) -> str:
    """
    Insert declarations at the end of an entity block.

    Multi-line blocks get one indented line per declaration above the
    closing brace. Single-line blocks get the declarations inline.
    """
    if not declarations:
        return text
    brace = entity.span[1] - 1
    line_start = text.rfind("\n", 0, brace) + 1
    if line_start > entity.body_span[0] and not text[line_start:brace].strip():
        lines = "".join(f"{indent}{decl}\n" for decl in declarations)
        return text[:line_start] + lines + text[line_start:]

    head = text[:brace].rstrip(" \t")
    return head + " " + " ".join(declarations) + " " + text[brace:]


def insert_after_opening_brace(text: str, entity: Entity, declarations: List[str], indent: str) -> str:
    """Insert declarations at the start of an entity block."""
    if not declarations:
        return text
    body_start = entity.body_span[0]
    newline = text.find("\n", body_start, entity.body_span[1])
    if newline != -1 and not text[body_start:newline].strip():
        lines = "".join(f"{indent}{decl}\n" for decl in declarations)
        return text[: newline + 1] + lines + text[newline + 1:]

    return text[:body_start] + " " + " ".join(declarations) + " " + text[body_start:].lstrip(" \t")


def format_declaration(
    attr_type: str, name: str, constraints: Iterable[str] = (), description: Optional[str] = None
) -> str:
    """Render ``<type> <name> [PK, FK] ["description"]``."""
    parts = [attr_type, name]
    keys = ", ".join(constraints)
    if keys:
        parts.append(keys)
    if description is not None:
        parts.append(f'"{description}"')
    return " ".join(parts)


def require_fix_inputs(raw_text: Optional[str], warning: Optional[ErdWarning]) -> None:
    if raw_text is None or warning is None:
        raise ValueError("Both raw_text and warning are required to apply a fix")


def locate_entity(raw_text: str, warning: ErdWarning, key: str = "entity") -> Tuple[Optional[str], Optional[Entity]]:
    """Find the entity a warning targets, from ``fix_data[key]`` or ``warning.entity``."""
    fix_data = warning.fix_data or {}
    name = fix_data.get(key) or warning.entity
    if not name:
        return None, None
    return name, find_entity_block(raw_text, name)
