"""Replace many-to-many relationships with a junction entity."""

from typing import List
from erdfix.ir.erd import Relationship
from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.relationships import extract_relationships
from erdfix.parsing.tokenizer import tokenize_entities
from .base import DEFAULT_INDENT, block_indent, format_declaration, require_fix_inputs


def _line_indent(raw_text: str, offset: int) -> str:
    line_start = raw_text.rfind("\n", 0, offset) + 1
    prefix = raw_text[line_start:offset]
    return prefix if not prefix.strip() else ""


def _relationship_lines(rel: Relationship, junction: str, indent: str) -> str:
    label = rel.label or "has"
    if any(ch.isspace() for ch in label):
        label = f'"{label}"'
    return "\n".join(
        f"{indent}{endpoint} ||--o{{ {junction} : {label}" for endpoint in (rel.source, rel.target)
    )


def _junction_block(junction: str, source: str, target: str, indent: str, attr_indent: str) -> str:
    declarations: List[str] = [
        format_declaration("string", f"{junction.lower()}_id", ["PK"], f"Unique identifier for {junction}"),
        format_declaration("string", f"{source.lower()}_id", ["FK"], f"Foreign key to {source}"),
        format_declaration("string", f"{target.lower()}_id", ["FK"], f"Foreign key to {target}"),
    ]
    body = "".join(f"{attr_indent}{decl}\n" for decl in declarations)
    return f"{indent}{junction} {{\n{body}{indent}}}"


def fix_many_to_many(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Convert ``A }o--o{ B`` into a junction entity ``AB``.

    The relationship line is replaced by ``A ||--o{ AB`` and ``B ||--o{ AB``
    and the junction block, holding its own key plus one FK per side, is
    added after the last entity block.
    """
    require_fix_inputs(raw_text, warning)
    fix_data = warning.fix_data or {}
    source, target = fix_data.get("source"), fix_data.get("target")
    if not source or not target:
        return FixResult.fail("Warning does not identify the relationship endpoints")
    junction = fix_data.get("junction") or f"{source}{target}"

    entities = tokenize_entities(raw_text)
    names = {e.name for e in entities}
    for required in (source, target):
        if required not in names:
            return FixResult.fail(f"Entity {required} not found")
    if junction in names:
        return FixResult.fail(f"Entity '{junction}' already exists")

    rel = next(
        (
            r
            for r in extract_relationships(raw_text)
            if r.source == source and r.target == target and r.kind == "many-to-many"
        ),
        None,
    )
    if rel is None:
        return FixResult.fail(f"No many-to-many relationship found between '{source}' and '{target}'")

    last = max(entities, key=lambda e: e.span[1])
    entity_indent = _line_indent(raw_text, last.span[0])
    attr_indent = block_indent(raw_text, last)
    if len(attr_indent) <= len(entity_indent):
        attr_indent = entity_indent + DEFAULT_INDENT
    block = "\n\n" + _junction_block(junction, source, target, entity_indent, attr_indent)

    rel_start, rel_end = rel.span
    line = raw_text[rel_start:rel_end]
    lines = _relationship_lines(rel, junction, line[: len(line) - len(line.lstrip())])

    # Apply the later edit first so the earlier offsets stay valid
    edits = sorted([(rel_start, rel_end, lines), (last.span[1], last.span[1], block)], reverse=True)
    text = raw_text
    for start, end, replacement in edits:
        text = text[:start] + replacement + text[end:]
    return FixResult.ok(text, f"Replaced many-to-many relationship with junction entity '{junction}'")
