"""Regular expressions for the Mermaid erDiagram subset.

Block bodies use negated character classes and names use guarded starts,
so matching stays linear in the input length.
"""

import re

NAME = r"[A-Za-z_][A-Za-z0-9_]*"

# Characters that may not precede an entity name; keeps the "o" of "--o{" out
_NAME_GUARD = r"(?<![A-Za-z0-9_|}{.\-\"])"

# Optional Mermaid alias: Customer["Customer Account"] { ... }
_ALIAS = r"(?:[ \t]*\[[^\]\n]*\])?"

ENTITY_BLOCK = re.compile(
    _NAME_GUARD + r"(?P<name>" + NAME + r")(?![A-Za-z0-9_])" + _ALIAS + r"\s*\{(?P<body>[^{}]*)\}"
)

ATTRIBUTE_DECL = re.compile(
    r"(?<![A-Za-z0-9_\"(])"
    r"(?P<type>(?:choice|lookup)\([^)\n]*\)|" + NAME + r"(?:\[\])?)"
    r"[ \t]+"
    r"(?P<name>" + NAME + r")(?![A-Za-z0-9_])"
    r"(?P<keys>(?:[ \t]+(?:PK|FK|UK)(?![A-Za-z0-9_])(?:[ \t]*,[ \t]*(?:PK|FK|UK)(?![A-Za-z0-9_]))*)?)"
    r"(?:[ \t]+\"(?P<description>[^\"\n]*)\")?"
)

CONSTRAINT_TOKEN = re.compile(r"PK|FK|UK")

# Left marker, connector (identifying "--" or non-identifying ".."), right marker
CARDINALITY = r"[|}o][|o](?:--|\.\.)[|o][|{o]"

RELATIONSHIP_LINE = re.compile(
    r"^[ \t]*(?P<source>" + NAME + r")(?![A-Za-z0-9_])[ \t]*"
    r"(?P<cardinality>" + CARDINALITY + r")"
    r"[ \t]*(?P<target>" + NAME + r")(?![A-Za-z0-9_])"
    # Greedy label up to the line end; clean_label strips trailing blanks
    r"(?:[ \t]*:[ \t]*(?P<label>[^\n]*)|[ \t\r]*)$",
    re.MULTILINE,
)

COMMENT_PREFIXES = ("%%", "//")

DIAGRAM_HEADER = re.compile(r"^\s*erDiagram\b", re.MULTILINE)


def entity_block_pattern(entity_name: str) -> "re.Pattern[str]":
    """Pattern matching the block of one specific entity (exact, case-sensitive name)."""
    return re.compile(
        _NAME_GUARD
        + r"(?P<name>"
        + re.escape(entity_name)
        + r")(?![A-Za-z0-9_])"
        + _ALIAS
        + r"\s*\{(?P<body>[^{}]*)\}"
    )
