"""Models for entities, attributes and relationships extracted from ERD text."""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Constraint = Literal["PK", "FK", "UK"]

RelationshipKind = Literal[
    "one-to-one",
    "one-to-many",
    "many-to-one",
    "many-to-many",
    "unknown",
]

# Source offsets as (start, end), end exclusive
Span = Tuple[int, int]


class ErdModel(BaseModel):
    """Base for immutable ERD values; dumps camelCase with by_alias=True."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Attribute(ErdModel):
    """A typed column declaration inside an entity block."""

    name: str
    type: str
    constraints: List[Constraint] = Field(default_factory=list)
    description: Optional[str] = None
    span: Span = (0, 0)  # whole declaration
    name_span: Span = (0, 0)

    @property
    def constraint(self) -> Optional[Constraint]:
        """First constraint in source order, if any."""
        return self.constraints[0] if self.constraints else None

    @property
    def is_primary_key(self) -> bool:
        return "PK" in self.constraints

    @property
    def is_foreign_key(self) -> bool:
        return "FK" in self.constraints


class Entity(ErdModel):
    """A named ``Name { ... }`` block."""

    name: str
    attributes: List[Attribute] = Field(default_factory=list)
    is_cdm_candidate: bool = False
    span: Span = (0, 0)  # from the name to the closing brace, inclusive
    body_span: Span = (0, 0)  # between the braces

    def attribute_names(self) -> List[str]:
        return [attr.name for attr in self.attributes]

    @property
    def primary_keys(self) -> List[Attribute]:
        return [attr for attr in self.attributes if attr.is_primary_key]


class Relationship(ErdModel):
    """A relationship line such as ``Customer ||--o{ Order : places``."""

    source: str
    target: str
    cardinality: str
    kind: RelationshipKind = "unknown"
    label: str = ""
    span: Span = (0, 0)  # the line, without its newline

    @property
    def endpoints(self) -> Tuple[str, str]:
        """Undirected endpoint key: the two entity names in sorted order."""
        return tuple(sorted((self.source, self.target)))  # type: ignore[return-value]

    @property
    def display(self) -> str:
        return f"{self.source} → {self.target}"
