"""Remove duplicated column declarations, keeping the best copy of each."""

from typing import List
from erdfix.ir.erd import Span
from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.tokenizer import find_entity_block
from erdfix.validation.duplicates import choose_best_instance, find_duplicate_attribute_groups
from erdfix.config.logging import get_logger
from .base import (
    block_indent,
    cleanup_region,
    insert_before_closing_brace,
    locate_entity,
    remove_spans,
    require_fix_inputs,
)

logger = get_logger(__name__)


def fix_duplicate_columns(raw_text: str, warning: ErdWarning) -> FixResult:
    """
    Collapse every duplicated column of an entity to a single declaration.

    All copies are deleted and the best one (see ``choose_best_instance``) is
    re-inserted verbatim before the closing brace. Whitespace is cleaned up
    inside the block only.

    Args:
        raw_text: Full ERD source
        warning: A ``duplicate-column`` warning naming the entity

    Returns:
        FixResult with the rewritten ERD, or a failure when the entity or its
        duplicates cannot be found in ``raw_text``
    """
    require_fix_inputs(raw_text, warning)
    name, entity = locate_entity(raw_text, warning)
    if entity is None:
        return FixResult.fail(f"Entity {name} not found")

    groups = find_duplicate_attribute_groups(entity.attributes)
    if not groups:
        return FixResult.fail("No duplicate attributes found")

    indent = block_indent(raw_text, entity)
    keep: List[str] = []
    spans: List[Span] = []
    for items in groups.values():
        best = choose_best_instance(items)
        keep.append(raw_text[best.span[0]:best.span[1]])
        spans.extend(attr.span for attr in items)

    text = remove_spans(raw_text, spans)
    block = find_entity_block(text, name)
    text = insert_before_closing_brace(text, block, keep, indent)
    block = find_entity_block(text, name)
    text = cleanup_region(text, block.span[0], block.span[1])

    removed = len(spans) - len(keep)
    logger.debug(f"Collapsed {', '.join(groups)} in {name}")
    return FixResult.ok(text, f"Removed {removed} duplicate column(s) in entity '{name}'")
