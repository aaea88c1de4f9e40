"""Strip choice/picklist columns from an entity block."""

from erdfix.ir.results import FixResult
from erdfix.ir.warning import ErdWarning
from erdfix.parsing.tokenizer import find_entity_block
from erdfix.validation.naming_rules import is_choice_column
from .base import cleanup_region, locate_entity, remove_spans, require_fix_inputs


def fix_choice_columns(raw_text: str, warning: ErdWarning) -> FixResult:
    require_fix_inputs(raw_text, warning)
    name, entity = locate_entity(raw_text, warning)
    if entity is None:
        return FixResult.fail(f"Entity {name} not found")

    choices = [a for a in entity.attributes if is_choice_column(a)]
    if not choices:
        return FixResult.fail(f"No choice columns found in entity '{name}'")

    text = remove_spans(raw_text, [a.span for a in choices])
    block = find_entity_block(text, name)
    text = cleanup_region(text, block.span[0], block.span[1])
    removed = ", ".join(a.name for a in choices)
    return FixResult.ok(text, f"Removed choice column(s) {removed} from entity '{name}'")
