"""ContentTableV1 rules: source, table meta and per-item structure."""

from typing import Any

from ..schemas.kinds import (
    COMPONENT_KINDS,
    CONTENT_TABLE_KEYS,
    CONTENT_TABLE_TYPE,
    CONTENT_TABLE_VERSION,
    ITEM_OPTIONAL_TEXT_FIELDS,
    SOURCE_FIELDS,
    TABLE_META_FIELDS,
)
from .checks import (
    check_discriminant,
    check_enum,
    check_object,
    check_optional_text,
    check_required_text,
    check_top_level,
    describe,
    warn_unknown_keys,
)
from .validation_result import ValidationResult


def _validate_item(item: Any, path: str, result: ValidationResult) -> None:
    if not isinstance(item, dict):
        result.error(f"{path} must be an object (got {describe(item)})")
        return

    for name in ("id", "nodeId", "nodeUrl"):
        check_required_text(item, name, f"{path}.{name}", result, non_empty=False)

    component = check_object(item, "component", f"{path}.component", result)
    if component is not None:
        check_enum(component, "kind", f"{path}.component.kind", COMPONENT_KINDS, result)
        check_required_text(component, "name", f"{path}.component.name", result, non_empty=False)
        check_optional_text(component, "key", f"{path}.component.key", result)
        variants = component.get("variantProperties")
        if variants is not None and not isinstance(variants, dict):
            result.error(f"{path}.component.variantProperties must be an object")

    field_ref = check_object(item, "field", f"{path}.field", result)
    if field_ref is not None:
        check_required_text(field_ref, "label", f"{path}.field.label", result, non_empty=False)
        check_required_text(field_ref, "path", f"{path}.field.path", result, non_empty=False)

    content = check_object(item, "content", f"{path}.content", result)
    if content is not None:
        if content.get("type") != "text":
            result.error(f"{path}.content.type must be 'text' (got {content.get('type')!r})")
        check_required_text(content, "value", f"{path}.content.value", result, non_empty=False)

    meta = check_object(item, "meta", f"{path}.meta", result)
    if meta is not None:
        for flag in ("visible", "locked"):
            if not isinstance(meta.get(flag), bool):
                result.error(f"{path}.meta.{flag} must be a boolean")

    for name in ITEM_OPTIONAL_TEXT_FIELDS:
        check_optional_text(item, name, f"{path}.{name}", result)


def validate_content_table(value: Any, result: ValidationResult) -> None:
    spec = check_top_level(value, result)
    if spec is None:
        return
    check_discriminant(spec, CONTENT_TABLE_TYPE, CONTENT_TABLE_VERSION, result)
    check_required_text(spec, "generatedAtISO", "generatedAtISO", result, non_empty=False)

    source = check_object(spec, "source", "source", result)
    if source is not None:
        for name in SOURCE_FIELDS:
            check_required_text(source, name, f"source.{name}", result, non_empty=False)

    meta = check_object(spec, "meta", "meta", result)
    if meta is not None:
        for name in TABLE_META_FIELDS:
            check_required_text(meta, name, f"meta.{name}", result, non_empty=False)

    items = spec.get("items")
    if not isinstance(items, list):
        result.error(f"items must be an array (got {describe(items)})")
    else:
        if not items:
            result.note("items is empty (selection contained no text layers)")
        for i, item in enumerate(items):
            _validate_item(item, f"items[{i}]", result)

    design_system = spec.get("designSystemByNodeId")
    if design_system is not None and not isinstance(design_system, dict):
        result.error(f"designSystemByNodeId must be an object (got {describe(design_system)})")

    warn_unknown_keys(spec, CONTENT_TABLE_KEYS, result)
