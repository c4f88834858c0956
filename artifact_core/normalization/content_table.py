"""ContentTableV1 normalization."""

import logging
from typing import Any, Dict, List, Optional

from ..schemas.kinds import (
    COMPONENT_KINDS,
    DEFAULT_COMPONENT_KIND,
    DEFAULT_COMPONENT_NAME,
    DEFAULT_CONTENT_MODEL,
    DEFAULT_CONTENT_STAGE,
    DEFAULT_FIELD_LABEL,
    DEFAULT_PAGE_NAME,
    DEFAULT_REVIEW_STATUS,
    DEFAULT_SELECTION_NAME,
    DEFAULT_TABLE_VERSION,
)
from ..schemas.models import (
    ComponentRef,
    ContentItem,
    FieldRef,
    ItemContent,
    ItemMeta,
    NormalizedContentTable,
    TableMeta,
    TableSource,
)
from .coerce import as_dict, as_list, as_text, choice, non_empty_text, optional_text, text

logger = logging.getLogger(__name__)


def _variant_properties(raw: Any) -> Optional[Dict[str, str]]:
    if not isinstance(raw, dict):
        return None
    return {str(k): as_text(v) for k, v in raw.items()}


def _normalize_item(raw: Dict[str, Any], index: int) -> ContentItem:
    component = as_dict(raw.get("component"))
    field_ref = as_dict(raw.get("field"))
    content = as_dict(raw.get("content"))
    meta = as_dict(raw.get("meta"))
    node_id = text(raw.get("nodeId"))
    value = content.get("value")
    design_system = raw.get("designSystem")

    return ContentItem(
        id=non_empty_text(raw.get("id"), node_id or f"item_{index}"),
        node_id=node_id,
        node_url=text(raw.get("nodeUrl")),
        component=ComponentRef(
            kind=choice(component.get("kind"), COMPONENT_KINDS, DEFAULT_COMPONENT_KIND),
            name=non_empty_text(component.get("name"), DEFAULT_COMPONENT_NAME),
            key=optional_text(component.get("key")),
            variant_properties=_variant_properties(component.get("variantProperties")),
        ),
        field=FieldRef(
            label=non_empty_text(field_ref.get("label"), DEFAULT_FIELD_LABEL),
            path=text(field_ref.get("path")),
        ),
        content=ItemContent(type="text", value="" if value is None else as_text(value)),
        meta=ItemMeta(
            visible=meta["visible"] if isinstance(meta.get("visible"), bool) else True,
            locked=meta["locked"] if isinstance(meta.get("locked"), bool) else False,
        ),
        text_layer_name=optional_text(raw.get("textLayerName")),
        notes=optional_text(raw.get("notes")),
        content_key=optional_text(raw.get("contentKey")),
        jira_ticket=optional_text(raw.get("jiraTicket")),
        ada_notes=optional_text(raw.get("adaNotes")),
        error_message=optional_text(raw.get("errorMessage")),
        design_system=design_system if isinstance(design_system, dict) else None,
    )


def _normalize_items(raw: Any) -> List[ContentItem]:
    items = []
    dropped = 0
    for i, item in enumerate(as_list(raw)):
        if not isinstance(item, dict):
            dropped += 1
            continue
        items.append(_normalize_item(item, i))
    if dropped:
        logger.warning(f"Dropped {dropped} content table items that were not objects")
    return items


def normalize_content_table(spec: Dict[str, Any]) -> NormalizedContentTable:
    generated_at = text(spec.get("generatedAtISO"))
    source_raw = as_dict(spec.get("source"))
    meta = as_dict(spec.get("meta"))

    source = TableSource(
        page_id=text(source_raw.get("pageId")),
        page_name=non_empty_text(source_raw.get("pageName"), DEFAULT_PAGE_NAME),
        selection_node_id=text(source_raw.get("selectionNodeId")),
        selection_name=non_empty_text(source_raw.get("selectionName"), DEFAULT_SELECTION_NAME),
    )
    design_system = spec.get("designSystemByNodeId")

    return NormalizedContentTable(
        generated_at_iso=generated_at,
        source=source,
        meta=TableMeta(
            content_model=non_empty_text(meta.get("contentModel"), DEFAULT_CONTENT_MODEL),
            content_stage=non_empty_text(meta.get("contentStage"), DEFAULT_CONTENT_STAGE),
            ada_status=non_empty_text(meta.get("adaStatus"), DEFAULT_REVIEW_STATUS),
            legal_status=non_empty_text(meta.get("legalStatus"), DEFAULT_REVIEW_STATUS),
            last_updated=non_empty_text(meta.get("lastUpdated"), generated_at),
            version=non_empty_text(meta.get("version"), DEFAULT_TABLE_VERSION),
            root_node_id=non_empty_text(meta.get("rootNodeId"), source.selection_node_id),
            root_node_name=non_empty_text(meta.get("rootNodeName"), source.selection_name),
            root_node_url=text(meta.get("rootNodeUrl")),
        ),
        items=_normalize_items(spec.get("items")),
        design_system_by_node_id=design_system if isinstance(design_system, dict) else None,
    )
