"""
Work adapter: optional deployment-specific behaviour.

A ``WorkAdapter`` is passed to the pipeline at construction time. With no
adapter the pipeline behaves as a plain install. The only extension point
today is content-table ignore rules, which drop rows after normalization.

Rules can be loaded from YAML:

    nodeNamePatterns: ["^Debug", ".*FPO.*"]
    nodeIdPrefixes: ["I1234:"]
    componentKeyAllowlist: []
    componentKeyDenylist: ["abc123"]
    textValuePatterns: [".*lorem.*"]
"""

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional, Pattern, Union

import yaml

from ..core.config import ConfigError
from ..schemas.models import ContentItem, NormalizedContentTable

logger = logging.getLogger(__name__)


def _compile(patterns: List[str], label: str) -> List[Pattern]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            logger.warning(f"Skipping invalid {label} pattern {pattern!r}: {e}")
    return compiled


def _string_list(data: dict, key: str) -> List[str]:
    value = data.get(key) or []
    if not isinstance(value, list):
        logger.warning(f"Ignoring {key}: expected a list, got {type(value).__name__}")
        return []
    return [str(v) for v in value]


@dataclass
class ContentTableIgnoreRules:
    """
    Rules for dropping content-table rows.

    Attributes:
        node_name_patterns: Regexes matched against the text layer name
            (falling back to the field label).
        node_id_prefixes: Node id prefixes to drop.
        component_key_allowlist: If non-empty, only rows whose component key
            is listed are kept.
        component_key_denylist: Component keys to drop.
        text_value_patterns: Regexes matched against the text content.
    """
    node_name_patterns: List[str] = field(default_factory=list)
    node_id_prefixes: List[str] = field(default_factory=list)
    component_key_allowlist: List[str] = field(default_factory=list)
    component_key_denylist: List[str] = field(default_factory=list)
    text_value_patterns: List[str] = field(default_factory=list)

    def __post_init__(self):
        self._name_res = _compile(self.node_name_patterns, "node name")
        self._text_res = _compile(self.text_value_patterns, "text value")

    @classmethod
    def from_dict(cls, data: Any) -> "ContentTableIgnoreRules":
        if not isinstance(data, dict):
            return cls()
        return cls(
            node_name_patterns=_string_list(data, "nodeNamePatterns"),
            node_id_prefixes=_string_list(data, "nodeIdPrefixes"),
            component_key_allowlist=_string_list(data, "componentKeyAllowlist"),
            component_key_denylist=_string_list(data, "componentKeyDenylist"),
            text_value_patterns=_string_list(data, "textValuePatterns"),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ContentTableIgnoreRules":
        """
        Load rules from a YAML file.

        Raises:
            ConfigError: If the file is missing or not valid YAML.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError("Ignore rules file not found", path=path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path=path) from e
        return cls.from_dict(data)

    def should_ignore(self, item: ContentItem) -> bool:
        name = item.text_layer_name or item.field.label
        if any(r.search(name) for r in self._name_res):
            return True
        if any(item.node_id.startswith(p) for p in self.node_id_prefixes):
            return True
        key = item.component.key
        if self.component_key_allowlist and key not in self.component_key_allowlist:
            return True
        if key is not None and key in self.component_key_denylist:
            return True
        return any(r.search(item.content.value) for r in self._text_res)


class WorkAdapter:
    """
    Deployment-specific extension points.

    Args:
        ignore_rules: Content-table ignore rules, or None for no filtering.
    """

    def __init__(self, ignore_rules: Optional[ContentTableIgnoreRules] = None):
        self.ignore_rules = ignore_rules

    def get_content_table_ignore_rules(self) -> Optional[ContentTableIgnoreRules]:
        return self.ignore_rules

    def filter_content_table(self, table: NormalizedContentTable) -> NormalizedContentTable:
        """Return ``table`` without the rows the ignore rules match."""
        rules = self.get_content_table_ignore_rules()
        if rules is None:
            return table
        kept = [item for item in table.items if not rules.should_ignore(item)]
        dropped = len(table.items) - len(kept)
        if dropped:
            logger.info(f"Ignore rules dropped {dropped} of {len(table.items)} content table rows")
        return replace(table, items=kept)
