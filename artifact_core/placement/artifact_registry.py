"""
Artifact registry helpers.

Generated artifacts are frames tagged with plugin data
(``artifactType``, ``artifactVersion``). Callers enforce at most one live
artifact per (type, version) by finding existing ones before placing a
replacement.
"""

from typing import Any, Dict, List, Optional, Set

ARTIFACT_TYPE_KEY = "artifactType"
ARTIFACT_VERSION_KEY = "artifactVersion"


def artifact_frame_name(artifact_type: str, version: str) -> str:
    """Frame title for a generated artifact, e.g. ``Artifact - Scorecard (v2)``."""
    title = artifact_type.replace("_", " ").replace("-", " ").title()
    return f"Artifact - {title} ({version})"


def artifact_tags(artifact_type: str, version: str) -> Dict[str, str]:
    return {ARTIFACT_TYPE_KEY: artifact_type, ARTIFACT_VERSION_KEY: version}


def _plugin_data(node: Any, key: str) -> Optional[str]:
    getter = getattr(node, "get_plugin_data", None)
    if callable(getter):
        return getter(key)
    data = getattr(node, "plugin_data", None)
    if isinstance(data, dict):
        return data.get(key)
    return None


def find_existing_artifacts(root: Any, artifact_type: str, version: str) -> List[Any]:
    """
    Find every node under ``root`` tagged with this artifact type and version.

    Uses an explicit stack and a visited set keyed by node identity, so
    shared or cyclic child references are visited once. Results are in
    document (pre-)order. ``root`` itself is not a candidate.
    """
    found: List[Any] = []
    visited: Set[int] = {id(root)}
    stack = list(reversed(list(getattr(root, "children", None) or [])))

    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))

        if (
            _plugin_data(node, ARTIFACT_TYPE_KEY) == artifact_type
            and _plugin_data(node, ARTIFACT_VERSION_KEY) == version
        ):
            found.append(node)

        children = getattr(node, "children", None) or []
        stack.extend(reversed(list(children)))

    return found
