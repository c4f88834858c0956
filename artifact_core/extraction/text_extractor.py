"""
Text Extractor - recover one JSON object from free-form model output.

Model responses wrap JSON in prose, markdown fences and trailing
commentary. Strategies are tried in a fixed order and the first that
yields a JSON object wins:

1. direct_parse  - the whole trimmed text parses as an object
2. markdown_fence - the contents of a ```json (or bare ```) fence
3. brace_balanced - walk from the first '{' tracking depth while
   respecting string literals and escapes

There is no loose regex fallback. Braces inside quoted text must never
close a candidate early.

The strategy functions are pure; ``extract_payload`` additionally logs
which strategy won.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

STRATEGY_DIRECT = "direct_parse"
STRATEGY_FENCE = "markdown_fence"
STRATEGY_BRACE = "brace_balanced"

_FENCE_RE = re.compile(r"```[ \t]*([A-Za-z0-9_+-]*)[ \t]*\r?\n?(.*?)```", re.DOTALL)

# Streaming progress lines such as "generate: 3/5 (60%)"
_PROGRESS_RE = re.compile(r"generate:\s*\d+/\d+\s*\(\d+%\)", re.IGNORECASE)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_json(candidate: str) -> Any:
    """Strict JSON decode: NaN and Infinity literals are rejected.

    Raises:
        ValueError: If ``candidate`` is not valid JSON.
    """
    return json.loads(candidate, parse_constant=_reject_constant)


def _parses_as_object(candidate: str) -> bool:
    try:
        return isinstance(decode_json(candidate), dict)
    except (json.JSONDecodeError, ValueError, RecursionError):
        return False


def _find_fenced_object(text: str) -> Optional[str]:
    """Return the first fenced block whose contents parse as a JSON object."""
    for match in _FENCE_RE.finditer(text):
        tag = match.group(1)
        if tag and tag.lower() != "json":
            continue
        body = match.group(2).strip()
        if body and _parses_as_object(body):
            return body
    return None


def _find_balanced_object(text: str) -> Optional[str]:
    """Walk from the first '{' to its matching '}' and return that span.

    A backslash inside a string consumes exactly the next character, so an
    escaped quote never toggles the in-string flag. Outside strings a
    backslash has no special meaning.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for i in range(start, len(text)):
        ch = text[i]

        if escape_next:
            escape_next = False
            continue

        if in_string:
            if ch == "\\":
                escape_next = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start:i + 1]
                return candidate if _parses_as_object(candidate) else None

    return None


def extract_json_candidate(text: Optional[str]) -> Tuple[Optional[str], str]:
    """Try each strategy in order and report which one succeeded.

    Returns:
        (candidate_json, strategy_name) on success, (None, "") on failure.
    """
    if not isinstance(text, str):
        return None, ""

    stripped = text.strip()
    if not stripped:
        return None, ""

    # Strategy 1: Direct parse
    if _parses_as_object(stripped):
        return stripped, STRATEGY_DIRECT

    # Strategy 2: Markdown fence
    fenced = _find_fenced_object(stripped)
    if fenced is not None:
        return fenced, STRATEGY_FENCE

    # Strategy 3: Brace-balanced walk
    balanced = _find_balanced_object(stripped)
    if balanced is not None:
        return balanced, STRATEGY_BRACE

    return None, ""


def extract(text: Optional[str]) -> Optional[str]:
    """Return the candidate JSON object substring of ``text``, or None."""
    candidate, _ = extract_json_candidate(text)
    return candidate


def strip_progress_markers(text: str) -> str:
    """Remove streaming progress markers some backends interleave with output."""
    return _PROGRESS_RE.sub("", text)


@dataclass
class ExtractionResult:
    """
    Candidate JSON plus its decoded value.

    ``found`` is False when no strategy succeeded; that is a legitimate
    "this text is not structured" signal, not an error.
    """
    candidate: Optional[str]
    strategy: str
    decoded: Any = None

    @property
    def found(self) -> bool:
        return self.candidate is not None


def extract_payload(text: Optional[str], strip_progress: bool = False) -> ExtractionResult:
    """Extract and decode in one step, logging which strategy won."""
    if strip_progress and isinstance(text, str):
        text = strip_progress_markers(text)

    candidate, strategy = extract_json_candidate(text)
    if candidate is None:
        sample = text[:2000] if isinstance(text, str) else repr(text)
        logger.warning(
            f"All JSON extraction strategies failed. Response (first 2000 chars): {sample}"
        )
        return ExtractionResult(candidate=None, strategy="")

    logger.info(f"Extracted JSON object ({len(candidate)} chars) using strategy: {strategy}")
    return ExtractionResult(candidate=candidate, strategy=strategy, decoded=decode_json(candidate))
