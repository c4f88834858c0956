"""Tests for the one-shot repair flow.

The chat callback is an AsyncMock; coroutines are driven with asyncio.run.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from artifact_core.core import PipelineConfig
from artifact_core.llm import TransportError
from artifact_core.repair import (
    JSON_ONLY_SYSTEM,
    NO_JSON_FOUND,
    RepairOrchestrator,
    RepairState,
    build_repair_messages,
    enforce_json_only,
)
from artifact_core.schemas import NormalizedDesignSpec, NormalizedScorecard, SchemaKind

VALID_REPLY = json.dumps({"score": 72, "summary": "Fixed", "wins": ["w"], "fixes": ["f"]})
PROSE = "The design is good overall. Score: about eighty. Wins: spacing. Fixes: contrast."


def run(orchestrator, text, kind=SchemaKind.SCORECARD):
    return asyncio.run(orchestrator.run(text, kind))


class TestInitialSuccess:

    def test_valid_response_skips_repair(self):
        send_chat = AsyncMock(return_value=VALID_REPLY)
        text = (
            "Here's my analysis:\n```json\n"
            '{"score": 85, "summary": "ok", "wins": ["a"], "fixes": ["b"]}\n```\nThanks'
        )
        outcome = run(RepairOrchestrator(send_chat), text)

        assert outcome.success
        assert not outcome.repair_attempted
        assert isinstance(outcome.spec, NormalizedScorecard)
        assert outcome.spec.score == 85
        assert outcome.strategy == "markdown_fence"
        assert outcome.states == [RepairState.INITIAL, RepairState.TERMINAL]
        send_chat.assert_not_awaited()


class TestRepair:

    def test_prose_is_repaired_once(self):
        send_chat = AsyncMock(return_value=VALID_REPLY)
        outcome = run(RepairOrchestrator(send_chat), PROSE)

        assert outcome.success
        assert outcome.repair_attempted
        assert outcome.spec.score == 72
        assert outcome.states == [RepairState.INITIAL, RepairState.REPAIRING, RepairState.TERMINAL]
        send_chat.assert_awaited_once()

    def test_invalid_json_triggers_repair(self):
        send_chat = AsyncMock(return_value=VALID_REPLY)
        outcome = run(RepairOrchestrator(send_chat), '{"score": 150, "wins": [], "fixes": []}')
        assert outcome.success
        assert outcome.spec.score == 72

    def test_failed_repair_falls_back_without_retry(self):
        send_chat = AsyncMock(return_value="Sorry, I cannot produce JSON.")
        outcome = run(RepairOrchestrator(send_chat), PROSE)

        assert not outcome.success
        assert outcome.fallback_to_text
        assert outcome.spec is None
        assert outcome.validation.errors == [NO_JSON_FOUND]
        assert send_chat.await_count == 1

    def test_repaired_but_still_invalid(self):
        send_chat = AsyncMock(return_value='{"score": -1, "wins": [], "fixes": []}')
        outcome = run(RepairOrchestrator(send_chat), PROSE)
        assert not outcome.success
        assert any("score must be between" in e for e in outcome.validation.errors)
        assert outcome.strategy == "direct_parse"

    def test_transport_error_is_a_failed_repair(self):
        send_chat = AsyncMock(side_effect=TransportError("boom", http_status=502))
        outcome = run(RepairOrchestrator(send_chat), PROSE)

        assert not outcome.success
        assert outcome.repair_attempted
        assert "boom" in outcome.transport_error
        assert outcome.states[-1] == RepairState.TERMINAL


class TestPrompt:

    def test_original_text_capped(self):
        send_chat = AsyncMock(return_value=VALID_REPLY)
        long_text = "x" * 1999 + "ABCDEF"
        run(RepairOrchestrator(send_chat, config=PipelineConfig(repair_text_cap=2000)), long_text)

        messages = send_chat.await_args.args[0]
        assert messages[0] == {"role": "system", "content": JSON_ONLY_SYSTEM}
        user = messages[1]["content"]
        assert "x" * 1999 + "A" in user
        assert "AB" not in user
        assert '"score": number (0-100)' in user

    def test_design_spec_template(self):
        messages = build_repair_messages(SchemaKind.DESIGN_SPEC_V1, "three screens please")
        assert "DesignSpecV1" in messages[1]["content"]
        assert messages[1]["content"].endswith("three screens please")

    def test_unsupported_kind_raises(self):
        with pytest.raises(ValueError):
            build_repair_messages(SchemaKind.CONTENT_TABLE_V1, "text")
        with pytest.raises(ValueError):
            run(RepairOrchestrator(AsyncMock()), PROSE, SchemaKind.DISCOVERY_SPEC_V1)

    def test_enforce_json_only_copies(self):
        original = [{"role": "user", "content": "Critique this"}]
        messages = enforce_json_only(original, SchemaKind.SCORECARD)
        assert len(original) == 1
        assert len(messages) == 2
        assert messages[-1]["role"] == "user"
        assert "ONLY the JSON object" in messages[-1]["content"]


class TestDesignSpecRepair:

    def test_progress_markers_stripped_before_extraction(self):
        reply = json.dumps({
            "type": "designScreens",
            "version": 1,
            "meta": {"title": "T"},
            "canvas": {"device": {"kind": "tablet", "width": 768, "height": 1024}},
            "render": {"intent": {"fidelity": "hi"}},
            "screens": [{"name": "One", "blocks": []}],
        })
        send_chat = AsyncMock(return_value=f"generate: 1/1 (100%)\n{reply}")
        outcome = run(RepairOrchestrator(send_chat), "not json", SchemaKind.DESIGN_SPEC_V1)

        assert outcome.success
        assert isinstance(outcome.spec, NormalizedDesignSpec)
        assert outcome.spec.device.kind == "tablet"
