"""
Repair Orchestrator

When a model response fails extraction or validation, ask the model once
to reformat its own response as JSON, then extract and validate the
reply. There is never a second repair attempt.

    INITIAL --ok--> TERMINAL(success)
    INITIAL --fail--> REPAIRING --> TERMINAL(success | fallback)

A failed outcome tells the caller to render the original text through
its unstructured path.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from ..core.config import PipelineConfig
from ..core.log import resolve_logger
from ..extraction.text_extractor import ExtractionResult, extract_payload
from ..normalization.normalizer import normalize
from ..schemas.kinds import SchemaKind
from ..schemas.models import NormalizedSpec
from ..validation.validation_result import ValidationResult
from ..validation.validator import validate
from .prompts import Message, build_repair_messages, supports_repair

logger = logging.getLogger(__name__)

SendChat = Callable[[List[Message]], Awaitable[str]]

NO_JSON_FOUND = "No JSON object found in response"


class RepairState(str, Enum):
    INITIAL = "initial"
    REPAIRING = "repairing"
    TERMINAL = "terminal"


@dataclass
class RepairOutcome:
    """
    Terminal result of one orchestration.

    Attributes:
        kind: Schema that was requested.
        success: True when either attempt produced a valid payload.
        spec: Normalized artifact on success, else None.
        validation: Diagnostics from the last attempt made.
        repair_attempted: True when the re-prompt was issued.
        strategy: Extraction strategy of the last attempt ("" if none).
        transport_error: Message of a failed re-prompt call, if any.
        states: States visited, in order, ending with TERMINAL.
    """
    kind: SchemaKind
    success: bool
    spec: Optional[NormalizedSpec] = None
    validation: ValidationResult = field(default_factory=ValidationResult)
    repair_attempted: bool = False
    strategy: str = ""
    transport_error: Optional[str] = None
    states: List[RepairState] = field(default_factory=list)

    @property
    def fallback_to_text(self) -> bool:
        return not self.success


class RepairOrchestrator:
    """
    One-shot repair around an injected chat callback.

    Args:
        send_chat: Async callable taking chat messages, returning reply text.
        config: Supplies the cap on how much original text is re-sent.
        log: Optional logger (defaults to the module logger).
    """

    def __init__(
        self,
        send_chat: SendChat,
        config: Optional[PipelineConfig] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.send_chat = send_chat
        self.config = config or PipelineConfig()
        self.log = resolve_logger(log, logger)

    def _attempt(self, text: str, kind: SchemaKind):
        extraction: ExtractionResult = extract_payload(
            text, strip_progress=(kind == SchemaKind.DESIGN_SPEC_V1)
        )
        if not extraction.found:
            result = ValidationResult()
            result.error(NO_JSON_FOUND)
            return extraction, result
        return extraction, validate(extraction.decoded, kind, log=self.log)

    async def run(self, raw_text: str, kind: SchemaKind = SchemaKind.SCORECARD) -> RepairOutcome:
        """
        Drive INITIAL -> (REPAIRING) -> TERMINAL for one response.

        Raises:
            ValueError: If ``kind`` has no repair template.
        """
        kind = SchemaKind(kind)
        if not supports_repair(kind):
            raise ValueError(f"Repair is not supported for {kind.value}")

        states = [RepairState.INITIAL]
        extraction, validation = self._attempt(raw_text, kind)
        if validation.ok:
            self.log.info(f"[repair:{kind.value}] Initial response valid ({extraction.strategy})")
            states.append(RepairState.TERMINAL)
            return RepairOutcome(
                kind=kind,
                success=True,
                spec=normalize(extraction.decoded, kind, log=self.log),
                validation=validation,
                strategy=extraction.strategy,
                states=states,
            )

        self.log.warning(
            f"[repair:{kind.value}] Initial response invalid: {'; '.join(validation.errors[:5])}"
        )
        states.append(RepairState.REPAIRING)
        messages = build_repair_messages(kind, raw_text, cap=self.config.repair_text_cap)

        try:
            reply = await self.send_chat(messages)
        except Exception as exc:
            self.log.error(f"[repair:{kind.value}] Re-prompt failed: {exc}")
            states.append(RepairState.TERMINAL)
            return RepairOutcome(
                kind=kind,
                success=False,
                validation=validation,
                repair_attempted=True,
                transport_error=str(exc),
                states=states,
            )

        extraction, repaired = self._attempt(reply, kind)
        states.append(RepairState.TERMINAL)
        if not repaired.ok:
            self.log.warning(
                f"[repair:{kind.value}] Repaired response still invalid; "
                f"falling back to text: {'; '.join(repaired.errors[:5])}"
            )
            return RepairOutcome(
                kind=kind,
                success=False,
                validation=repaired,
                repair_attempted=True,
                strategy=extraction.strategy,
                states=states,
            )

        self.log.info(f"[repair:{kind.value}] Repair succeeded ({extraction.strategy})")
        return RepairOutcome(
            kind=kind,
            success=True,
            spec=normalize(extraction.decoded, kind, log=self.log),
            validation=repaired,
            repair_attempted=True,
            strategy=extraction.strategy,
            states=states,
        )
