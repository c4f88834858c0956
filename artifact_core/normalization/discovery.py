"""DiscoverySpecV1 normalization."""

from typing import Any, Dict, List

from ..schemas.kinds import (
    DEFAULT_DISCOVERY_TITLE,
    DEFAULT_OWNER_ROLE,
    DEFAULT_RISK_TYPE,
    DISCOVERY_TRUNCATION_NOTICE,
    HYPOTHESIS_STATUSES,
    IMPACT_LEVELS,
    MAX_ASYNC_TASKS,
    MAX_DECISIONS,
    MAX_HYPOTHESES,
    MAX_RISKS,
    MAX_TITLE_LENGTH,
    OWNER_ROLES,
    PROBLEM_FRAME_FIELDS,
    RISK_TYPES,
    TITLE_KEEP_CHARS,
)
from ..schemas.models import (
    AsyncTask,
    DecisionEntry,
    DiscoveryMeta,
    HypothesisItem,
    NormalizedDiscoverySpec,
    ProblemFrame,
    RiskItem,
)
from .coerce import (
    TruncationTracker,
    as_dict,
    as_list,
    choice,
    non_empty_text,
    optional_choice,
    optional_text,
    positive_number,
    text,
)


def _shorten(title: str) -> str:
    if len(title) <= MAX_TITLE_LENGTH:
        return title
    return title[:TITLE_KEEP_CHARS] + "..."


def derive_title(user_request: Any) -> str:
    """Title from the user's request: trimmed, at most 48 characters."""
    request = user_request.strip() if isinstance(user_request, str) else ""
    if not request:
        return DEFAULT_DISCOVERY_TITLE
    return _shorten(request)


def _normalize_title(meta: Dict[str, Any]) -> str:
    title = meta.get("title")
    if not isinstance(title, str) or not title.strip():
        return derive_title(meta.get("userRequest"))
    return _shorten(title)


def _risks(raw: List[Any]) -> List[RiskItem]:
    return [
        RiskItem(
            id=non_empty_text(item.get("id"), f"risk-{i + 1}"),
            type=choice(item.get("type"), RISK_TYPES, DEFAULT_RISK_TYPE),
            description=text(item.get("description")),
            impact=optional_choice(item.get("impact"), IMPACT_LEVELS),
        )
        for i, item in enumerate(raw)
        if isinstance(item, dict)
    ]


def _hypotheses(raw: List[Any]) -> List[HypothesisItem]:
    return [
        HypothesisItem(
            id=non_empty_text(item.get("id"), f"hyp-{i + 1}"),
            hypothesis=text(item.get("hypothesis")),
            experiment=optional_text(item.get("experiment")),
            status=optional_choice(item.get("status"), HYPOTHESIS_STATUSES),
        )
        for i, item in enumerate(raw)
        if isinstance(item, dict)
    ]


def _decisions(raw: List[Any]) -> List[DecisionEntry]:
    return [
        DecisionEntry(
            timestamp=text(item.get("timestamp")),
            decision=text(item.get("decision")),
            rationale=optional_text(item.get("rationale")),
            context=optional_text(item.get("context")),
        )
        for item in raw
        if isinstance(item, dict)
    ]


def _tasks(raw: List[Any]) -> List[AsyncTask]:
    return [
        AsyncTask(
            owner_role=choice(item.get("ownerRole"), OWNER_ROLES, DEFAULT_OWNER_ROLE),
            task=text(item.get("task")),
            due_in_hours=positive_number(item.get("dueInHours"), None),
        )
        for item in raw
        if isinstance(item, dict)
    ]


def normalize_discovery(spec: Dict[str, Any]) -> NormalizedDiscoverySpec:
    meta = as_dict(spec.get("meta"))
    tracker = TruncationTracker(meta.get("truncationNotice"))
    frame = as_dict(spec.get("problemFrame"))

    risks = tracker.cap(as_list(spec.get("risksAndAssumptions")), MAX_RISKS, DISCOVERY_TRUNCATION_NOTICE)
    hypotheses = tracker.cap(
        as_list(spec.get("hypothesesAndExperiments")), MAX_HYPOTHESES, DISCOVERY_TRUNCATION_NOTICE
    )
    decisions = tracker.cap(as_list(spec.get("decisionLog")), MAX_DECISIONS, DISCOVERY_TRUNCATION_NOTICE)
    tasks = tracker.cap(as_list(spec.get("asyncTasks")), MAX_ASYNC_TASKS, DISCOVERY_TRUNCATION_NOTICE)

    return NormalizedDiscoverySpec(
        meta=DiscoveryMeta(
            title=_normalize_title(meta),
            user_request=optional_text(meta.get("userRequest")),
            run_id=optional_text(meta.get("runId")),
            truncation_notice=tracker.notice,
        ),
        problem_frame=ProblemFrame(**{name: text(frame.get(name)) for name in PROBLEM_FRAME_FIELDS}),
        risks_and_assumptions=_risks(risks),
        hypotheses_and_experiments=_hypotheses(hypotheses),
        decision_log=_decisions(decisions),
        async_tasks=_tasks(tasks),
    )
