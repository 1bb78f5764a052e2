"""Memory folding: compress a session trace into a summary."""
from collections import Counter

import structlog

from .models import AgentEvent, AgentTransition, AgentType, MemoryFold

logger = structlog.get_logger()

HIGH_CONFIDENCE_THRESHOLD = 0.8
COMPLEX_TRANSITION_THRESHOLD = 5


def count_agent_types(trace: list[AgentEvent]) -> dict[AgentType, int]:
    """Occurrences per agent kind, keyed in order of first appearance."""
    return dict(Counter(event.agent for event in trace))


def compute_language_distribution(trace: list[AgentEvent]) -> dict[str, int]:
    """Number of events per language tag."""
    return dict(Counter(event.language for event in trace))


def build_summary(session_id: str, trace: list[AgentEvent], transitions: list[AgentTransition]) -> str:
    """Render the fixed summary sentence for a trace."""
    distribution = ", ".join(
        f"{agent}={count}" for agent, count in count_agent_types(trace).items()
    )
    languages = compute_language_distribution(trace)

    return (
        f"Session {session_id} with {len(trace)} reasoning steps "
        f"across {len(languages)} languages. "
        f"Agent distribution: {distribution}. "
        f"Transitions: {len(transitions)}"
    )


def extract_key_insights(trace: list[AgentEvent], transitions: list[AgentTransition]) -> list[str]:
    """Qualitative observations, emitted only when their trigger holds."""
    insights = []

    high_confidence = sum(1 for e in trace if e.confidence > HIGH_CONFIDENCE_THRESHOLD)
    if high_confidence > 0:
        insights.append(f"{high_confidence} high-confidence reasoning steps")

    languages = compute_language_distribution(trace)
    if len(languages) > 1:
        insights.append(f"Multilingual reasoning across {len(languages)} languages")

    if len(transitions) > COMPLEX_TRANSITION_THRESHOLD:
        insights.append(f"Complex reasoning with {len(transitions)} agent transitions")

    return insights


def compression_ratio(summary: str, trace: list[AgentEvent]) -> float:
    """
    Summary length over total input+output length.

    Defined as 1.0 when the trace holds no text (including an empty
    trace). Not capped: tiny traces can yield a ratio above 1.0.
    """
    total_chars = sum(len(e.input) + len(e.output) for e in trace)
    if total_chars == 0:
        return 1.0
    return len(summary) / total_chars


def fold_memory(session_id: str, trace: list[AgentEvent], transitions: list[AgentTransition]) -> MemoryFold:
    """Fold a trace into a MemoryFold snapshot. Does not mutate its inputs."""
    summary = build_summary(session_id, trace, transitions)

    fold = MemoryFold(
        session_id=session_id,
        folded_trace=list(trace),
        summary=summary,
        compression_ratio=compression_ratio(summary, trace),
        key_insights=extract_key_insights(trace, transitions),
        language_distribution=compute_language_distribution(trace),
    )

    logger.debug(
        "memory_folded",
        session_id=session_id,
        trace_depth=len(trace),
        compression_ratio=fold.compression_ratio,
        insights=len(fold.key_insights)
    )
    return fold
