"""Provenance hashing and uniqueness scoring."""
import hashlib

import structlog

from .folding import compute_language_distribution, count_agent_types
from .models import AGENT_TYPE_COUNT, AgentEvent, AgentTransition, ProvenanceLog

logger = structlog.get_logger()

# Soft normalizer for language diversity; more languages push the term above 1
LANGUAGE_NORMALIZER = 5.0


def compute_trace_hash(trace: list[AgentEvent]) -> str:
    """
    SHA-256 over (input, output, language, agent) of every event, in order.

    Only trace content feeds the digest, so identical traces hash the same
    regardless of contributor, backend or timestamps.
    """
    hasher = hashlib.sha256()
    for event in trace:
        hasher.update(event.input.encode("utf-8"))
        hasher.update(event.output.encode("utf-8"))
        hasher.update(event.language.encode("utf-8"))
        hasher.update(str(event.agent).encode("utf-8"))
    return hasher.hexdigest()


def compute_uniqueness_score(trace: list[AgentEvent], transitions: list[AgentTransition]) -> float:
    """
    Heuristic diversity score: mean of agent, language and transition diversity.

    Not clamped to [0, 1]; language diversity exceeds 1 past five languages.
    Transition density is 0.0 for an empty trace.
    """
    agent_diversity = len(count_agent_types(trace)) / AGENT_TYPE_COUNT
    language_diversity = len(compute_language_distribution(trace)) / LANGUAGE_NORMALIZER
    if trace:
        transition_density = min(1.0, len(transitions) / len(trace))
    else:
        transition_density = 0.0

    return (agent_diversity + language_diversity + transition_density) / 3


def build_provenance(
    trace: list[AgentEvent],
    transitions: list[AgentTransition],
    contributor_id: str,
    backend_used: str,
) -> ProvenanceLog:
    """Emit a provenance record for a trace."""
    provenance = ProvenanceLog(
        trace_hash=compute_trace_hash(trace),
        agent_sequence=[event.agent for event in trace],
        contributor_id=contributor_id,
        backend_used=backend_used,
        trace_depth=len(trace),
        uniqueness_score=compute_uniqueness_score(trace, transitions),
        transitions=list(transitions),
    )

    logger.info(
        "provenance_emitted",
        contributor_id=contributor_id,
        trace_hash=provenance.trace_hash,
        trace_depth=provenance.trace_depth,
        uniqueness_score=provenance.uniqueness_score
    )
    return provenance
