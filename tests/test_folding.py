"""Tests for memory folding."""
import math

import pytest
from pydantic import ValidationError

from metatrace.agent.folding import build_summary, compression_ratio, fold_memory
from metatrace.agent.models import AgentType


def test_memory_folding(meta):
    for i in range(10):
        meta.log_event(AgentType.REASONING, f"input {i}", f"output {i}", "en", 0.9)

    folded = meta.fold_memory()
    assert folded.session_id == meta.session_id
    assert len(folded.folded_trace) == 10
    assert folded.summary
    assert folded.compression_ratio == len(folded.summary) / 150
    assert 0.0 < folded.compression_ratio <= 1.0


def test_empty_trace_fold(meta):
    folded = meta.fold_memory()

    assert folded.compression_ratio == 1.0
    assert folded.key_insights == []
    assert folded.language_distribution == {}
    assert folded.folded_trace == []
    assert folded.summary == (
        f"Session {meta.session_id} with 0 reasoning steps across 0 languages. "
        "Agent distribution: . Transitions: 0"
    )


def test_summary_template(three_step_session):
    summary = three_step_session.fold_memory().summary
    assert summary == (
        f"Session {three_step_session.session_id} with 3 reasoning steps across 1 languages. "
        "Agent distribution: Classification=1, Reasoning=1, Retrieval=1. Transitions: 2"
    )


def test_summary_is_reproducible_from_trace(three_step_session):
    trace = three_step_session.trace
    transitions = three_step_session.transitions
    assert build_summary("s1", trace, transitions) == build_summary("s1", list(trace), list(transitions))


def test_agent_distribution_follows_first_appearance(meta):
    meta.log_event(AgentType.SYNTHESIS, "a", "b", "en", 0.5)
    meta.log_event(AgentType.ACTION, "a", "b", "en", 0.5)
    meta.log_event(AgentType.SYNTHESIS, "a", "b", "en", 0.5)

    assert "Agent distribution: Synthesis=2, Action=1." in meta.fold_memory().summary


def test_compression_ratio_can_exceed_one(meta):
    meta.log_event(AgentType.REASONING, "a", "b", "en", 0.9)
    folded = meta.fold_memory()

    assert folded.compression_ratio > 1.0
    assert math.isfinite(folded.compression_ratio)


def test_compression_ratio_without_text_is_one(meta):
    meta.log_event(AgentType.REASONING, "", "", "en", 0.9)
    assert compression_ratio("anything", meta.trace) == 1.0


def test_multilingual_logging(meta):
    meta.log_event(AgentType.CLASSIFICATION, "English input", "output", "en", 0.9)
    meta.log_event(AgentType.TRANSLATION, "Indonesian input", "output", "id", 0.85)
    meta.log_event(AgentType.REASONING, "Chinese input", "output", "zh", 0.88)
    meta.log_event(AgentType.REASONING, "More Chinese", "output", "zh", 0.7)

    folded = meta.fold_memory()
    assert folded.language_distribution == {"en": 1, "id": 1, "zh": 2}
    assert folded.key_insights == [
        "3 high-confidence reasoning steps",
        "Multilingual reasoning across 3 languages",
    ]


def test_high_confidence_threshold_is_strict(meta):
    meta.log_event(AgentType.REASONING, "in", "out", "en", 0.8)
    assert meta.fold_memory().key_insights == []


def test_complex_reasoning_insight_needs_more_than_five_transitions(meta):
    agents = [AgentType.REASONING, AgentType.ACTION] * 3
    for agent in agents:
        meta.log_event(agent, "in", "out", "en", 0.5)
    assert meta.transition_count == 5
    assert meta.fold_memory().key_insights == []

    meta.log_event(AgentType.REASONING, "in", "out", "en", 0.5)
    assert meta.fold_memory().key_insights == ["Complex reasoning with 6 agent transitions"]


def test_fold_does_not_mutate_session(three_step_session):
    before = list(three_step_session.trace)
    first = three_step_session.fold_memory()
    second = three_step_session.fold_memory()

    assert three_step_session.trace == before
    assert three_step_session.transition_count == 2
    assert first.folded_trace is not three_step_session.trace
    assert first == second


def test_fold_memory_function_matches_session(three_step_session):
    folded = fold_memory(three_step_session.session_id, three_step_session.trace, three_step_session.transitions)
    assert folded == three_step_session.fold_memory()


def test_fold_is_a_read_only_snapshot(three_step_session):
    folded = three_step_session.fold_memory()
    with pytest.raises(ValidationError):
        folded.summary = "rewritten"
