import pytest

from metatrace.agent.models import AgentType
from metatrace.agent.session import MetaAgent
from metatrace.leaderboard.board import Leaderboard


@pytest.fixture
def make_session():
    """Factory for sessions holding `depth` identical events."""
    def _make(contributor_id, depth, backend="backend", agent=AgentType.REASONING, language="en"):
        meta = MetaAgent(contributor_id, backend)
        for _ in range(depth):
            meta.log_event(agent, "input", "output", language, 0.9)
        return meta
    return _make


@pytest.fixture
def meta():
    return MetaAgent("test_user", "test_backend")


@pytest.fixture
def three_step_session():
    meta = MetaAgent("test_user", "test_backend")
    meta.log_event(AgentType.CLASSIFICATION, "input1", "output1", "en", 0.9)
    meta.log_event(AgentType.REASONING, "input2", "output2", "en", 0.92)
    meta.log_event(AgentType.RETRIEVAL, "input3", "output3", "en", 0.88)
    return meta


@pytest.fixture
def leaderboard():
    return Leaderboard()
