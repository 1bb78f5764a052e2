"""Data models for reasoning sessions."""
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FrozenMetadata(dict):
    """Read-only string map attached to an appended event."""

    def _readonly(self, *args, **kwargs):
        raise TypeError("event metadata is read-only")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __reduce__(self):
        return (FrozenMetadata, (dict(self),))


class AgentType(str, Enum):
    """Kind of agent that produced a trace event."""
    CLASSIFICATION = "Classification"
    REASONING = "Reasoning"
    ACTION = "Action"
    RETRIEVAL = "Retrieval"
    META = "Meta"
    SYNTHESIS = "Synthesis"
    VALIDATION = "Validation"
    TRANSLATION = "Translation"

    def __str__(self) -> str:
        return self.value


# Number of distinct agent kinds, used to normalize agent diversity
AGENT_TYPE_COUNT = len(AgentType)


class AgentEvent(BaseModel):
    """One recorded reasoning step."""
    timestamp: datetime = Field(default_factory=utc_now)
    agent: AgentType
    input: str = Field(..., description="Text handed to the agent")
    output: str = Field(..., description="Text produced by the agent")
    language: str = Field(..., description="Short language tag, e.g. 'en'")
    confidence: float = Field(..., description="Agent confidence, nominally in [0, 1]")
    metadata: dict[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("metadata")
    def metadata_read_only(cls, v):
        return FrozenMetadata(v)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "timestamp": "2026-02-02T10:00:00Z",
                "agent": "Reasoning",
                "input": "Analyze quantum algorithms for logistics",
                "output": "QAOA and VQE can optimize routing",
                "language": "en",
                "confidence": 0.95,
                "metadata": {}
            }
        }


class AgentTransition(BaseModel):
    """Hand-off between two differing agent kinds."""
    from_agent: AgentType
    to_agent: AgentType
    timestamp: datetime = Field(default_factory=utc_now)
    reason: str = Field(..., description="Why the hand-off happened")
    transition_score: float = Field(..., description="Recent confidence at hand-off time")

    class Config:
        frozen = True


class ContributorProfile(BaseModel):
    """Rolling per-contributor summary across sessions."""
    contributor_id: str
    preferred_languages: list[str] = Field(default_factory=list)
    expertise_domains: list[str] = Field(default_factory=list)
    reasoning_style: str = "analytical"
    total_sessions: int = 0
    avg_trace_depth: float = 0.0


class MemoryFold(BaseModel):
    """Compressed snapshot of a session trace."""
    session_id: str
    folded_trace: list[AgentEvent]
    summary: str
    compression_ratio: float
    key_insights: list[str] = Field(default_factory=list)
    language_distribution: dict[str, int] = Field(default_factory=dict)

    class Config:
        frozen = True


class ProvenanceLog(BaseModel):
    """Content-addressed fingerprint of what a session did."""
    trace_hash: str = Field(..., description="SHA-256 of the trace, 64 lowercase hex chars")
    agent_sequence: list[AgentType]
    contributor_id: str
    backend_used: str
    timestamp: datetime = Field(default_factory=utc_now)
    trace_depth: int = Field(..., description="Number of events in the trace")
    uniqueness_score: float
    transitions: list[AgentTransition] = Field(default_factory=list)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "trace_hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "agent_sequence": ["Classification", "Reasoning"],
                "contributor_id": "contrib_abc123",
                "backend_used": "quantum_backend_v3",
                "timestamp": "2026-02-02T10:00:00Z",
                "trace_depth": 2,
                "uniqueness_score": 0.375,
                "transitions": []
            }
        }
