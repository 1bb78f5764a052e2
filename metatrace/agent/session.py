"""MetaAgent session: records the reasoning trace and agent hand-offs."""
import uuid
from typing import Optional

import structlog

from ..config import DEFAULT_LANGUAGE, DEFAULT_REASONING_STYLE
from ..export import model_to_json, models_to_json
from .folding import fold_memory
from .models import (
    AgentEvent,
    AgentTransition,
    AgentType,
    ContributorProfile,
    MemoryFold,
    ProvenanceLog,
)
from .profile import update_profile
from .provenance import build_provenance

logger = structlog.get_logger()

# Transition score averages the confidence of this many most recent events
TRANSITION_WINDOW = 3


def generate_session_id() -> str:
    """Generate unique session ID."""
    return f"session_{uuid.uuid4().hex[:12]}"


def default_profile(contributor_id: str) -> ContributorProfile:
    return ContributorProfile(
        contributor_id=contributor_id,
        preferred_languages=[DEFAULT_LANGUAGE],
        expertise_domains=[],
        reasoning_style=DEFAULT_REASONING_STYLE,
    )


class MetaAgent:
    """
    One reasoning session for a contributor.

    Owned by a single writer: events are appended in call order and a
    transition is derived whenever the agent kind changes.
    """

    def __init__(self, contributor_id: str, backend_used: str, profile: Optional[ContributorProfile] = None):
        self.contributor_id = contributor_id
        self.backend_used = backend_used
        self.profile = profile if profile is not None else default_profile(contributor_id)
        self.session_id = generate_session_id()
        self.trace: list[AgentEvent] = []
        self.transitions: list[AgentTransition] = []
        self.current_agent: Optional[AgentType] = None

        logger.debug(
            "session_created",
            session_id=self.session_id,
            contributor_id=contributor_id,
            backend_used=backend_used
        )

    @classmethod
    def with_profile(cls, contributor_id: str, backend_used: str, profile: ContributorProfile) -> "MetaAgent":
        """Create a session that starts from an existing profile."""
        return cls(contributor_id, backend_used, profile=profile)

    def log_event(self, agent: AgentType, input: str, output: str, language: str, confidence: float) -> AgentEvent:
        """Append an event with empty metadata."""
        return self.log_event_with_metadata(agent, input, output, language, confidence, {})

    def log_event_with_metadata(
        self,
        agent: AgentType,
        input: str,
        output: str,
        language: str,
        confidence: float,
        metadata: dict[str, str],
    ) -> AgentEvent:
        """Append an event, tracking a transition first if the agent changed."""
        if self.current_agent is not None and self.current_agent != agent:
            self.track_transition(self.current_agent, agent, "natural_flow")

        event = AgentEvent(
            agent=agent,
            input=input,
            output=output,
            language=language,
            confidence=confidence,
            metadata=dict(metadata),
        )
        self.trace.append(event)
        self.current_agent = agent

        logger.debug(
            "event_logged",
            session_id=self.session_id,
            agent=str(agent),
            language=language,
            confidence=confidence,
            trace_depth=len(self.trace)
        )
        return event

    def track_transition(self, from_agent: AgentType, to_agent: AgentType, reason: str) -> AgentTransition:
        """Record a hand-off scored on the events logged so far."""
        transition = AgentTransition(
            from_agent=from_agent,
            to_agent=to_agent,
            reason=reason,
            transition_score=self._compute_transition_score(),
        )
        self.transitions.append(transition)

        logger.debug(
            "transition_tracked",
            session_id=self.session_id,
            from_agent=str(from_agent),
            to_agent=str(to_agent),
            reason=reason,
            transition_score=transition.transition_score
        )
        return transition

    def _compute_transition_score(self) -> float:
        if not self.trace:
            return 1.0
        recent = self.trace[-TRANSITION_WINDOW:]
        return sum(e.confidence for e in recent) / len(recent)

    @property
    def trace_depth(self) -> int:
        return len(self.trace)

    @property
    def transition_count(self) -> int:
        return len(self.transitions)

    def get_trace_depth(self) -> int:
        return self.trace_depth

    def get_transition_count(self) -> int:
        return self.transition_count

    def fold_memory(self) -> MemoryFold:
        return fold_memory(self.session_id, self.trace, self.transitions)

    def emit_provenance(self) -> ProvenanceLog:
        return build_provenance(self.trace, self.transitions, self.contributor_id, self.backend_used)

    def update_profile(self) -> ContributorProfile:
        return update_profile(self.profile, self.trace)

    def export_trace_json(self) -> str:
        """Pretty JSON array of the trace events, in trace order."""
        return models_to_json(self.trace, AgentEvent)

    def export_provenance_json(self) -> str:
        """Pretty JSON of a freshly emitted provenance record."""
        return model_to_json(self.emit_provenance())
