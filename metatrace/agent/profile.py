"""Contributor profile maintenance."""
import structlog

from .folding import compute_language_distribution
from .models import AgentEvent, ContributorProfile

logger = structlog.get_logger()

MAX_PREFERRED_LANGUAGES = 3


def top_languages(trace: list[AgentEvent], limit: int = MAX_PREFERRED_LANGUAGES) -> list[str]:
    """
    Most frequent language tags in a trace, most frequent first.

    Ties are broken by language tag, ascending.
    """
    distribution = compute_language_distribution(trace)
    ranked = sorted(distribution.items(), key=lambda kv: (-kv[1], kv[0]))
    return [language for language, _ in ranked[:limit]]


def update_profile(profile: ContributorProfile, trace: list[AgentEvent]) -> ContributorProfile:
    """Fold one finished session into the profile, in place."""
    profile.total_sessions += 1
    n = profile.total_sessions

    # Incremental mean over sessions
    profile.avg_trace_depth = (profile.avg_trace_depth * (n - 1) + len(trace)) / n
    # Current trace only, not historical
    profile.preferred_languages = top_languages(trace)

    logger.info(
        "profile_updated",
        contributor_id=profile.contributor_id,
        total_sessions=profile.total_sessions,
        avg_trace_depth=profile.avg_trace_depth,
        preferred_languages=profile.preferred_languages
    )
    return profile
