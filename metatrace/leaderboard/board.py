"""Leaderboard aggregation over submitted provenance records."""
from typing import Optional

import structlog

from ..agent.models import ProvenanceLog
from ..export import models_to_json
from . import ranking
from .models import ContributorStats, RankingCriteria

logger = structlog.get_logger()


class Leaderboard:
    """
    Keeps one ContributorStats per contributor plus every submission.

    add_entry is the only mutation and re-ranks all entries under
    RankingCriteria.COMBINED. Submitted records are copied on the way in
    and every read returns copies, so callers cannot alter the board's
    state. Hosts sharing a board across writers must serialize add_entry
    calls.
    """

    def __init__(self):
        self._entries: list[ContributorStats] = []
        self._by_contributor: dict[str, ContributorStats] = {}
        self._history: dict[str, list[ProvenanceLog]] = {}

    def add_entry(self, provenance: ProvenanceLog, languages: list[str]) -> ContributorStats:
        """Fold one provenance record into the contributor's aggregate."""
        contributor_id = provenance.contributor_id
        history = self._history.setdefault(contributor_id, [])
        history.append(provenance.model_copy(deep=True))

        existing = self._by_contributor.get(contributor_id)
        if existing is not None:
            existing.total_submissions += 1
            existing.trace_depth = max(existing.trace_depth, provenance.trace_depth)
            # Last write wins for identity of the latest submission
            existing.provenance_hash = provenance.trace_hash
            existing.backend_used = provenance.backend_used
            existing.last_updated = provenance.timestamp
            existing.uniqueness_score = max(existing.uniqueness_score, provenance.uniqueness_score)
            # Exact mean over the full history
            existing.avg_trace_depth = sum(p.trace_depth for p in history) / len(history)
            for language in languages:
                if language not in existing.languages_used:
                    existing.languages_used.append(language)
            stats = existing

            logger.info(
                "leaderboard_entry_added",
                contributor_id=contributor_id,
                total_submissions=stats.total_submissions,
                trace_depth=provenance.trace_depth
            )
        else:
            stats = ContributorStats(
                contributor_id=contributor_id,
                trace_depth=provenance.trace_depth,
                provenance_hash=provenance.trace_hash,
                backend_used=provenance.backend_used,
                last_updated=provenance.timestamp,
                uniqueness_score=provenance.uniqueness_score,
                total_submissions=1,
                avg_trace_depth=float(provenance.trace_depth),
                languages_used=list(dict.fromkeys(languages)),
            )
            self._entries.append(stats)
            self._by_contributor[contributor_id] = stats

            logger.info(
                "leaderboard_entry_created",
                contributor_id=contributor_id,
                trace_depth=provenance.trace_depth
            )

        self.update_ranks(RankingCriteria.COMBINED)
        return stats.model_copy(deep=True)

    def update_ranks(self, criteria: RankingCriteria) -> None:
        """Assign 1-based ranks to every entry under the given criterion."""
        criteria = RankingCriteria(criteria)
        for position, stats in enumerate(ranking.rank(self._entries, criteria), 1):
            stats.rank = position
        logger.debug("ranks_updated", criteria=criteria.value, entries=len(self._entries))

    @staticmethod
    def _copies(entries: list[ContributorStats]) -> list[ContributorStats]:
        return [stats.model_copy(deep=True) for stats in entries]

    @property
    def entries(self) -> list[ContributorStats]:
        """Copies of all entries, in first-submission order."""
        return self._copies(self._entries)

    def rank(self, criteria: RankingCriteria) -> list[ContributorStats]:
        return self._copies(ranking.rank(self._entries, RankingCriteria(criteria)))

    def rank_by_depth(self) -> list[ContributorStats]:
        return self.rank(RankingCriteria.TRACE_DEPTH)

    def rank_by_uniqueness(self) -> list[ContributorStats]:
        return self.rank(RankingCriteria.UNIQUENESS_SCORE)

    def rank_by_submissions(self) -> list[ContributorStats]:
        return self.rank(RankingCriteria.TOTAL_SUBMISSIONS)

    def rank_by_avg_depth(self) -> list[ContributorStats]:
        return self.rank(RankingCriteria.AVG_TRACE_DEPTH)

    def rank_combined(self) -> list[ContributorStats]:
        return self.rank(RankingCriteria.COMBINED)

    @staticmethod
    def compute_combined_score(stats: ContributorStats) -> float:
        return ranking.compute_combined_score(stats)

    def get_top_n(self, n: int, criteria: RankingCriteria) -> list[ContributorStats]:
        """First n entries of the full ranking."""
        return self.rank(criteria)[:max(0, n)]

    def get_contributor(self, contributor_id: str) -> Optional[ContributorStats]:
        stats = self._by_contributor.get(contributor_id)
        if stats is None:
            logger.debug("contributor_not_found", contributor_id=contributor_id)
            return None
        return stats.model_copy(deep=True)

    def get_contributor_history(self, contributor_id: str) -> Optional[list[ProvenanceLog]]:
        """Every provenance record submitted by a contributor, oldest first."""
        history = self._history.get(contributor_id)
        if history is None:
            logger.debug("contributor_not_found", contributor_id=contributor_id)
            return None
        return [provenance.model_copy(deep=True) for provenance in history]

    def total_contributors(self) -> int:
        return len(self._entries)

    def total_submissions(self) -> int:
        return sum(s.total_submissions for s in self._entries)

    def export_json(self, criteria: RankingCriteria) -> str:
        """Pretty JSON array of ContributorStats in ranked order."""
        return models_to_json(self.rank(criteria), ContributorStats)
