"""Ranking orders for contributor stats."""
import math

from .models import ContributorStats, RankingCriteria

# Combined score weights and normalizers
DEPTH_WEIGHT = 0.3
UNIQUENESS_WEIGHT = 0.4
SUBMISSIONS_WEIGHT = 0.15
AVG_DEPTH_WEIGHT = 0.15

DEPTH_NORMALIZER = 100.0
SUBMISSIONS_NORMALIZER = 5.0
AVG_DEPTH_NORMALIZER = 50.0


def compute_combined_score(stats: ContributorStats) -> float:
    """
    Weighted blend of depth, uniqueness, submissions and average depth.

    Submissions enter on a log scale, so a single submission adds nothing.
    """
    depth_score = stats.trace_depth / DEPTH_NORMALIZER
    submission_score = math.log(stats.total_submissions) / SUBMISSIONS_NORMALIZER
    avg_depth_score = stats.avg_trace_depth / AVG_DEPTH_NORMALIZER

    return (
        DEPTH_WEIGHT * depth_score
        + UNIQUENESS_WEIGHT * stats.uniqueness_score
        + SUBMISSIONS_WEIGHT * submission_score
        + AVG_DEPTH_WEIGHT * avg_depth_score
    )


# All orders are descending; sorted() is stable so ties keep insertion order.

def rank_by_depth(entries: list[ContributorStats]) -> list[ContributorStats]:
    return sorted(entries, key=lambda s: (s.trace_depth, s.uniqueness_score), reverse=True)


def rank_by_uniqueness(entries: list[ContributorStats]) -> list[ContributorStats]:
    return sorted(entries, key=lambda s: (s.uniqueness_score, s.trace_depth), reverse=True)


def rank_by_submissions(entries: list[ContributorStats]) -> list[ContributorStats]:
    return sorted(entries, key=lambda s: s.total_submissions, reverse=True)


def rank_by_avg_depth(entries: list[ContributorStats]) -> list[ContributorStats]:
    return sorted(entries, key=lambda s: s.avg_trace_depth, reverse=True)


def rank_combined(entries: list[ContributorStats]) -> list[ContributorStats]:
    return sorted(entries, key=compute_combined_score, reverse=True)


RANKERS = {
    RankingCriteria.TRACE_DEPTH: rank_by_depth,
    RankingCriteria.UNIQUENESS_SCORE: rank_by_uniqueness,
    RankingCriteria.TOTAL_SUBMISSIONS: rank_by_submissions,
    RankingCriteria.AVG_TRACE_DEPTH: rank_by_avg_depth,
    RankingCriteria.COMBINED: rank_combined,
}


def rank(entries: list[ContributorStats], criteria: RankingCriteria) -> list[ContributorStats]:
    """Order entries best-first under the given criterion."""
    return RANKERS[criteria](entries)
