"""Data models for the contributor leaderboard."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RankingCriteria(str, Enum):
    """Ordering used to rank contributors."""
    TRACE_DEPTH = "trace_depth"
    UNIQUENESS_SCORE = "uniqueness_score"
    TOTAL_SUBMISSIONS = "total_submissions"
    AVG_TRACE_DEPTH = "avg_trace_depth"
    COMBINED = "combined"


class ContributorStats(BaseModel):
    """Aggregate of every provenance record submitted by one contributor."""
    contributor_id: str = Field(..., description="Contributor identifier")
    trace_depth: int = Field(..., description="Maximum trace depth ever submitted")
    provenance_hash: str = Field(..., description="Hash of the most recent submission")
    backend_used: str = Field(..., description="Backend of the most recent submission")
    last_updated: datetime
    uniqueness_score: float = Field(..., description="Maximum uniqueness score ever submitted")
    total_submissions: int = 1
    avg_trace_depth: float = Field(..., description="Exact mean depth across all submissions")
    languages_used: list[str] = Field(default_factory=list, description="Union of languages, first-seen order")
    rank: int = 0

    class Config:
        json_schema_extra = {
            "example": {
                "contributor_id": "contrib_abc123",
                "trace_depth": 12,
                "provenance_hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "backend_used": "quantum_backend_v3",
                "last_updated": "2026-02-02T10:00:00Z",
                "uniqueness_score": 0.62,
                "total_submissions": 3,
                "avg_trace_depth": 9.33,
                "languages_used": ["en", "id"],
                "rank": 1
            }
        }
