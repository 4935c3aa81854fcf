# ABOUTME: Matching package for scoring and selecting catalog candidates.
# ABOUTME: Exports the core track/candidate types and the selection entry points.

from coverfinder.matching.scoring import score_candidate
from coverfinder.matching.selector import (
    NoCandidatesError,
    rank_candidates,
    select_artwork_url,
    select_candidate,
)
from coverfinder.matching.types import ArtworkRef, Candidate, ScoredCandidate, TrackDescriptor

__all__ = [
    "ArtworkRef",
    "Candidate",
    "NoCandidatesError",
    "ScoredCandidate",
    "TrackDescriptor",
    "rank_candidates",
    "score_candidate",
    "select_artwork_url",
    "select_candidate",
]
