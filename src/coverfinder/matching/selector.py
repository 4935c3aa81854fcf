# ABOUTME: Candidate ranking and selection with the exact-album tie-break.
# ABOUTME: Picks the single catalog result whose artwork should be used for a track.

import logging
from collections.abc import Iterable

from coverfinder.matching.scoring import score_candidate
from coverfinder.matching.types import Candidate, ScoredCandidate, TrackDescriptor

logger = logging.getLogger(__name__)


class NoCandidatesError(Exception):
    """Raised when a search yields no usable candidates."""


def rank_candidates(
    local: TrackDescriptor, candidates: Iterable[Candidate]
) -> list[ScoredCandidate]:
    """Score well-formed candidates and sort them best first.

    Malformed candidates (no artists or no artwork) are dropped. The sort is
    stable, so equal scores keep the catalog's own relevance order.
    """
    scored = [
        ScoredCandidate(candidate=candidate, score=score_candidate(local, candidate))
        for candidate in candidates
        if candidate.is_well_formed
    ]
    scored.sort(key=lambda s: s.score)
    return scored


def select_candidate(local: TrackDescriptor, candidates: Iterable[Candidate]) -> Candidate:
    """Choose the candidate that best matches the local track.

    A lone candidate is accepted whatever its score. With several, the first
    one in score order whose album equals the local album exactly wins;
    otherwise the lowest score wins.

    Raises:
        NoCandidatesError: If no well-formed candidates remain.
    """
    ranked = rank_candidates(local, candidates)
    if not ranked:
        raise NoCandidatesError(f"No candidates found for {local.title!r}")

    for entry in ranked:
        logger.debug(
            "score=%d title=%r album=%r", entry.score, entry.candidate.title, entry.candidate.album
        )

    if len(ranked) == 1:
        return ranked[0].candidate

    for entry in ranked:
        if entry.candidate.album == local.album:
            return entry.candidate
    return ranked[0].candidate


def select_artwork_url(local: TrackDescriptor, candidates: Iterable[Candidate]) -> str:
    """Return the primary artwork URL of the selected candidate."""
    return select_candidate(local, candidates).artwork_url
