# ABOUTME: Distance scoring for catalog candidates against a local track.
# ABOUTME: Sums title, artist-list, and album distances; lower scores are better matches.

from coverfinder.matching.distance import artist_set_distance, edit_distance
from coverfinder.matching.types import Candidate, TrackDescriptor


def score_candidate(local: TrackDescriptor, candidate: Candidate) -> int:
    """Score how far a candidate is from the local track's metadata.

    Distances are raw edit counts with no length normalization, so exact or
    near-exact matches win regardless of how long the names are.
    """
    score = edit_distance(local.title, candidate.title)
    score += artist_set_distance(local.artists, candidate.artists)
    score += edit_distance(local.album, candidate.album)
    return score
