# sinkquote/services/matching/ranking.py
from typing import Iterable, List

from sinkquote.services.matching.types import MatchResult


def ranking_key(result: MatchResult):
    # no_go results always after feasible ones, then best score first
    return (result.is_no_go, -result.overall_score)


def rank_matches(results: Iterable[MatchResult], limit: int) -> List[MatchResult]:
    """
    Order matches best-first and keep the top ``limit``.

    ``sorted`` is stable, so equal scores keep their candidate order.
    """
    if limit < 1:
        return []
    return sorted(results, key=ranking_key)[:limit]
