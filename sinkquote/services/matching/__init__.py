# sinkquote/services/matching/__init__.py
from sinkquote.services.matching.compatibility import (
    calculate_soft_score,
    evaluate_hard_gates,
    match_sink,
    match_sinks_to_measurement,
)
from sinkquote.services.matching.install_methods import evaluate_install_methods
from sinkquote.services.matching.ranking import rank_matches
from sinkquote.services.matching.types import (
    FitRating,
    InstallMethod,
    InstallMethodResult,
    MatchPreferences,
    MatchResult,
)
