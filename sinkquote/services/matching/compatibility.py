# sinkquote/services/matching/compatibility.py
"""
Sink-to-cabinet compatibility matching.

Three passes per candidate sink:

1. Hard gates eliminate physically impossible installs (``no_go``, score 0).
2. Install-method feasibility runs for every sink, gated or not.
3. Soft scoring (max 100) rates how well a gate-passing sink fits and how
   closely it follows the customer's preferences.

Everything here is a pure function of its inputs; candidates share no state.
"""
import logging
from typing import Iterable, List, Optional

from sinkquote.core import config
from sinkquote.models.enums import CabinetIntegrity, ExistingSinkMaterial, MountingStyle
from sinkquote.services.matching.install_methods import evaluate_install_methods, inches
from sinkquote.services.matching.ranking import rank_matches
from sinkquote.services.matching.types import (
    DimensionalFit, FitRating, InstallMethodResult, MatchPreferences, MatchResult, SoftScore
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# Measurement preference -> sink mounting styles that count as a match
MOUNTING_STYLE_MATCHES = {
    MountingStyle.undermount: {MountingStyle.undermount},
    MountingStyle.drop_in: {MountingStyle.drop_in},
    MountingStyle.farmhouse: {MountingStyle.farmhouse},
    MountingStyle.flush_mount: {MountingStyle.flush_mount},
}

RATING_BANDS = (
    (80, FitRating.excellent),
    (55, FitRating.good),
    (30, FitRating.marginal),
)


# --------------------------
# Hard gates
# --------------------------
def min_cabinet_width(sink) -> Optional[float]:
    """Field-tested minimum wins over the manufacturer's figure."""
    field_min = inches(sink.field_min_cabinet_width_inches)
    if field_min is not None:
        return field_min
    return inches(sink.mfg_min_cabinet_width_inches)


def evaluate_hard_gates(sink, measurement) -> List[str]:
    failures = []
    cabinet_width = float(measurement.cabinet_width_inches)
    sink_width = float(sink.width_inches)

    required = min_cabinet_width(sink)
    if required is not None and required > cabinet_width:
        failures.append(f'Cabinet too narrow: {cabinet_width:g}" < required {required:g}" minimum')

    cast_iron_limit = config.CAST_IRON_MIN_CABINET_WIDTH
    if measurement.existing_sink_material == ExistingSinkMaterial.cast_iron and cabinet_width < cast_iron_limit:
        failures.append(f'Cast iron removal in cabinet under {cast_iron_limit:g}" is not feasible')

    if sink_width > cabinet_width:
        failures.append(f'Sink width {sink_width:g}" exceeds cabinet width {cabinet_width:g}"')

    return failures


# --------------------------
# Soft score
# --------------------------
def _score_width(clearance: float, result: SoftScore):
    if clearance >= 6:
        result.score += 25
        result.reasons.append("Excellent width clearance")
    elif clearance >= 3:
        result.score += 20
        result.reasons.append("Good width clearance")
    elif clearance >= 1:
        result.score += 12
        result.reasons.append("Tight width fit")
    else:
        result.score += 5
        result.reasons.append("Very tight width fit")


def _score_depth(clearance: float, result: SoftScore):
    if clearance >= 4:
        result.score += 20
        result.reasons.append("Excellent depth clearance")
    elif clearance >= 2:
        result.score += 15
        result.reasons.append("Good depth clearance")
    elif clearance >= 0:
        result.score += 8
        result.reasons.append("Tight depth fit")
    else:
        result.warnings.append("Sink deeper than cabinet - verify fit")


def _score_mounting_style(sink, measurement, result: SoftScore):
    preferred = measurement.mounting_style
    if not preferred:
        result.score += 10
        return
    if sink.mounting_style in MOUNTING_STYLE_MATCHES.get(MountingStyle(preferred), set()):
        result.score += 15
        result.reasons.append("Matches preferred mounting style")
    else:
        result.score += 5
        result.reasons.append(f"Different mounting style ({_label(sink.mounting_style)})")


def _score_bowls(sink, measurement, preferences: MatchPreferences, result: SoftScore):
    if preferences.bowl_configuration and sink.bowl_configuration:
        if _label(sink.bowl_configuration) == _label(preferences.bowl_configuration):
            result.score += 10
            result.reasons.append("Matches preferred bowl configuration")
        else:
            result.score += 3
    elif measurement.existing_sink_bowl_count:
        existing = measurement.existing_sink_bowl_count
        if sink.bowl_count == existing:
            result.score += 10
            result.reasons.append(f"Matches existing bowl count ({existing})")
        else:
            result.score += 4
    else:
        result.score += 7


def _score_install_methods(methods: List[InstallMethodResult], result: SoftScore):
    feasible_count = sum(1 for m in methods if m.feasible)
    result.score += min(feasible_count * 3, 10)
    if feasible_count >= 3:
        result.reasons.append("Multiple installation methods available")
    elif feasible_count == 1:
        result.warnings.append("Only one installation method available")


def _score_color(sink, preferences: MatchPreferences, result: SoftScore):
    wanted = (preferences.color_preference or "").lower()
    if wanted and sink.available_colors:
        for color in sink.available_colors:
            if wanted in str(color.get("name", "")).lower() or str(color.get("code", "")).lower() == wanted:
                result.score += 5
                result.reasons.append("Preferred color available")
                break
    else:
        result.score += 3


def _score_workstation(sink, preferences: MatchPreferences, result: SoftScore):
    if preferences.prefer_workstation and sink.is_workstation:
        result.score += 5
        result.reasons.append("Workstation features included")


def _score_budget(sink, preferences: MatchPreferences, result: SoftScore):
    if not preferences.max_price:
        result.score += 3
        return
    price = float(sink.base_price)
    max_price = float(preferences.max_price)
    if price <= max_price:
        result.score += 5
        result.reasons.append("Within budget")
    else:
        result.warnings.append(f"Over budget by ${price - max_price:.0f}")


def _score_installation_type(sink, preferences: MatchPreferences, result: SoftScore):
    if preferences.installation_type and sink.installation_type:
        if _label(sink.installation_type) == _label(preferences.installation_type):
            result.score += 5
            result.reasons.append("Matches preferred installation type")
        else:
            result.score += 2
    else:
        result.score += 3


def calculate_soft_score(
    sink,
    measurement,
    install_methods: List[InstallMethodResult],
    preferences: Optional[MatchPreferences] = None,
) -> SoftScore:
    preferences = preferences or MatchPreferences()
    result = SoftScore()

    clearance = dimensional_fit(sink, measurement)
    _score_width(clearance.width_clearance, result)
    _score_depth(clearance.depth_clearance, result)
    _score_mounting_style(sink, measurement, result)
    _score_bowls(sink, measurement, preferences, result)
    _score_install_methods(install_methods, result)
    _score_color(sink, preferences, result)
    _score_workstation(sink, preferences, result)
    _score_budget(sink, preferences, result)
    _score_installation_type(sink, preferences, result)

    result.score = max(0, min(result.score, MAX_SCORE))
    return result


# --------------------------
# Context warnings and add-ons
# --------------------------
def site_conditions(measurement):
    """Warnings and add-on services that depend only on the job site."""
    warnings, add_ons = [], []
    if measurement.existing_sink_material == ExistingSinkMaterial.cast_iron:
        warnings.append("Cast iron removal required - additional labor")
        add_ons.append("Cast iron sink removal ($350-650)")

    if measurement.cabinet_integrity == CabinetIntegrity.questionable:
        warnings.append("Cabinet integrity questionable - may need reinforcement")
        add_ons.append("Cabinet reinforcement ($150-300)")
    elif measurement.cabinet_integrity == CabinetIntegrity.compromised:
        warnings.append("Cabinet floor replacement required")
        add_ons.append("Cabinet floor replacement ($450-650)")

    if measurement.ro_system_present:
        warnings.append("RO system present - verify under-sink clearance")
    return warnings, add_ons


# --------------------------
# Matching
# --------------------------
def dimensional_fit(sink, measurement) -> DimensionalFit:
    return DimensionalFit(
        width_clearance=float(measurement.cabinet_width_inches) - float(sink.width_inches),
        depth_clearance=float(measurement.cabinet_depth_inches) - float(sink.depth_inches),
        height_clearance=float(measurement.cabinet_height_inches) - float(sink.height_inches),
    )


def rate_score(score: int) -> FitRating:
    for threshold, rating in RATING_BANDS:
        if score >= threshold:
            return rating
    return FitRating.marginal


def match_sink(sink, measurement, preferences: Optional[MatchPreferences] = None) -> MatchResult:
    hard_gate_failures = evaluate_hard_gates(sink, measurement)
    methods = evaluate_install_methods(sink, measurement)
    site_warnings, add_ons = site_conditions(measurement)

    if hard_gate_failures:
        return MatchResult(
            sink=sink,
            overall_score=0,
            fit_rating=FitRating.no_go,
            feasible_install_methods=methods.feasible,
            eliminated_install_methods=methods.eliminated,
            hard_gate_failures=hard_gate_failures,
            warnings=site_warnings,
            add_on_services=add_ons,
            dimensional_fit=dimensional_fit(sink, measurement),
            reasons=list(hard_gate_failures),
        )

    soft = calculate_soft_score(sink, measurement, methods.all, preferences)
    warnings = soft.warnings + site_warnings
    score = soft.score
    rating = rate_score(score)
    if not methods.feasible:
        rating = FitRating.no_go
        score = 0
        warnings.append("No feasible installation method found")

    return MatchResult(
        sink=sink,
        overall_score=score,
        fit_rating=rating,
        feasible_install_methods=methods.feasible,
        eliminated_install_methods=methods.eliminated,
        hard_gate_failures=[],
        warnings=warnings,
        add_on_services=add_ons,
        dimensional_fit=dimensional_fit(sink, measurement),
        reasons=soft.reasons,
    )


def match_sinks_to_measurement(
    candidates: Iterable,
    measurement,
    preferences: Optional[MatchPreferences] = None,
    limit: int = config.DEFAULT_MATCH_LIMIT,
) -> List[MatchResult]:
    results = [match_sink(sink, measurement, preferences) for sink in candidates]
    ranked = rank_matches(results, limit)
    logger.debug(
        "Matched %d candidates (%d no_go), returning %d",
        len(results), sum(1 for r in results if r.is_no_go), len(ranked),
    )
    return ranked


def _label(value) -> str:
    return getattr(value, "value", value) or ""
