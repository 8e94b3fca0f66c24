"""Unit tests for the sink compatibility matcher."""

from decimal import Decimal

import pytest

from sinkquote.models.enums import (
    BowlConfiguration, CabinetIntegrity, ExistingSinkMaterial, InstallationType, MountingStyle
)
from sinkquote.services.matching import (
    FitRating, MatchPreferences, calculate_soft_score, evaluate_hard_gates,
    match_sink, match_sinks_to_measurement
)
from sinkquote.services.matching.compatibility import min_cabinet_width, rate_score, site_conditions
from sinkquote.services.matching.install_methods import evaluate_install_methods

from helpers import make_measurement, make_sink, perfect_fit_pair

FULL_PREFERENCES = MatchPreferences(
    color_preference="steel",
    bowl_configuration="single",
    installation_type="top_mount",
    max_price=Decimal("500"),
    prefer_workstation=True,
)


class TestHardGates:

    def test_passes_when_everything_fits(self):
        assert evaluate_hard_gates(make_sink(), make_measurement()) == []

    def test_field_minimum_beats_manufacturer(self):
        sink = make_sink(
            mfg_min_cabinet_width_inches=Decimal("33"), field_min_cabinet_width_inches=Decimal("38")
        )
        assert min_cabinet_width(sink) == 38
        failures = evaluate_hard_gates(sink, make_measurement())
        assert failures == ['Cabinet too narrow: 36" < required 38" minimum']

    def test_field_minimum_can_relax_manufacturer(self):
        sink = make_sink(
            mfg_min_cabinet_width_inches=Decimal("39"), field_min_cabinet_width_inches=Decimal("35")
        )
        assert evaluate_hard_gates(sink, make_measurement()) == []

    def test_manufacturer_minimum_used_alone(self):
        sink = make_sink(mfg_min_cabinet_width_inches=Decimal("39"))
        assert len(evaluate_hard_gates(sink, make_measurement())) == 1

    def test_cast_iron_in_narrow_cabinet(self):
        sink = make_sink(width_inches=Decimal("24"))
        measurement = make_measurement(
            cabinet_width_inches=Decimal("27"), existing_sink_material=ExistingSinkMaterial.cast_iron
        )
        failures = evaluate_hard_gates(sink, measurement)
        assert failures == ['Cast iron removal in cabinet under 30" is not feasible']

    def test_sink_wider_than_cabinet(self):
        sink = make_sink(width_inches=Decimal("37"))
        failures = evaluate_hard_gates(sink, make_measurement())
        assert failures == ['Sink width 37" exceeds cabinet width 36"']

    def test_collects_every_failure(self):
        sink = make_sink(width_inches=Decimal("30"), mfg_min_cabinet_width_inches=Decimal("33"))
        measurement = make_measurement(
            cabinet_width_inches=Decimal("28"), existing_sink_material=ExistingSinkMaterial.cast_iron
        )
        assert len(evaluate_hard_gates(sink, measurement)) == 3


class TestSoftScore:

    def test_perfect_fit_scores_100(self):
        sink, measurement = perfect_fit_pair()
        methods = evaluate_install_methods(sink, measurement)
        assert len(methods.feasible) == 4
        score = calculate_soft_score(sink, measurement, methods.all, FULL_PREFERENCES)
        assert score.score == 100
        assert "Excellent width clearance" in score.reasons
        assert "Multiple installation methods available" in score.reasons

    def test_neutral_defaults_without_preferences(self):
        # 25 width + 20 depth + 10 no style + 7 bowls + 3 one method + 3 color + 3 budget + 3 type
        sink, measurement = make_sink(), make_measurement()
        methods = evaluate_install_methods(sink, measurement)
        assert len(methods.feasible) == 1
        score = calculate_soft_score(sink, measurement, methods.all)
        assert score.score == 74
        assert "Only one installation method available" in score.warnings

    def test_deterministic(self):
        sink, measurement = perfect_fit_pair()
        methods = evaluate_install_methods(sink, measurement).all
        first = calculate_soft_score(sink, measurement, methods, FULL_PREFERENCES)
        second = calculate_soft_score(sink, measurement, methods, FULL_PREFERENCES)
        assert first == second

    @pytest.mark.parametrize(
        "width, depth, expected",
        [
            ("30", "20", 74),    # 6" / 4" clearance, cut & polish feasible
            ("33", "22", 64),    # 3" / 2"
            ("35", "24", 46),    # 1" / 0", too tight for cut & polish
            ("35.5", "25", 31),  # 0.5" / -1"
        ],
    )
    def test_clearance_bands(self, width, depth, expected):
        sink = make_sink(width_inches=Decimal(width), depth_inches=Decimal(depth))
        measurement = make_measurement()
        methods = evaluate_install_methods(sink, measurement).all
        assert calculate_soft_score(sink, measurement, methods).score == expected

    def test_sink_deeper_than_cabinet_warns(self):
        sink = make_sink(depth_inches=Decimal("25"))
        methods = evaluate_install_methods(sink, make_measurement()).all
        score = calculate_soft_score(sink, make_measurement(), methods)
        assert "Sink deeper than cabinet - verify fit" in score.warnings

    def test_mounting_style_mismatch(self):
        sink = make_sink(mounting_style=MountingStyle.drop_in)
        measurement = make_measurement(mounting_style=MountingStyle.undermount)
        methods = evaluate_install_methods(sink, measurement).all
        score = calculate_soft_score(sink, measurement, methods)
        assert "Different mounting style (drop_in)" in score.reasons

    def test_existing_bowl_count_match(self):
        measurement = make_measurement(existing_sink_bowl_count=2)
        sink = make_sink(bowl_count=2, bowl_configuration=BowlConfiguration.double_equal)
        methods = evaluate_install_methods(sink, measurement).all
        score = calculate_soft_score(sink, measurement, methods)
        assert "Matches existing bowl count (2)" in score.reasons

    def test_unmatched_color_preference_scores_nothing(self):
        sink, measurement = perfect_fit_pair()
        methods = evaluate_install_methods(sink, measurement).all
        prefs = MatchPreferences(**{**FULL_PREFERENCES.__dict__, "color_preference": "bisque"})
        score = calculate_soft_score(sink, measurement, methods, prefs)
        assert score.score == 95

    def test_over_budget_warns(self):
        sink, measurement = perfect_fit_pair()
        methods = evaluate_install_methods(sink, measurement).all
        prefs = MatchPreferences(max_price=Decimal("250"))
        score = calculate_soft_score(sink, measurement, methods, prefs)
        assert "Over budget by $150" in score.warnings

    def test_score_never_exceeds_bounds(self):
        sink, measurement = perfect_fit_pair()
        methods = evaluate_install_methods(sink, measurement).all
        score = calculate_soft_score(sink, measurement, methods, FULL_PREFERENCES).score
        assert 0 <= score <= 100


class TestRatingBands:

    @pytest.mark.parametrize(
        "score, rating",
        [
            (100, FitRating.excellent),
            (80, FitRating.excellent),
            (79, FitRating.good),
            (55, FitRating.good),
            (54, FitRating.marginal),
            (30, FitRating.marginal),
            (12, FitRating.marginal),
        ],
    )
    def test_bands(self, score, rating):
        assert rate_score(score) == rating


class TestSiteConditions:

    def test_cast_iron_add_on(self):
        warnings, add_ons = site_conditions(make_measurement(existing_sink_material=ExistingSinkMaterial.cast_iron))
        assert "Cast iron removal required - additional labor" in warnings
        assert "Cast iron sink removal ($350-650)" in add_ons

    def test_questionable_cabinet(self):
        _, add_ons = site_conditions(make_measurement(cabinet_integrity=CabinetIntegrity.questionable))
        assert add_ons == ["Cabinet reinforcement ($150-300)"]

    def test_compromised_cabinet(self):
        _, add_ons = site_conditions(make_measurement(cabinet_integrity=CabinetIntegrity.compromised))
        assert add_ons == ["Cabinet floor replacement ($450-650)"]

    def test_ro_system(self):
        warnings, add_ons = site_conditions(make_measurement(ro_system_present=True))
        assert warnings == ["RO system present - verify under-sink clearance"]
        assert add_ons == []


class TestMatchSink:

    def test_hard_gated_sink_is_no_go_with_zero_score(self):
        sink = make_sink(width_inches=Decimal("40"), mounting_style=MountingStyle.drop_in)
        result = match_sink(sink, make_measurement())
        assert result.fit_rating == FitRating.no_go
        assert result.overall_score == 0
        assert result.hard_gate_failures
        # install methods are still evaluated
        assert len(result.feasible_install_methods) + len(result.eliminated_install_methods) == 4

    def test_hard_gated_sink_keeps_site_add_ons(self):
        sink = make_sink(width_inches=Decimal("40"))
        measurement = make_measurement(cabinet_integrity=CabinetIntegrity.questionable)
        result = match_sink(sink, measurement)
        assert result.add_on_services == ["Cabinet reinforcement ($150-300)"]

    def test_no_feasible_method_forces_no_go(self):
        # undermount, no cutout, too little clearance for cut & polish, no apron
        sink = make_sink(width_inches=Decimal("35"))
        result = match_sink(sink, make_measurement())
        assert result.hard_gate_failures == []
        assert result.feasible_install_methods == []
        assert result.fit_rating == FitRating.no_go
        assert result.overall_score == 0
        assert "No feasible installation method found" in result.warnings

    def test_perfect_fit_is_excellent(self):
        sink, measurement = perfect_fit_pair()
        result = match_sink(sink, measurement, FULL_PREFERENCES)
        assert result.overall_score == 100
        assert result.fit_rating == FitRating.excellent

    def test_signed_clearances(self):
        sink = make_sink(depth_inches=Decimal("25"), height_inches=Decimal("10"))
        result = match_sink(sink, make_measurement())
        assert result.dimensional_fit.width_clearance == 6
        assert result.dimensional_fit.depth_clearance == -1
        assert result.dimensional_fit.height_clearance == 24


class TestMatchSinksToMeasurement:

    def test_orders_and_truncates(self):
        sink, measurement = perfect_fit_pair()
        candidates = [
            make_sink(id=1, width_inches=Decimal("40")),  # gated
            make_sink(id=2),
            sink,
            make_sink(id=4, installation_type=InstallationType.top_mount),
        ]
        results = match_sinks_to_measurement(candidates, measurement, FULL_PREFERENCES, limit=3)
        assert len(results) == 3
        assert results[0].sink is sink
        assert all(r.fit_rating != FitRating.no_go for r in results)

    def test_no_go_after_feasible(self):
        measurement = make_measurement()
        candidates = [make_sink(id=1, width_inches=Decimal("40")), make_sink(id=2)]
        results = match_sinks_to_measurement(candidates, measurement)
        assert [r.sink.id for r in results] == [2, 1]
        assert results[-1].fit_rating == FitRating.no_go

    def test_empty_catalog(self):
        assert match_sinks_to_measurement([], make_measurement()) == []
