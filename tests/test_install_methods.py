"""Unit tests for install-method feasibility."""

from decimal import Decimal

import pytest

from sinkquote.models.enums import CabinetIntegrity, InstallationType, MountingStyle
from sinkquote.services.matching.install_methods import (
    INSTALL_METHOD_EVALUATORS, evaluate_install_methods, inches
)
from sinkquote.services.matching.types import InstallMethod

from helpers import make_measurement, make_sink


def _result(evaluation, method):
    return next(r for r in evaluation.all if r.method == method)


class TestRegistry:
    """Every install method has exactly one evaluator."""

    def test_every_method_registered(self):
        assert set(INSTALL_METHOD_EVALUATORS) == set(InstallMethod)

    def test_each_method_reported_once(self):
        evaluation = evaluate_install_methods(make_sink(), make_measurement())
        methods = [r.method for r in evaluation.all]
        assert sorted(methods) == sorted(InstallMethod)

    def test_feasible_and_eliminated_partition(self):
        evaluation = evaluate_install_methods(make_sink(), make_measurement())
        assert all(r.feasible for r in evaluation.feasible)
        assert not any(r.feasible for r in evaluation.eliminated)


class TestInches:

    @pytest.mark.parametrize("value", [None, "", 0, Decimal("0")])
    def test_absent_values(self, value):
        assert inches(value) is None

    def test_decimal_to_float(self):
        assert inches(Decimal("1.25")) == 1.25


class TestBowlSwap:

    def test_requires_cutout_dimensions(self):
        result = _result(evaluate_install_methods(make_sink(), make_measurement()), InstallMethod.bowl_swap)
        assert not result.feasible
        assert result.reason == "No existing cutout dimensions provided"

    def test_matching_cutout_within_tolerance(self):
        measurement = make_measurement(
            existing_cutout_width_inches=Decimal("30.75"), existing_cutout_depth_inches=Decimal("19.5")
        )
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.bowl_swap)
        assert result.feasible

    def test_exactly_at_tolerance_is_feasible(self):
        measurement = make_measurement(
            existing_cutout_width_inches=Decimal("31"), existing_cutout_depth_inches=Decimal("21")
        )
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.bowl_swap)
        assert result.feasible

    def test_cutout_mismatch(self):
        measurement = make_measurement(
            existing_cutout_width_inches=Decimal("33"), existing_cutout_depth_inches=Decimal("20")
        )
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.bowl_swap)
        assert not result.feasible
        assert "doesn't match sink" in result.reason

    def test_compromised_cabinet(self):
        measurement = make_measurement(
            existing_cutout_width_inches=Decimal("30"),
            existing_cutout_depth_inches=Decimal("20"),
            cabinet_integrity=CabinetIntegrity.compromised,
        )
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.bowl_swap)
        assert not result.feasible
        assert result.reason == "Cabinet integrity is compromised"


class TestCutAndPolish:

    def test_unknown_thickness_is_allowed(self):
        result = _result(evaluate_install_methods(make_sink(), make_measurement()), InstallMethod.cut_and_polish)
        assert result.feasible

    def test_thickness_at_blade_limit(self):
        measurement = make_measurement(countertop_thickness_inches=Decimal("2.25"))
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.cut_and_polish)
        assert result.feasible

    def test_too_thick(self):
        measurement = make_measurement(countertop_thickness_inches=Decimal("3"))
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.cut_and_polish)
        assert not result.feasible
        assert "too thick" in result.reason

    def test_insufficient_width_clearance(self):
        measurement = make_measurement(cabinet_width_inches=Decimal("31.5"))
        result = _result(evaluate_install_methods(make_sink(), measurement), InstallMethod.cut_and_polish)
        assert not result.feasible
        assert result.reason == "Insufficient width clearance for cut & polish"


class TestTopMount:

    def test_drop_in_sink(self):
        sink = make_sink(mounting_style=MountingStyle.drop_in)
        result = _result(evaluate_install_methods(sink, make_measurement()), InstallMethod.top_mount)
        assert result.feasible

    def test_top_mount_installation_type(self):
        sink = make_sink(installation_type=InstallationType.top_mount)
        result = _result(evaluate_install_methods(sink, make_measurement()), InstallMethod.top_mount)
        assert result.feasible

    def test_undermount_only_sink(self):
        result = _result(evaluate_install_methods(make_sink(), make_measurement()), InstallMethod.top_mount)
        assert not result.feasible
        assert result.reason == "Sink does not support top mount installation"

    def test_too_wide(self):
        sink = make_sink(mounting_style=MountingStyle.drop_in, width_inches=Decimal("40"))
        result = _result(evaluate_install_methods(sink, make_measurement()), InstallMethod.top_mount)
        assert not result.feasible
        assert result.reason == "Sink too wide for cabinet opening"


class TestApronFront:

    def test_not_apron_model(self):
        result = _result(evaluate_install_methods(make_sink(), make_measurement()), InstallMethod.apron_front)
        assert not result.feasible
        assert result.reason == "Sink is not an apron front model"

    def test_apron_by_installation_type(self):
        sink = make_sink(installation_type=InstallationType.farmhouse_apron)
        result = _result(evaluate_install_methods(sink, make_measurement()), InstallMethod.apron_front)
        assert result.feasible

    def test_narrow_cabinet(self):
        sink = make_sink(apron_depth_inches=Decimal("10"), width_inches=Decimal("24"))
        measurement = make_measurement(cabinet_width_inches=Decimal("29"))
        result = _result(evaluate_install_methods(sink, measurement), InstallMethod.apron_front)
        assert not result.feasible
        assert result.reason == "Cabinet too narrow for apron front installation"
