# sinkquote/services/matching/install_methods.py
"""
Install-method feasibility for a sink/measurement pair.

Each InstallMethod has exactly one evaluator in ``INSTALL_METHOD_EVALUATORS``.
The evaluators never look at hard-gate results, so disqualified sinks still
report which techniques would have worked.
"""
from typing import Callable, Dict, Optional

from sinkquote.core import config
from sinkquote.models.enums import CabinetIntegrity, InstallationType, MountingStyle
from sinkquote.services.matching.types import (
    InstallMethod, InstallMethodEvaluation, InstallMethodResult
)


def inches(value) -> Optional[float]:
    """Decimal/str/number column value to float, None when absent or zero."""
    if value is None or value == "":
        return None
    number = float(value)
    return number or None


def _bowl_swap(sink, measurement) -> InstallMethodResult:
    method = InstallMethod.bowl_swap
    cutout_width = inches(measurement.existing_cutout_width_inches)
    cutout_depth = inches(measurement.existing_cutout_depth_inches)
    sink_width = float(sink.width_inches)
    sink_depth = float(sink.depth_inches)

    if cutout_width is None or cutout_depth is None:
        return InstallMethodResult(method, False, "No existing cutout dimensions provided")
    tolerance = config.BOWL_SWAP_TOLERANCE
    if abs(cutout_width - sink_width) > tolerance or abs(cutout_depth - sink_depth) > tolerance:
        return InstallMethodResult(
            method, False,
            f'Cutout ({cutout_width:g}"x{cutout_depth:g}") doesn\'t match sink ({sink_width:g}"x{sink_depth:g}")',
        )
    if measurement.cabinet_integrity == CabinetIntegrity.compromised:
        return InstallMethodResult(method, False, "Cabinet integrity is compromised")
    return InstallMethodResult(method, True, "Existing cutout matches sink dimensions")


def _cut_and_polish(sink, measurement) -> InstallMethodResult:
    method = InstallMethod.cut_and_polish
    thickness = inches(measurement.countertop_thickness_inches)
    max_thickness = config.MAX_CUT_AND_POLISH_THICKNESS

    if thickness is not None and thickness > max_thickness:
        return InstallMethodResult(
            method, False, f'Countertop too thick ({thickness:g}") for blade - max {max_thickness:g}"'
        )
    width_clearance = float(measurement.cabinet_width_inches) - float(sink.width_inches)
    if width_clearance < config.MIN_CUT_AND_POLISH_CLEARANCE:
        return InstallMethodResult(method, False, "Insufficient width clearance for cut & polish")
    return InstallMethodResult(method, True, "Countertop thickness and width clearance allow cut & polish")


def _top_mount(sink, measurement) -> InstallMethodResult:
    method = InstallMethod.top_mount
    supports_top_mount = (
        sink.mounting_style == MountingStyle.drop_in
        or sink.installation_type == InstallationType.top_mount
    )
    if not supports_top_mount:
        return InstallMethodResult(method, False, "Sink does not support top mount installation")
    if float(sink.width_inches) > float(measurement.cabinet_width_inches):
        return InstallMethodResult(method, False, "Sink too wide for cabinet opening")
    return InstallMethodResult(method, True, "Top mount installation compatible")


def _apron_front(sink, measurement) -> InstallMethodResult:
    method = InstallMethod.apron_front
    is_apron = (
        inches(sink.apron_depth_inches) is not None
        or sink.installation_type == InstallationType.farmhouse_apron
    )
    if not is_apron:
        return InstallMethodResult(method, False, "Sink is not an apron front model")
    if float(measurement.cabinet_width_inches) < config.APRON_FRONT_MIN_CABINET_WIDTH:
        return InstallMethodResult(method, False, "Cabinet too narrow for apron front installation")
    return InstallMethodResult(method, True, "Apron front installation compatible")


INSTALL_METHOD_EVALUATORS: Dict[InstallMethod, Callable[..., InstallMethodResult]] = {
    InstallMethod.bowl_swap: _bowl_swap,
    InstallMethod.cut_and_polish: _cut_and_polish,
    InstallMethod.top_mount: _top_mount,
    InstallMethod.apron_front: _apron_front,
}

_unhandled = set(InstallMethod) - set(INSTALL_METHOD_EVALUATORS)
if _unhandled:
    raise RuntimeError(f"No evaluator registered for install methods: {sorted(m.value for m in _unhandled)}")


def evaluate_install_methods(sink, measurement) -> InstallMethodEvaluation:
    evaluation = InstallMethodEvaluation()
    for method in InstallMethod:
        result = INSTALL_METHOD_EVALUATORS[method](sink, measurement)
        if result.feasible:
            evaluation.feasible.append(result)
        else:
            evaluation.eliminated.append(result)
    return evaluation
