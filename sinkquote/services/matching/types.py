# sinkquote/services/matching/types.py
import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Union


class InstallMethod(str, enum.Enum):
    bowl_swap = "bowl_swap"
    cut_and_polish = "cut_and_polish"
    top_mount = "top_mount"
    apron_front = "apron_front"


class FitRating(str, enum.Enum):
    excellent = "excellent"
    good = "good"
    marginal = "marginal"
    no_go = "no_go"


@dataclass(frozen=True)
class InstallMethodResult:
    method: InstallMethod
    feasible: bool
    reason: str


@dataclass
class InstallMethodEvaluation:
    feasible: List[InstallMethodResult] = field(default_factory=list)
    eliminated: List[InstallMethodResult] = field(default_factory=list)

    @property
    def all(self) -> List[InstallMethodResult]:
        return [*self.feasible, *self.eliminated]


@dataclass
class MatchPreferences:
    color_preference: Optional[str] = None
    bowl_configuration: Optional[str] = None
    installation_type: Optional[str] = None
    max_price: Optional[Union[Decimal, float]] = None
    prefer_workstation: bool = False


@dataclass(frozen=True)
class DimensionalFit:
    width_clearance: float
    depth_clearance: float
    height_clearance: float


@dataclass
class SoftScore:
    score: int = 0
    reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class MatchResult:
    sink: Any
    overall_score: int
    fit_rating: FitRating
    feasible_install_methods: List[InstallMethodResult]
    eliminated_install_methods: List[InstallMethodResult]
    hard_gate_failures: List[str]
    warnings: List[str]
    add_on_services: List[str]
    dimensional_fit: DimensionalFit
    reasons: List[str] = field(default_factory=list)

    @property
    def is_no_go(self) -> bool:
        return self.fit_rating == FitRating.no_go
