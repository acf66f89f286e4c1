from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from bikewatch.domain.models import FlowClass, StationTraffic

DEFAULT_RADIUS_RANGE: tuple[float, float] = (2.0, 25.0)


@dataclass(frozen=True, slots=True)
class SqrtScale:
    """Square-root scale so that circle area, not radius, tracks the value."""

    domain_max: float = 1.0
    range_min: float = DEFAULT_RADIUS_RANGE[0]
    range_max: float = DEFAULT_RADIUS_RANGE[1]

    def __post_init__(self) -> None:
        if self.domain_max <= 0:
            raise ValueError(f"domain_max must be positive: {self.domain_max}")

    def __call__(self, value: float) -> float:
        v = max(0.0, float(value))
        return self.range_min + (self.range_max - self.range_min) * math.sqrt(
            v / self.domain_max
        )


@dataclass(frozen=True, slots=True)
class FlowClassifier:
    """Quantizes a flow ratio in [0, 1] into three equal-width classes.

    Boundary ratios (exactly 1/3 or 2/3) belong to the higher class.
    """

    classes: tuple[FlowClass, ...] = field(
        default=(FlowClass.ARRIVALS, FlowClass.BALANCED, FlowClass.DEPARTURES)
    )

    def __call__(self, ratio: float) -> FlowClass:
        r = max(0.0, min(1.0, float(ratio)))
        n = len(self.classes)
        # r * n can land just below an integer for r == k/n; compare with the
        # lower bound k/n directly instead of flooring.
        index = 0
        for k in range(1, n):
            if r >= k / n:
                index = k
        return self.classes[index]

    def classify(self, traffic: StationTraffic) -> FlowClass:
        return self(traffic.flow_ratio)


@dataclass(frozen=True, slots=True)
class EncodingScales:
    size_scale: SqrtScale
    color_classifier: FlowClassifier


def compute_scales(
    traffic: Sequence[StationTraffic],
    *,
    radius_range: tuple[float, float] = DEFAULT_RADIUS_RANGE,
) -> EncodingScales:
    """Derive the size and color mappings for one traffic snapshot.

    The size domain is [0, max total]; it falls back to [0, 1] when every
    station is idle so that idle stations map to the minimum radius.
    """

    domain_max = max((t.total for t in traffic), default=0) or 1
    range_min, range_max = radius_range
    return EncodingScales(
        size_scale=SqrtScale(
            domain_max=float(domain_max), range_min=range_min, range_max=range_max
        ),
        color_classifier=FlowClassifier(),
    )
