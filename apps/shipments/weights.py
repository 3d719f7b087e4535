"""
Dimensional weight and box aggregation.

Pure functions over floats; nothing here touches the database. A box is one
line of identical pieces, so its volumetric weight is computed per piece and
multiplied out.

    surface:  L × B × H × CFT / 27000
    air:      L × B × H × CFT / 5000
    other:    0
"""

from dataclasses import dataclass, field
from typing import Iterable, List

SURFACE_DIVISOR = 27000.0
AIR_DIVISOR     = 5000.0

_DIVISORS = {
    "surface": SURFACE_DIVISOR,
    "air":     AIR_DIVISOR,
}


def volumetric_weight_per_piece(length, breadth, height, mode, cft_factor=1.0) -> float:
    divisor = _DIVISORS.get(mode)
    if divisor is None:
        # No volumetric rule for this mode (express included).
        return 0.0
    return float(length) * float(breadth) * float(height) * float(cft_factor) / divisor


@dataclass(frozen=True)
class BoxInput:
    number_of_pieces:        int
    length_cm:               float
    breadth_cm:              float
    height_cm:               float
    actual_weight_per_piece: float


@dataclass(frozen=True)
class BoxWeight:
    box:                         BoxInput
    volumetric_weight_per_piece: float
    total_volumetric_weight:     float
    total_actual_weight:         float


@dataclass(frozen=True)
class WeightSummary:
    boxes:                   List[BoxWeight] = field(default_factory=list)
    total_pieces:            int   = 0
    total_actual_weight:     float = 0.0
    total_volumetric_weight: float = 0.0


def aggregate_boxes(boxes: Iterable[BoxInput], mode, cft_factor=1.0) -> WeightSummary:
    """
    Weigh each box and total them. Output boxes keep the input order.
    An empty input gives an all-zero summary.
    """
    weighed = []
    pieces = 0
    actual = 0.0
    volumetric = 0.0

    for box in boxes:
        per_piece = volumetric_weight_per_piece(
            box.length_cm, box.breadth_cm, box.height_cm, mode, cft_factor,
        )
        box_volumetric = per_piece * box.number_of_pieces
        box_actual = float(box.actual_weight_per_piece) * box.number_of_pieces

        weighed.append(BoxWeight(
            box=box,
            volumetric_weight_per_piece=per_piece,
            total_volumetric_weight=box_volumetric,
            total_actual_weight=box_actual,
        ))
        pieces += box.number_of_pieces
        actual += box_actual
        volumetric += box_volumetric

    return WeightSummary(
        boxes=weighed,
        total_pieces=pieces,
        total_actual_weight=actual,
        total_volumetric_weight=volumetric,
    )
