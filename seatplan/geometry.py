"""Seat placement around tables."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from seatplan.models import SeatArrangementStyle, SeatPosition, SeatSide, TableShape

logger = logging.getLogger(__name__)

# Seats never sit further than this fraction of a half-dimension past the edge
SEAT_PROTRUSION_FACTOR = 0.3

# Pixel spacing: seat footprint + fixed gap
SEAT_SIZE_RATIO = 0.2
SEAT_SIZE_MIN_PX = 24.0
SEAT_SIZE_MAX_PX = 40.0
SEAT_GAP_PX = 8.0

DEFAULT_RELATIVE_SPACING = 0.2
MAX_SIDE_SPAN = 0.9
SIDE_SPLIT_SPAN = 0.8
EDGE_STANDOFF = 0.5

# Stadium rectangles: seats per short side, more for large tables
SHORT_SIDE_SEATS = 2
SHORT_SIDE_SEATS_LARGE = 3
LARGE_TABLE_THRESHOLD = 24

# Facing angle per side, clockwise from the top
SIDE_ANGLES = {"top": 0.0, "right": 90.0, "bottom": 180.0, "left": 270.0}

SIZE_PRESETS: dict[str, dict[str, tuple[float, float]]] = {
    "circle": {"small": (100, 100), "medium": (140, 140), "large": (180, 180)},
    "oval": {"small": (140, 100), "medium": (200, 130), "large": (260, 160)},
    "square": {"small": (100, 100), "medium": (140, 140), "large": (180, 180)},
    "rectangle": {"small": (160, 80), "medium": (220, 100), "large": (300, 120)},
}


@dataclass(frozen=True)
class StandoffPreset:
    """How far outside a rectangle's center seats sit, per side pair.

    0.5 is exactly on the edge.
    """

    short_side: float = EDGE_STANDOFF
    long_side: float = EDGE_STANDOFF


DEFAULT_STANDOFFS: dict[str, StandoffPreset] = {
    "160x80": StandoffPreset(short_side=0.6, long_side=0.62),
    "220x100": StandoffPreset(short_side=0.58, long_side=0.6),
    "300x120": StandoffPreset(short_side=0.56, long_side=0.58),
}


def size_key(width: float | None, height: float | None) -> str | None:
    """Key into a standoff table, e.g. ``"220x100"``."""
    if width is None or height is None:
        return None
    return f"{round(width)}x{round(height)}"


def available_arrangements(shape: TableShape) -> list[SeatArrangementStyle]:
    """Arrangement styles a shape supports (``custom`` is always accepted)."""
    if shape == "rectangle":
        return ["even", "side-split", "long-sides-only"]
    return ["even"]


def compute_seats(
    capacity: int,
    shape: TableShape,
    style: SeatArrangementStyle = "even",
    width: float | None = None,
    height: float | None = None,
    standoffs: Mapping[str, StandoffPreset] | None = None,
) -> list[SeatPosition]:
    """
    Compute ordered seat positions for one table.

    Unsupported (shape, style) pairs fall back to ``even``; ``custom`` seeds
    from ``even`` so callers can edit the result by hand. Width/height are
    only used for pixel-accurate spacing and standoff lookup.
    """
    if capacity <= 0:
        return []

    if style != "custom" and style not in available_arrangements(shape):
        logger.debug(f"Style {style!r} not available for {shape}, using even")
        style = "even"

    if style == "side-split":
        return _side_split(capacity)

    # custom and long-sides-only both start from the even layout
    if shape in ("circle", "oval"):
        return _around_circle(capacity)
    if shape == "square":
        return _square(capacity, width, height)
    if shape == "rectangle":
        presets = DEFAULT_STANDOFFS if standoffs is None else standoffs
        return _stadium(capacity, width, height, presets)

    logger.debug(f"Unknown shape {shape!r}, placing seats around a circle")
    return _around_circle(capacity)


def _around_circle(capacity: int) -> list[SeatPosition]:
    angles = np.arange(capacity) * (360.0 / capacity)
    radians = np.radians(angles - 90.0)  # angle 0 is 12 o'clock
    xs = np.cos(radians) * 0.5
    ys = np.sin(radians) * 0.5
    return [
        SeatPosition(
            seat_number=i + 1,
            relative_x=float(xs[i]),
            relative_y=float(ys[i]),
            angle=float(angles[i]),
        )
        for i in range(capacity)
    ]


def _seat_spacing(side_length: float | None, width: float | None, height: float | None) -> float:
    """Relative spacing between neighbouring seat centers along one side."""
    if width is None or height is None or not side_length or side_length <= 0:
        return DEFAULT_RELATIVE_SPACING
    seat_size = min(max(min(width, height) * SEAT_SIZE_RATIO, SEAT_SIZE_MIN_PX), SEAT_SIZE_MAX_PX)
    return (seat_size + SEAT_GAP_PX) / side_length


def _side_offsets(count: int, spacing: float) -> list[float]:
    """Offsets from a side's midpoint, symmetric, in placement order."""
    if count <= 0:
        return []
    if count == 1:
        return [0.0]
    if spacing * (count - 1) > MAX_SIDE_SPAN:
        spacing = MAX_SIDE_SPAN / (count - 1)
    offsets = (np.arange(count) - (count - 1) / 2.0) * spacing
    return [float(o) for o in offsets]


def _place_sides(
    counts: dict[str, int],
    spacings: dict[str, float],
    standoffs: dict[str, float],
) -> list[SeatPosition]:
    """Walk the four sides clockwise from the top-left corner."""
    seats: list[SeatPosition] = []
    for side in ("top", "right", "bottom", "left"):
        offsets = _side_offsets(counts[side], spacings[side])
        d = standoffs[side]
        for offset in offsets:
            if side == "top":
                x, y = offset, -d
            elif side == "right":
                x, y = d, offset
            elif side == "bottom":
                x, y = -offset, d
            else:
                x, y = -d, -offset
            seats.append(
                SeatPosition(
                    seat_number=len(seats) + 1,
                    relative_x=x,
                    relative_y=y,
                    angle=SIDE_ANGLES[side],
                )
            )
    return seats


def square_side_counts(capacity: int) -> dict[str, int]:
    """Seats per side; remainder goes to top, then bottom, then left."""
    base, remainder = divmod(capacity, 4)
    counts = {"top": base, "right": base, "bottom": base, "left": base}
    for side in ("top", "bottom", "left")[:remainder]:
        counts[side] += 1
    return counts


def _square(capacity: int, width: float | None, height: float | None) -> list[SeatPosition]:
    counts = square_side_counts(capacity)
    horizontal = _seat_spacing(width, width, height)
    vertical = _seat_spacing(height, width, height)
    spacings = {"top": horizontal, "bottom": horizontal, "left": vertical, "right": vertical}
    edges = dict.fromkeys(SIDE_ANGLES, EDGE_STANDOFF)
    return _place_sides(counts, spacings, edges)


def stadium_side_counts(capacity: int) -> dict[str, int]:
    """Seats per side of a stadium rectangle."""
    short = SHORT_SIDE_SEATS_LARGE if capacity > LARGE_TABLE_THRESHOLD else SHORT_SIDE_SEATS
    # small tables keep at least one seat on each long side
    short = min(short, max(0, (capacity - 2) // 2))
    long_total = capacity - 2 * short
    top = math.ceil(long_total / 2)
    return {"top": top, "right": short, "bottom": long_total - top, "left": short}


def _stadium(
    capacity: int,
    width: float | None,
    height: float | None,
    presets: Mapping[str, StandoffPreset],
) -> list[SeatPosition]:
    counts = stadium_side_counts(capacity)
    key = size_key(width, height)
    preset = presets.get(key, StandoffPreset()) if key else StandoffPreset()
    horizontal = _seat_spacing(width, width, height)
    vertical = _seat_spacing(height, width, height)
    spacings = {"top": horizontal, "bottom": horizontal, "left": vertical, "right": vertical}
    standoffs = {
        "top": preset.long_side,
        "bottom": preset.long_side,
        "left": preset.short_side,
        "right": preset.short_side,
    }
    return _place_sides(counts, spacings, standoffs)


def _spread(count: int, index: int) -> float:
    """Position along a side-split edge, -0.4..0.4 for an 80% span."""
    t = index / (count - 1) if count > 1 else 0.5
    return -SIDE_SPLIT_SPAN / 2 + t * SIDE_SPLIT_SPAN


def _side_split(capacity: int) -> list[SeatPosition]:
    top_count = math.ceil(capacity / 2)
    bottom_count = capacity - top_count
    seats: list[SeatPosition] = []
    halves: list[tuple[int, float, float, SeatSide, int]] = [
        (top_count, -EDGE_STANDOFF, 0.0, "bride", 1),
        (bottom_count, EDGE_STANDOFF, 180.0, "groom", -1),
    ]
    for count, y, angle, side, direction in halves:
        for i in range(count):
            seats.append(
                SeatPosition(
                    seat_number=len(seats) + 1,
                    relative_x=direction * _spread(count, i),
                    relative_y=y,
                    angle=angle,
                    side=side,
                )
            )
    return seats


def seat_relative_to_absolute(
    relative_x: float,
    relative_y: float,
    table_x: float,
    table_y: float,
    table_width: float,
    table_height: float,
    rotation: float = 0.0,
) -> tuple[float, float]:
    """
    Map a seat's relative position to canvas coordinates.

    Scale by the table size, rotate about the table center by ``rotation``
    degrees, then translate by the table's top-left corner plus half its size.
    """
    theta = np.radians(rotation)
    cos, sin = np.cos(theta), np.sin(theta)
    rotate = np.array([[cos, -sin], [sin, cos]])
    local = np.array([relative_x * table_width, relative_y * table_height])
    rotated_x, rotated_y = rotate @ local
    return (
        float(table_x + table_width / 2 + rotated_x),
        float(table_y + table_height / 2 + rotated_y),
    )


def seats_to_absolute(
    seats: list[SeatPosition],
    table_x: float,
    table_y: float,
    table_width: float,
    table_height: float,
    rotation: float = 0.0,
) -> list[tuple[float, float]]:
    """Apply :func:`seat_relative_to_absolute` to every seat of a table."""
    return [
        seat_relative_to_absolute(
            seat.relative_x,
            seat.relative_y,
            table_x,
            table_y,
            table_width,
            table_height,
            rotation,
        )
        for seat in seats
    ]
