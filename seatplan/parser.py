"""CSV and YAML parsing for seatplan."""

import csv
import logging
from pathlib import Path
from typing import Any

import yaml

from seatplan.geometry import (
    DEFAULT_STANDOFFS,
    SEAT_PROTRUSION_FACTOR,
    SIZE_PRESETS,
    StandoffPreset,
)
from seatplan.models import ARRANGEMENT_STYLES, TABLE_SHAPES, GuestRecord, TableTypeRequest
from seatplan.normalize import seats_needed_for

logger = logging.getLogger(__name__)

MIN_CAPACITY = 1
MAX_CAPACITY = 32
MAX_STANDOFF = 0.5 * (1 + SEAT_PROTRUSION_FACTOR)


def _optional_int(raw: str | None, column: str, line: int) -> int | None:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Line {line}: {column} must be a whole number, got {raw!r}") from None


def _optional_text(raw: str | None) -> str | None:
    raw = (raw or "").strip()
    return raw or None


def parse_guests_csv(csv_path: Path) -> list[GuestRecord]:
    """
    Parse the guest roster CSV.

    Recognized columns: id, name, group, side, seats_needed, expected_guests,
    rsvp_status, rsvp_guest_count, table. Rows keep their file order.
    """
    guests: list[GuestRecord] = []

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        # line 1 is the header
        for line, row in enumerate(reader, start=2):
            name = (row.get("name") or "").strip()
            guest_id = (row.get("id") or "").strip() or name
            if not guest_id:
                continue

            rsvp_status = _optional_text(row.get("rsvp_status"))
            if rsvp_status:
                rsvp_status = rsvp_status.upper()

            seats = _optional_int(row.get("seats_needed"), "seats_needed", line)
            if seats is None:
                seats = seats_needed_for(
                    rsvp_status,
                    _optional_int(row.get("rsvp_guest_count"), "rsvp_guest_count", line),
                    _optional_int(row.get("expected_guests"), "expected_guests", line),
                )

            guests.append(
                GuestRecord(
                    id=guest_id,
                    name=name or guest_id,
                    group_name=_optional_text(row.get("group")),
                    side=_optional_text(row.get("side")),
                    seats_needed=seats,
                    table_assignment=_optional_text(row.get("table")),
                    rsvp_status=rsvp_status,
                )
            )

    logger.debug(f"Parsed {len(guests)} guests from {csv_path}")
    return guests


def _parse_table_type(index: int, entry: Any) -> TableTypeRequest:
    where = f"table_types[{index}]"
    if not isinstance(entry, dict):
        raise ValueError(f"{where}: expected a mapping")

    shape = entry.get("shape", "circle")
    if shape not in TABLE_SHAPES:
        raise ValueError(f"{where}: unknown shape {shape!r} (choose from {', '.join(TABLE_SHAPES)})")

    capacity = entry.get("capacity")
    if not isinstance(capacity, int) or not MIN_CAPACITY <= capacity <= MAX_CAPACITY:
        raise ValueError(f"{where}: capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}")

    count = entry.get("count", 1)
    if not isinstance(count, int) or count < 1:
        raise ValueError(f"{where}: count must be at least 1")

    style = entry.get("style", "even")
    if style not in ARRANGEMENT_STYLES:
        raise ValueError(f"{where}: unknown style {style!r}")

    width = entry.get("width")
    height = entry.get("height")
    size = entry.get("size")
    if size is not None:
        presets = SIZE_PRESETS[shape]
        if size not in presets:
            raise ValueError(f"{where}: unknown size {size!r} for {shape} (choose from {', '.join(presets)})")
        width, height = presets[size]

    groups = entry.get("groups") or []
    if isinstance(groups, str):
        groups = [groups]

    return TableTypeRequest(
        shape=shape,
        capacity=capacity,
        count=count,
        width=float(width) if width is not None else None,
        height=float(height) if height is not None else None,
        group_assignments=[str(g) for g in groups if g],
        style=style,
    )


def _parse_standoffs(data: Any) -> dict[str, StandoffPreset]:
    standoffs = dict(DEFAULT_STANDOFFS)
    if not data:
        return standoffs
    if not isinstance(data, dict):
        raise ValueError("standoffs: expected a mapping of size key to values")

    for key, values in data.items():
        values = values or {}
        if not isinstance(values, dict):
            raise ValueError(f"standoffs[{key}]: expected a mapping")
        try:
            preset = StandoffPreset(
                short_side=float(values.get("short_side", 0.5)),
                long_side=float(values.get("long_side", 0.5)),
            )
        except (TypeError, ValueError):
            raise ValueError(f"standoffs[{key}]: values must be numbers") from None
        for value in (preset.short_side, preset.long_side):
            if not 0 <= value <= MAX_STANDOFF:
                raise ValueError(f"standoffs[{key}]: values must be between 0 and {MAX_STANDOFF}")
        standoffs[str(key)] = preset

    return standoffs


def parse_table_types_yaml(
    yaml_path: Path,
) -> tuple[list[TableTypeRequest], dict[str, StandoffPreset]]:
    """Parse the table-types YAML file, returning requests and standoff presets."""
    with yaml_path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if not data:
        return [], dict(DEFAULT_STANDOFFS)
    if not isinstance(data, dict):
        raise ValueError("Expected a mapping with a 'table_types' list")

    entries = data.get("table_types") or []
    if not isinstance(entries, list):
        raise ValueError("table_types: expected a list")

    requests = [_parse_table_type(i, entry) for i, entry in enumerate(entries)]
    standoffs = _parse_standoffs(data.get("standoffs"))
    logger.debug(f"Parsed {len(requests)} table types from {yaml_path}")
    return requests, standoffs


def create_table_types_template(output_path: Path, groups: list[str]):
    """Create a starter table-types YAML file."""
    template = {
        "table_types": [
            {
                "shape": "circle",
                "capacity": 10,
                "count": 1,
                "size": "medium",
                "groups": [],
            }
        ]
    }

    header = f"""\
# Table types for seatplan
# Each entry creates `count` identical tables.
#
# Groups on the guest list: {", ".join(groups) if groups else "(none)"}
# Shapes: {", ".join(TABLE_SHAPES)}
# Sizes: small, medium, large (or give width/height in pixels)
# Styles: {", ".join(ARRANGEMENT_STYLES)} (side-split and long-sides-only need a rectangle)
#
# Leave `groups` empty for open tables any guest may use, or list the
# groups the tables are reserved for:
#   - shape: rectangle
#     capacity: 12
#     count: 2
#     size: large
#     groups: [family]

"""

    with output_path.open("w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(template, f, default_flow_style=False, sort_keys=False)
