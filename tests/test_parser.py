"""Tests for guest CSV and table-type YAML parsing."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from seatplan.geometry import DEFAULT_STANDOFFS, StandoffPreset
from seatplan.parser import (
    create_table_types_template,
    parse_guests_csv,
    parse_table_types_yaml,
)

GUESTS_CSV = """\
id,name,group,side,seats_needed,expected_guests,rsvp_status,rsvp_guest_count,table
1,Noa Levi,family,bride,,2,accepted,3,
2,Avi Cohen,friends,groom,2,,PENDING,,Table 4
,Dana,,,,4,,,
,,,,,,,,
"""


def write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_parse_guests_csv(tmp_path):
    guests = parse_guests_csv(write(tmp_path, "guests.csv", GUESTS_CSV))
    assert [g.id for g in guests] == ["1", "2", "Dana"]

    noa, avi, dana = guests
    assert noa.name == "Noa Levi"
    assert noa.group_name == "family"
    assert noa.rsvp_status == "ACCEPTED"
    assert noa.seats_needed == 3  # from the RSVP head count
    assert noa.table_assignment is None

    assert avi.seats_needed == 2  # explicit column wins
    assert avi.table_assignment == "Table 4"

    assert dana.group_name is None
    assert dana.seats_needed == 4  # pending: expected head count


def test_parse_guests_csv_rejects_bad_numbers(tmp_path):
    path = write(tmp_path, "guests.csv", "id,name,seats_needed\n1,Noa,two\n")
    with pytest.raises(ValueError, match="Line 2: seats_needed"):
        parse_guests_csv(path)


TABLES_YAML = """\
table_types:
  - shape: rectangle
    capacity: 12
    count: 2
    size: medium
    style: side-split
    groups: [family, work]
  - shape: circle
    capacity: 10
  - shape: square
    capacity: 8
    width: 150
    height: 150
    groups: friends
standoffs:
  "150x150":
    short_side: 0.55
    long_side: 0.6
"""


def test_parse_table_types_yaml(tmp_path):
    requests, standoffs = parse_table_types_yaml(write(tmp_path, "tables.yaml", TABLES_YAML))
    assert len(requests) == 3

    banquet, rounds, squares = requests
    assert (banquet.shape, banquet.capacity, banquet.count) == ("rectangle", 12, 2)
    assert (banquet.width, banquet.height) == (220.0, 100.0)
    assert banquet.style == "side-split"
    assert banquet.group_assignments == ["family", "work"]

    assert rounds.count == 1
    assert rounds.width is None
    assert rounds.group_assignments == []

    assert squares.group_assignments == ["friends"]
    assert squares.width == 150.0

    assert standoffs["150x150"] == StandoffPreset(short_side=0.55, long_side=0.6)
    assert standoffs["220x100"] == DEFAULT_STANDOFFS["220x100"]


def test_empty_yaml_has_no_table_types(tmp_path):
    requests, standoffs = parse_table_types_yaml(write(tmp_path, "tables.yaml", ""))
    assert requests == []
    assert standoffs == DEFAULT_STANDOFFS


@pytest.mark.parametrize(
    "entry,message",
    [
        ("{shape: hexagon, capacity: 8}", "unknown shape"),
        ("{shape: circle, capacity: 40}", "capacity must be between 1 and 32"),
        ("{shape: circle, capacity: 8, count: 0}", "count must be at least 1"),
        ("{shape: circle, capacity: 8, style: zigzag}", "unknown style"),
        ("{shape: circle, capacity: 8, size: huge}", "unknown size"),
        ("just-a-string", "expected a mapping"),
    ],
)
def test_invalid_table_types(tmp_path, entry, message):
    path = write(tmp_path, "tables.yaml", f"table_types:\n  - {entry}\n")
    with pytest.raises(ValueError, match=message):
        parse_table_types_yaml(path)


def test_standoff_out_of_range(tmp_path):
    content = 'table_types: []\nstandoffs:\n  "100x50": {short_side: 0.9}\n'
    with pytest.raises(ValueError, match="standoffs"):
        parse_table_types_yaml(write(tmp_path, "tables.yaml", content))


def test_template_round_trips(tmp_path):
    path = tmp_path / "template.yaml"
    create_table_types_template(path, ["family", "friends"])
    text = path.read_text(encoding="utf-8")
    assert "family, friends" in text
    assert yaml.safe_load(text)["table_types"][0]["capacity"] == 10

    requests, _ = parse_table_types_yaml(path)
    assert requests[0].shape == "circle"
    assert (requests[0].width, requests[0].height) == (140.0, 140.0)


def test_null_groups_are_dropped(tmp_path):
    content = "table_types:\n  - {shape: circle, capacity: 8, groups: [family, null, '']}\n"
    requests, _ = parse_table_types_yaml(write(tmp_path, "tables.yaml", content))
    assert requests[0].group_assignments == ["family"]


@pytest.mark.parametrize(
    "standoffs,message",
    [
        ('{"100x50": 0.6}', "expected a mapping"),
        ('{"100x50": {short_side: [1]}}', "values must be numbers"),
    ],
)
def test_malformed_standoffs(tmp_path, standoffs, message):
    path = write(tmp_path, "tables.yaml", f"table_types: []\nstandoffs: {standoffs}\n")
    with pytest.raises(ValueError, match=message):
        parse_table_types_yaml(path)


def test_malformed_yaml_raises_value_error(tmp_path):
    with pytest.raises(ValueError, match="Invalid YAML"):
        parse_table_types_yaml(write(tmp_path, "tables.yaml", "table_types: [\n  - shape: circle\n"))
