"""Data models for seatplan."""

from dataclasses import dataclass, field
from typing import Literal

TableShape = Literal["circle", "square", "rectangle", "oval"]
SeatArrangementStyle = Literal["even", "side-split", "long-sides-only", "custom"]
SeatSide = Literal["bride", "groom", "head", "foot"]
ArrangeMode = Literal["replace", "add"]

TABLE_SHAPES: tuple[TableShape, ...] = ("circle", "square", "rectangle", "oval")
ARRANGEMENT_STYLES: tuple[SeatArrangementStyle, ...] = (
    "even",
    "side-split",
    "long-sides-only",
    "custom",
)
ARRANGE_MODES: tuple[ArrangeMode, ...] = ("replace", "add")


@dataclass(frozen=True)
class SeatPosition:
    """A seat relative to its table's center.

    relative_x/relative_y are fractions of the table's width/height.
    angle is in degrees, 0 = seat back to the top edge, clockwise positive.
    """

    seat_number: int
    relative_x: float
    relative_y: float
    angle: float
    side: SeatSide | None = None  # only set by the side-split style


@dataclass
class TableTypeRequest:
    """One or more identical tables, optionally reserved for named groups."""

    shape: TableShape
    capacity: int
    count: int = 1
    width: float | None = None
    height: float | None = None
    group_assignments: list[str] = field(default_factory=list)  # empty = open pool
    style: SeatArrangementStyle = "even"


@dataclass
class GuestRecord:
    """A guest party on the roster."""

    id: str
    name: str = ""
    group_name: str | None = None
    side: str | None = None
    seats_needed: int = 1  # the planner seats anything below 1 as one seat
    table_assignment: str | None = None  # existing table, consulted in "add" mode
    rsvp_status: str | None = None


@dataclass
class ArrangementPreview:
    """Read-only projection of what an arrangement run would do."""

    total_guests: int = 0
    total_seats: int = 0
    total_configured_tables: int = 0
    total_configured_seats: int = 0
    already_seated: int = 0
    to_be_seated: int = 0
    seats_needed_for_mode: int = 0
    group_capacity: dict[str, int] = field(default_factory=dict)
    group_overflow: dict[str, int] = field(default_factory=dict)
    ungrouped_guests: int = 0
    open_pool_seats: int = 0
    remaining_guests: int = 0
    has_enough_seats: bool = False


@dataclass
class SeatAssignment:
    """One seat slot taken by a guest party."""

    guest_id: str
    seat_number: int


@dataclass
class PlannedTable:
    """A physical table to create, with its seat layout and assignments."""

    number: int
    name: str
    shape: TableShape
    capacity: int
    width: float | None
    height: float | None
    style: SeatArrangementStyle
    reserved_groups: list[str] = field(default_factory=list)
    seats: list[SeatPosition] = field(default_factory=list)
    assignments: list[SeatAssignment] = field(default_factory=list)

    @property
    def seats_used(self) -> int:
        return len(self.assignments)

    @property
    def seats_free(self) -> int:
        return len(self.seats) - len(self.assignments)


@dataclass
class ArrangementPlan:
    """Tables to create and guest placements, handed to the persistence layer."""

    tables: list[PlannedTable]
    mode: ArrangeMode
    clear_existing: bool  # replace mode: existing tables are dropped first
    already_seated: int = 0
    eligible_guests: int = 0
    seated_guest_ids: list[str] = field(default_factory=list)
    unassigned_guest_ids: list[str] = field(default_factory=list)

    @property
    def guests_seated(self) -> int:
        return len(self.seated_guest_ids)

    @property
    def remaining_guests(self) -> int:
        return len(self.unassigned_guest_ids)
