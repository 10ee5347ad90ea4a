"""Greedy guest arrangement onto configured table types.

Guests are seated in the order the caller supplies; nothing is reordered to
pack tables more tightly. A party needing several seats takes individual
seat slots and may end up split across tables when no single table has
room for all of it.
"""

import logging
from collections.abc import Iterable, Mapping

from seatplan.geometry import StandoffPreset, compute_seats
from seatplan.models import (
    ArrangeMode,
    ArrangementPlan,
    ArrangementPreview,
    GuestRecord,
    PlannedTable,
    SeatAssignment,
    TableTypeRequest,
)

logger = logging.getLogger(__name__)

OPEN_POOL_LABEL = "Open"


def _seats(guest: GuestRecord) -> int:
    """Seat demand of a party; every party occupies at least one seat."""
    return max(1, guest.seats_needed)


def _groups(request: TableTypeRequest) -> list[str]:
    """Reserved groups of a request, de-duplicated in the order given."""
    return list(dict.fromkeys(g for g in request.group_assignments if g))


def _is_active(request: TableTypeRequest) -> bool:
    return request.count > 0 and request.capacity > 0


def eligible_guests(guests: Iterable[GuestRecord], mode: ArrangeMode) -> list[GuestRecord]:
    """Guests to place: everyone in replace mode, unseated guests in add mode."""
    if mode == "replace":
        return list(guests)
    return [g for g in guests if not g.table_assignment]


def group_capacities(table_types: Iterable[TableTypeRequest]) -> dict[str, int]:
    """
    Seats reserved per group across all table-type requests.

    Each named group of a request gets ``max(1, count // len(groups))``
    tables of that request's capacity. Idle reservations are not released
    to the open pool.
    """
    capacity: dict[str, int] = {}
    for request in table_types:
        groups = _groups(request)
        if not groups or not _is_active(request):
            continue
        tables_per_group = max(1, request.count // len(groups))
        for group in groups:
            capacity[group] = capacity.get(group, 0) + tables_per_group * request.capacity
    return capacity


def open_pool_seats(table_types: Iterable[TableTypeRequest]) -> int:
    """Seats on table types not reserved for any group."""
    return sum(
        r.capacity * r.count for r in table_types if _is_active(r) and not _groups(r)
    )


def first_fit(
    guests: list[GuestRecord], capacity: int
) -> tuple[list[GuestRecord], list[GuestRecord]]:
    """
    Split a group's guests into (fitting, overflow).

    The first guest whose cumulative demand exceeds ``capacity`` and every
    guest after them overflow.
    """
    used = 0
    for i, guest in enumerate(guests):
        if used + _seats(guest) > capacity:
            return guests[:i], guests[i:]
        used += _seats(guest)
    return list(guests), []


def preview_arrangement(
    guests: Iterable[GuestRecord],
    table_types: Iterable[TableTypeRequest],
    mode: ArrangeMode = "add",
) -> ArrangementPreview:
    """
    Summarize how an arrangement run would go, without placing anyone.

    Never raises: shortfalls are reported through ``has_enough_seats`` and
    ``remaining_guests``.
    """
    guests = list(guests)
    table_types = list(table_types)
    eligible = eligible_guests(guests, mode)

    capacity = group_capacities(table_types)
    overflow: dict[str, int] = {}
    guests_in_groups = 0
    for group, seats in capacity.items():
        members = [g for g in eligible if g.group_name == group]
        guests_in_groups += len(members)
        overflow[group] = len(first_fit(members, seats)[1])

    ungrouped = len(eligible) - guests_in_groups
    pool_seats = open_pool_seats(table_types)
    remaining = sum(overflow.values()) + max(0, ungrouped - pool_seats)

    active = [r for r in table_types if _is_active(r)]
    configured_seats = sum(r.capacity * r.count for r in active)
    seats_for_mode = sum(_seats(g) for g in eligible)

    preview = ArrangementPreview(
        total_guests=len(guests),
        total_seats=sum(_seats(g) for g in guests),
        total_configured_tables=sum(r.count for r in active),
        total_configured_seats=configured_seats,
        already_seated=sum(1 for g in guests if g.table_assignment),
        to_be_seated=len(eligible),
        seats_needed_for_mode=seats_for_mode,
        group_capacity=capacity,
        group_overflow=overflow,
        ungrouped_guests=ungrouped,
        open_pool_seats=pool_seats,
        remaining_guests=remaining,
        has_enough_seats=configured_seats >= seats_for_mode,
    )
    logger.debug(
        f"Preview ({mode}): {len(eligible)} eligible, {configured_seats} seats configured, "
        f"{remaining} remaining"
    )
    return preview


def _table_owners(request: TableTypeRequest) -> list[str | None]:
    """Reserved group for each physical table of a request (None = open pool)."""
    groups = _groups(request)
    if not groups:
        return [None] * request.count
    tables_per_group = max(1, request.count // len(groups))
    owners: list[str | None] = [g for g in groups for _ in range(tables_per_group)]
    owners = owners[: request.count]
    # tables left after the even split go round-robin to the same groups
    leftover = request.count - len(owners)
    owners.extend(groups[i % len(groups)] for i in range(leftover))
    return owners


def build_tables(
    table_types: Iterable[TableTypeRequest],
    standoffs: Mapping[str, StandoffPreset] | None = None,
) -> list[PlannedTable]:
    """Instantiate every physical table, computing its seat layout once."""
    tables: list[PlannedTable] = []
    for request in table_types:
        if not _is_active(request):
            continue
        for owner in _table_owners(request):
            number = len(tables) + 1
            tables.append(
                PlannedTable(
                    number=number,
                    name=f"{number} - {owner or OPEN_POOL_LABEL}",
                    shape=request.shape,
                    capacity=request.capacity,
                    width=request.width,
                    height=request.height,
                    style=request.style,
                    reserved_groups=[owner] if owner else [],
                    seats=compute_seats(
                        request.capacity,
                        request.shape,
                        request.style,
                        request.width,
                        request.height,
                        standoffs,
                    ),
                )
            )
    return tables


def _place(guest: GuestRecord, tables: list[PlannedTable]) -> bool:
    """Give a party seat slots on the first tables with room, all or nothing."""
    needed = _seats(guest)
    if sum(t.seats_free for t in tables) < needed:
        return False
    for table in tables:
        while needed and table.seats_free:
            seat = table.seats[len(table.assignments)]
            table.assignments.append(SeatAssignment(guest_id=guest.id, seat_number=seat.seat_number))
            needed -= 1
        if not needed:
            break
    return True


def execute_arrangement(
    guests: Iterable[GuestRecord],
    table_types: Iterable[TableTypeRequest],
    mode: ArrangeMode = "add",
    assign_guests: bool = True,
    mix_remaining: bool = True,
    standoffs: Mapping[str, StandoffPreset] | None = None,
) -> ArrangementPlan:
    """
    Build the tables and guest placements for an arrangement run.

    Group tables are filled from their group with the same first-fit cutoff
    and the same per-group seat allowance as the preview, open-pool tables
    take guests whose group has no table.
    With ``mix_remaining`` any guest still unplaced goes to whatever free
    seat is left, open-pool tables first. With ``assign_guests=False`` the
    tables are created empty. Persisting the plan is the caller's job.
    """
    guests = list(guests)
    table_types = list(table_types)
    eligible = eligible_guests(guests, mode)

    plan = ArrangementPlan(
        tables=[],
        mode=mode,
        clear_existing=mode == "replace",
        already_seated=sum(1 for g in guests if g.table_assignment),
        eligible_guests=len(eligible),
    )

    if assign_guests and not eligible:
        logger.debug("No eligible guests, nothing to arrange")
        return plan

    plan.tables = build_tables(table_types, standoffs)
    if not assign_guests:
        plan.unassigned_guest_ids = [g.id for g in eligible]
        logger.debug(f"Created {len(plan.tables)} empty tables")
        return plan

    group_tables: dict[str, list[PlannedTable]] = {}
    for table in plan.tables:
        for group in table.reserved_groups:
            group_tables.setdefault(group, []).append(table)
    open_tables = [t for t in plan.tables if not t.reserved_groups]

    # Track by roster position so repeated ids are still counted once each
    placed: set[int] = set()
    indexed = list(enumerate(eligible))

    # Groups never take more than their previewed share; seats on leftover
    # tables are only reached by mixing
    limits = group_capacities(table_types)
    for group, tables in group_tables.items():
        used = 0
        for i, guest in indexed:
            if guest.group_name != group:
                continue
            if used + _seats(guest) > limits.get(group, 0) or not _place(guest, tables):
                break  # first-fit cutoff: the rest of the group overflows
            used += _seats(guest)
            placed.add(i)

    for i, guest in indexed:
        if guest.group_name in group_tables:
            continue
        if _place(guest, open_tables):
            placed.add(i)

    if mix_remaining:
        reserved_tables = [t for t in plan.tables if t.reserved_groups]
        anywhere = open_tables + reserved_tables
        for i, guest in indexed:
            if i not in placed and _place(guest, anywhere):
                placed.add(i)

    plan.seated_guest_ids = [g.id for i, g in indexed if i in placed]
    plan.unassigned_guest_ids = [g.id for i, g in indexed if i not in placed]
    logger.debug(
        f"Arranged {plan.guests_seated} of {plan.eligible_guests} guests on "
        f"{len(plan.tables)} tables, {plan.remaining_guests} unassigned"
    )
    return plan
