"""Roster preparation for seatplan.

The planner seats guests in the order it is given; these helpers produce
that order and the filtered roster on the caller's side.
"""

from collections.abc import Iterable

from seatplan.models import GuestRecord

DEFAULT_RSVP_STATUSES: tuple[str, ...] = ("ACCEPTED", "PENDING")

# Confirmed guests are seated before pending ones within a group/side
RSVP_ORDER: dict[str, int] = {"ACCEPTED": 0, "PENDING": 1, "DECLINED": 2}


def seats_needed_for(
    rsvp_status: str | None,
    rsvp_guest_count: int | None = None,
    expected_guests: int | None = None,
) -> int:
    """
    Number of seats a party occupies.

    Declined parties need none (if one is seated anyway it takes the one
    seat every GuestRecord is granted). Accepted parties need the head
    count they replied with, everyone else the head count the host expects.
    """
    status = (rsvp_status or "PENDING").upper()
    if status == "DECLINED":
        return 0
    if status == "ACCEPTED":
        return rsvp_guest_count or 1
    return expected_guests or 1


def filter_roster(
    guests: Iterable[GuestRecord],
    side: str | None = None,
    group: str | None = None,
    rsvp_statuses: Iterable[str] = DEFAULT_RSVP_STATUSES,
) -> list[GuestRecord]:
    """
    Select guests by side, group and RSVP status.

    ``None`` or ``"all"`` disables the side/group filter. A guest without an
    RSVP counts as pending.
    """
    statuses = {s.upper() for s in rsvp_statuses}
    selected: list[GuestRecord] = []
    for guest in guests:
        if side not in (None, "all") and guest.side != side:
            continue
        if group not in (None, "all") and guest.group_name != group:
            continue
        if (guest.rsvp_status or "PENDING").upper() not in statuses:
            continue
        selected.append(guest)
    return selected


def _sort_text(value: str | None) -> tuple[int, str]:
    # Missing values sort after every named value
    if not value:
        return (1, "")
    return (0, value.lower())


def sort_roster(guests: Iterable[GuestRecord]) -> list[GuestRecord]:
    """Order guests by group, side, RSVP status, then name (stable)."""
    return sorted(
        guests,
        key=lambda g: (
            _sort_text(g.group_name),
            _sort_text(g.side),
            RSVP_ORDER.get((g.rsvp_status or "PENDING").upper(), len(RSVP_ORDER)),
            g.name.lower(),
        ),
    )
