"""Output formatting for seatplan."""

import csv
import io

from seatplan.models import ArrangementPlan, ArrangementPreview, GuestRecord, PlannedTable


def format_preview(preview: ArrangementPreview) -> str:
    """Format an arrangement preview for display."""
    lines: list[str] = ["=== Arrangement Preview ==="]
    lines.append(f"Guests: {preview.total_guests} ({preview.total_seats} seats)")
    if preview.already_seated:
        lines.append(f"Already seated: {preview.already_seated}")
    lines.append(f"To be seated: {preview.to_be_seated} ({preview.seats_needed_for_mode} seats)")
    lines.append(
        f"Configured: {preview.total_configured_tables} tables, "
        f"{preview.total_configured_seats} seats"
    )

    if preview.group_capacity:
        lines.append("")
        lines.append("Reserved seats by group:")
        for group, seats in preview.group_capacity.items():
            overflow = preview.group_overflow.get(group, 0)
            suffix = f", {overflow} over" if overflow else ""
            lines.append(f"  {group}: {seats} seats{suffix}")

    lines.append(f"Ungrouped guests: {preview.ungrouped_guests}")
    lines.append(f"Open seats: {preview.open_pool_seats}")

    if not preview.has_enough_seats:
        lines.append("")
        lines.append("Warning: not enough seats for the guests to be seated.")
    if preview.remaining_guests:
        lines.append(f"Guests that will not fit their tables: {preview.remaining_guests}")

    return "\n".join(lines)


def format_plan(plan: ArrangementPlan, guests: list[GuestRecord] | None = None) -> str:
    """Format an arrangement plan for display."""
    names: dict[str, str] = {}
    if guests:
        names = {g.id: g.name or g.id for g in guests}

    lines: list[str] = []
    if not plan.tables:
        lines.append("No tables to create.")
    else:
        action = "replacing existing tables" if plan.clear_existing else "adding to existing tables"
        lines.append(f"=== Tables ({action}) ===")
        lines.append(f"Guests seated: {plan.guests_seated} of {plan.eligible_guests}")
        lines.append("")

        for table in plan.tables:
            lines.append(
                f"--- {table.name} ({table.shape}, {table.seats_used}/{table.capacity} seats) ---"
            )
            # a multi-seat party shows once, with its seat numbers
            by_guest: dict[str, list[int]] = {}
            for assignment in table.assignments:
                by_guest.setdefault(assignment.guest_id, []).append(assignment.seat_number)
            for guest_id, seats in by_guest.items():
                seat_list = ", ".join(str(s) for s in seats)
                lines.append(f"  - {names.get(guest_id, guest_id)} (seat {seat_list})")
            if not by_guest:
                lines.append("  (empty)")
        lines.append("")

    if plan.unassigned_guest_ids:
        lines.append(f"=== Unassigned guests ({plan.remaining_guests}) ===")
        for guest_id in plan.unassigned_guest_ids:
            lines.append(f"  - {names.get(guest_id, guest_id)}")

    return "\n".join(lines).rstrip()


def format_seat_layout(table: PlannedTable) -> str:
    """Format a table's seat positions as an aligned table."""
    lines = [f"{table.name}: {table.shape}, {table.style}"]
    lines.append(f"{'seat':>4} | {'x':>7} | {'y':>7} | {'angle':>6} | side")
    lines.append("-" * 42)
    for seat in table.seats:
        lines.append(
            f"{seat.seat_number:>4} | {seat.relative_x:>7.3f} | {seat.relative_y:>7.3f} | "
            f"{seat.angle:>6.1f} | {seat.side or ''}"
        )
    return "\n".join(lines)


def format_plan_csv(plan: ArrangementPlan) -> str:
    """Format seat assignments as CSV for export."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["table", "table_name", "seat", "guest_id"])

    for table in plan.tables:
        for assignment in sorted(table.assignments, key=lambda a: a.seat_number):
            writer.writerow([table.number, table.name, assignment.seat_number, assignment.guest_id])

    return buffer.getvalue().rstrip("\n")
