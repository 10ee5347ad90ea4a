"""Command-line interface for seatplan."""

import argparse
import logging
import sys
from pathlib import Path

from seatplan.models import ARRANGE_MODES
from seatplan.normalize import DEFAULT_RSVP_STATUSES, filter_roster, sort_roster
from seatplan.output import format_plan, format_plan_csv, format_preview, format_seat_layout
from seatplan.parser import (
    create_table_types_template,
    parse_guests_csv,
    parse_table_types_yaml,
)
from seatplan.planner import execute_arrangement, preview_arrangement


def main() -> int:
    """Main entry point for seatplan CLI."""
    parser = argparse.ArgumentParser(
        description="Plan tables and seat guests for an event.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  seatplan guests.csv
  seatplan guests.csv --tables tables.yaml --preview-only
  seatplan guests.csv --tables tables.yaml --mode replace --sort --csv seating.csv
  seatplan guests.csv --tables tables.yaml --group family --no-mix
""",
    )
    parser.add_argument(
        "guests_csv",
        type=Path,
        help="Path to the guest list CSV file",
    )
    parser.add_argument(
        "--tables",
        type=Path,
        help="Path to the table types YAML file",
    )
    parser.add_argument(
        "--mode",
        choices=ARRANGE_MODES,
        default="add",
        help="add: seat only unseated guests; replace: rebuild all tables (default: add)",
    )
    parser.add_argument("--side", help="Only seat guests from this side")
    parser.add_argument("--group", help="Only seat guests from this group")
    parser.add_argument(
        "--rsvp",
        nargs="+",
        default=list(DEFAULT_RSVP_STATUSES),
        help="RSVP statuses to include (default: ACCEPTED PENDING)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Order guests by group, side, RSVP status and name before seating",
    )
    parser.add_argument(
        "--empty-tables",
        action="store_true",
        help="Create the tables without assigning anyone",
    )
    parser.add_argument(
        "--no-mix",
        action="store_true",
        help="Leave guests who do not fit their tables unassigned instead of using any free seat",
    )
    parser.add_argument(
        "--preview-only",
        action="store_true",
        help="Show the preview and stop",
    )
    parser.add_argument(
        "--show-seats",
        action="store_true",
        help="Print the seat layout of every table",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        help="Write seat assignments to this CSV file",
    )
    parser.add_argument(
        "--output-template",
        type=Path,
        help="Path for table types template (default: tables_template.yaml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log planning details",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Validate guest CSV exists
    if not args.guests_csv.exists():
        print(f"Error: Guest list not found: {args.guests_csv}", file=sys.stderr)
        return 1

    # Parse guests
    try:
        guests = parse_guests_csv(args.guests_csv)
    except (OSError, ValueError) as e:
        print(f"Error parsing guest list CSV: {e}", file=sys.stderr)
        return 1

    roster = filter_roster(guests, side=args.side, group=args.group, rsvp_statuses=args.rsvp)
    if args.sort:
        roster = sort_roster(roster)
    print(f"Loaded {len(guests)} guests, {len(roster)} match the filters")

    if not args.tables:
        # No table types yet - write a template to start from
        template_path = args.output_template or Path("tables_template.yaml")
        groups = sorted({g.group_name for g in guests if g.group_name})
        create_table_types_template(template_path, groups)
        print(f"\nNo table types provided. Created template at: {template_path}")
        print("Edit this file to describe your tables, then run again with --tables.")
        return 0

    if not args.tables.exists():
        print(f"Error: Table types file not found: {args.tables}", file=sys.stderr)
        return 1

    try:
        table_types, standoffs = parse_table_types_yaml(args.tables)
    except (OSError, ValueError) as e:
        print(f"Error parsing table types YAML: {e}", file=sys.stderr)
        return 1

    print()
    print(format_preview(preview_arrangement(roster, table_types, args.mode)))
    if args.preview_only:
        return 0

    plan = execute_arrangement(
        roster,
        table_types,
        mode=args.mode,
        assign_guests=not args.empty_tables,
        mix_remaining=not args.no_mix,
        standoffs=standoffs,
    )

    print()
    print(format_plan(plan, roster))

    if args.show_seats:
        for table in plan.tables:
            print()
            print(format_seat_layout(table))

    if args.csv:
        args.csv.write_text(format_plan_csv(plan) + "\n", encoding="utf-8")
        print(f"\nWrote seat assignments to {args.csv}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
