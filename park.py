#!/usr/bin/env python3
"""
Unified CLI for the parking lot ledger.

Commands:
  rates     - List vehicle types and their hourly fees
  fee       - Calculate the fee for a single stay
  simulate  - Replay a lot scenario file and show the resulting account
"""

import argparse
import logging
import sys
from pathlib import Path
import yaml
from tabulate import tabulate
from typing import List, Optional

from parking import (
    ScenarioEvent,
    VehicleType,
    calculate_fee,
    load_scenario,
)
from parking.scenario import CHECK_IN
from validate_yaml import load_schema, validate_lot_file

# =============================================================================
# Formatting helpers
# =============================================================================


def format_fee(fee: Optional[int]) -> str:
    """Format a fee for display."""
    return f"${fee:,}" if fee is not None else "-"


def format_minutes(minutes: Optional[float]) -> str:
    """Format a duration as '2h 30m' (or '45m')."""
    if minutes is None:
        return "-"
    minutes = int(minutes)
    sign = "-" if minutes < 0 else ""
    hours, remaining = divmod(abs(minutes), 60)
    if hours > 0:
        return f"{sign}{hours}h {remaining}m"
    return f"{sign}{remaining}m"


# =============================================================================
# Rates command
# =============================================================================


def make_rates_table() -> List[List[str]]:
    """One row per vehicle type: name, first two hours, each extra 15 minutes."""
    return [
        [t.display_name, format_fee(t.hour_fee), format_fee(t.hour_fee // 4)]
        for t in VehicleType
    ]


def cmd_rates(args):
    """List vehicle types and their hourly fees."""
    headers = ["Type", "Up to 2h", "Per extra 15m"]
    print(tabulate(make_rates_table(), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Fee command
# =============================================================================


def cmd_fee(args):
    """Calculate the fee for a single stay."""
    try:
        vehicle_type = VehicleType.from_name(args.type)
    except ValueError as e:
        print(f"Error: {e}")
        print(f"Known types: {', '.join(t.name.lower() for t in VehicleType)}")
        return 1

    fee = calculate_fee(vehicle_type, args.minutes, args.discount)
    print(f"Type:     {vehicle_type.display_name}")
    print(f"Parked:   {format_minutes(args.minutes)}")
    if args.discount:
        print("Discount: 15% (discount card)")
    print(f"Fee:      {format_fee(fee)}")
    return 0


# =============================================================================
# Simulate command
# =============================================================================


def make_events_table(events: List[ScenarioEvent]) -> List[List[str]]:
    """Convert replayed scenario events to table rows."""
    rows = []
    for event in events:
        fee = None if event.action == CHECK_IN else event.result.fee
        parked = None if event.action == CHECK_IN else event.result.parked_minutes
        rows.append(
            [
                format_minutes(event.minute),
                event.action,
                event.plate,
                "ok" if event.succeeded else "failed",
                format_minutes(parked),
                format_fee(fee),
                event.message,
            ]
        )
    return rows


def cmd_simulate(args):
    """Replay a lot scenario file and show the resulting account."""
    if not args.lot_file.exists():
        print(f"Error: File not found: {args.lot_file}")
        return 1

    errors = validate_lot_file(args.lot_file, load_schema())
    if errors:
        print(f"Error: Invalid scenario {args.lot_file}:")
        for error in errors:
            print(f"  {error}")
        return 1

    try:
        scenario = load_scenario(args.lot_file)
        lot, events = scenario.run()
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: Invalid scenario {args.lot_file}: {e}")
        return 1

    print(f"Lot: {lot.name} (capacity {lot.capacity})")
    print(f"Arrivals: {len(scenario.arrivals)}")
    print(f"Check-outs: {len(scenario.departures)}")
    print()

    if not args.quiet and events:
        headers = ["At", "Action", "Plate", "Result", "Parked", "Fee", "Message"]
        print(tabulate(make_events_table(events), headers=headers, tablefmt="simple"))
        print()

    print(lot.show_account().summary)
    print(f"Occupancy: {lot.occupancy}/{lot.capacity}")
    for plate in lot.list_vehicles():
        print(f"Vehicle plate is {plate}")

    return 0


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Parking lot ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s rates
  %(prog)s fee bus 150
  %(prog)s fee bus 150 --discount
  %(prog)s simulate lots/alke.yaml
  %(prog)s -v simulate lots/alke.yaml --quiet
""",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log check-ins and check-outs as they happen",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Rates subcommand
    subparsers.add_parser("rates", help="List vehicle types and their hourly fees")

    # Fee subcommand
    fee_parser = subparsers.add_parser("fee", help="Calculate the fee for a stay")
    fee_parser.add_argument(
        "type",
        type=str,
        help="Vehicle type (car, motorcycle, minibus, bus)",
    )
    fee_parser.add_argument(
        "minutes",
        type=int,
        help="Minutes parked",
    )
    fee_parser.add_argument(
        "--discount",
        action="store_true",
        help="Apply the discount card reduction",
    )

    # Simulate subcommand
    simulate_parser = subparsers.add_parser(
        "simulate", help="Replay a lot scenario file"
    )
    simulate_parser.add_argument(
        "lot_file",
        type=Path,
        help="Path to lot YAML file (e.g., lots/alke.yaml)",
    )
    simulate_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show the final account and parked vehicles",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Dispatch to command handler
    if args.command == "rates":
        return cmd_rates(args)
    elif args.command == "fee":
        return cmd_fee(args)
    elif args.command == "simulate":
        return cmd_simulate(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
