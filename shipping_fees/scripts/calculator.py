"""
Shipping Fee Calculator
=======================

CLI tool to quote a shipping fee and list the shipping options for one order.
Prompts for the order when no destination is given on the command line.

Usage:
    python -m shipping_fees.scripts.calculator
    python -m shipping_fees.scripts.calculator --country FR --subtotal 100 --weight 2
    python -m shipping_fees.scripts.calculator --city Austin --zones zones.json --rates rates.json
    python -m shipping_fees.scripts.calculator --cities
    python -m shipping_fees.scripts.calculator --validate --zones zones.json --rates rates.json
"""

import argparse
import sys

from shipping_fees.calculate_fees import calculate_options, quote_fee
from shipping_fees.data import (
    REFERENCE_DIR,
    read_records,
    zones_from_records,
    rates_from_records,
    validate_zone_records,
    validate_rate_records,
)
from shipping_fees.data.schema import zone_row
from shipping_fees.order import Order
from shipping_fees.pipeline import configured_cities
from shipping_fees.version import VERSION


DEFAULT_ZONES = REFERENCE_DIR / "default_zones.json"
DEFAULT_RATES = REFERENCE_DIR / "default_rates.json"


def get_user_input() -> dict:
    """Prompt user for order details."""
    print("\n=== Shipping Fee Calculator ===")
    print(f"Version: {VERSION}\n")

    city = input("Destination city (optional): ").strip()
    country = input("Destination country code (optional, e.g., US): ").strip()
    region = input("Destination region (optional): ").strip()

    subtotal = float(input("Order subtotal [default: 0]: ").strip() or 0)
    weight = float(input("Order weight [default: 0]: ").strip() or 0)

    return {
        "city": city,
        "country": country,
        "region": region,
        "subtotal": subtotal,
        "weight": weight,
    }


def print_results(options, quote, order: Order) -> None:
    """Print quote and option list."""
    print("\n" + "=" * 60)
    print("SHIPPING OPTIONS")
    print("=" * 60)

    print(f"\nDestination: {order.destination.describe()}")
    print(f"Subtotal: {order.subtotal:.2f}   Weight: {order.weight:g}")

    if len(options) == 0:
        print("\nNo shipping options.")
    else:
        print()
        for row in options.iter_rows(named=True):
            days = f"  ({row['estimated_days']} days)" if row["estimated_days"] else ""
            print(f"  {row['name']:<32} {row['method']:<13} ${row['cost']:>8.2f}  [{row['zone_name']}]{days}")

    print("\n--- Quote ---")
    if quote.ok:
        print(f"FEE:  ${quote.fee:>8.2f}")
    else:
        print(f"No fee: {quote.error}")
    print()


def run_validate(zone_records: list[dict], rate_records: list[dict]) -> int:
    """Report configuration problems. Returns the process exit code."""
    zone_problems = validate_zone_records(zone_records)
    zone_ids = {zone_row(r)["zone_id"] for r in zone_records} - {None}
    rate_problems = validate_rate_records(rate_records, zone_ids)

    print(f"Zones: {len(zone_records)}, problems: {len(zone_problems)}")
    for problem in zone_problems:
        print(f"  {problem}")
    print(f"Rates: {len(rate_records)}, problems: {len(rate_problems)}")
    for problem in rate_problems:
        print(f"  {problem}")

    return 1 if zone_problems or rate_problems else 0


# =============================================================================
# MAIN
# =============================================================================

def main() -> int:
    parser = argparse.ArgumentParser(
        description="Quote shipping fees against a zone/rate snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m shipping_fees.scripts.calculator --country US --subtotal 60
  python -m shipping_fees.scripts.calculator --city Austin --weight 1.5
  python -m shipping_fees.scripts.calculator --cities
  python -m shipping_fees.scripts.calculator --validate --rates rates.json
        """
    )

    parser.add_argument("--zones", default=DEFAULT_ZONES, help="Zone documents JSON (default: reference zones)")
    parser.add_argument("--rates", default=DEFAULT_RATES, help="Rate documents JSON (default: reference rates)")

    parser.add_argument("--city", help="Destination city")
    parser.add_argument("--country", help="Destination country")
    parser.add_argument("--region", help="Destination region")
    parser.add_argument("--subtotal", type=float, default=0.0, help="Order subtotal (default: 0)")
    parser.add_argument("--weight", type=float, default=0.0, help="Order weight (default: 0)")

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--cities",
        action="store_true",
        help="List the cities configured on any rate"
    )
    mode_group.add_argument(
        "--validate",
        action="store_true",
        help="Check the zone and rate documents and report problems"
    )

    args = parser.parse_args()

    zone_records = read_records(args.zones)
    rate_records = read_records(args.rates)

    if args.validate:
        return run_validate(zone_records, rate_records)

    zones = zones_from_records(zone_records)
    rates = rates_from_records(rate_records, zone_ids=set(zones["zone_id"].to_list()))

    if args.cities:
        cities = configured_cities(rates)
        print("\n".join(cities) if cities else "No cities configured.")
        return 0

    try:
        if args.city or args.country or args.region:
            fields = vars(args)
        else:
            fields = get_user_input()

        order = Order.of(
            subtotal=fields["subtotal"],
            weight=fields["weight"],
            country=fields["country"],
            region=fields["region"],
            city=fields["city"],
        )

        options = calculate_options(zones, rates, order)
        quote = quote_fee(zones, rates, order)
        print_results(options, quote, order)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
