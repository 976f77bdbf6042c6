#!/usr/bin/env python3
"""
CLI script to check every registered activity against the live Climatiq API.

The parameter name and unit of each activity must match what Climatiq expects
for its factor ids, which can only be verified by calling the service.

Usage:
    # Check all activities with a quantity of 1
    CLIMATIQ_API_KEY=... python scripts/check_activities.py

    # Check one category with a different quantity
    python scripts/check_activities.py --category food --value 10

    # Check specific activities
    python scripts/check_activities.py car_petrol lpg
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import get_config, get_config_file_for_environment
from app.services.estimators.emission_estimator import EmissionEstimator
from app.services.estimators.exceptions import EstimationError, ServiceMisconfigured
from app.services.registry import activity_registry
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def select_activities(args) -> list[str]:
    if args.activities:
        return args.activities
    if args.category:
        return activity_registry.keys_by_category(args.category)
    return activity_registry.all_keys()


async def check_activities(estimator: EmissionEstimator, keys: list[str], value: float) -> list[tuple]:
    """Estimate each activity once; collect (key, unit, co2e, error) rows."""
    rows = []
    for key in keys:
        definition = activity_registry.lookup(key)
        unit = definition.unit if definition else "-"
        try:
            estimate = await estimator.calculate(key, value)
        except ServiceMisconfigured:
            raise
        except EstimationError as e:
            rows.append((key, unit, None, f"{e.code}: {e.message}"))
            continue
        rows.append((key, unit, estimate.co2e, None))
    return rows


def print_results(rows: list[tuple], value: float):
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Activity", style="bold cyan")
    table.add_column("Input", justify="right")
    table.add_column("kg CO2e", justify="right", style="bold green")
    table.add_column("Error", style="red")

    for key, unit, co2e, error in rows:
        table.add_row(
            key,
            f"{value:g} {unit}",
            f"{co2e:.4f}" if co2e is not None else "-",
            error or "",
        )

    console.print(table)
    console.print()


async def main():
    """Main entry point for the activity check script."""
    parser = argparse.ArgumentParser(
        description="Check registered activities against the Climatiq API"
    )
    parser.add_argument("activities", nargs="*", help="Activity keys to check")
    parser.add_argument(
        "--category",
        choices=activity_registry.CATEGORIES,
        help="Only check activities of this category",
    )
    parser.add_argument(
        "--value",
        type=float,
        default=1.0,
        help="Quantity sent for every activity (default: 1)",
    )
    args = parser.parse_args()

    print_header("CLIMATIQ ACTIVITY CHECK", "bold cyan")

    config = get_config(get_config_file_for_environment())
    estimator = EmissionEstimator.from_config(config)
    keys = select_activities(args)

    try:
        with console.status("[bold cyan]Calling Climatiq...", spinner="dots"):
            rows = await check_activities(estimator, keys, args.value)
    except ServiceMisconfigured as e:
        console.print(Panel(f"[bold red]{e.message}[/bold red]", border_style="bold red"))
        sys.exit(1)

    print_results(rows, args.value)

    failures = [row for row in rows if row[3]]
    if failures:
        console.print(
            Panel(
                f"[yellow]{len(failures)} of {len(rows)} activities failed[/yellow]",
                border_style="yellow",
            )
        )
        sys.exit(1)

    console.print(
        Panel(
            Text(f"All {len(rows)} activities estimated", justify="center"),
            border_style="bold green",
            style="bold green",
        )
    )


if __name__ == "__main__":
    asyncio.run(main())
