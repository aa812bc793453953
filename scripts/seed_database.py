#!/usr/bin/env python3
"""
CLI script to seed the database with the emission catalog from CSV files.

Usage:
    # Basic seeding (catalog + demo fleet)
    python scripts/seed_database.py

    # Apply migrations first, then clear existing data before seeding
    python scripts/seed_database.py --migrate --clear

    # Seed only the emission catalog
    python scripts/seed_database.py --skip-fleet

    # Use a different data directory
    python scripts/seed_database.py --data-dir path/to/csv/files
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fleet_emissions.core.config import get_config
from fleet_emissions.database.base import apply_db_migration, get_db_url, get_engine_kw
from fleet_emissions.database.session_manager.db_session import Database
from fleet_emissions.services.seed_database import DEFAULT_DATA_DIR, DatabaseSeeder
from fleet_emissions.utils.constants import ConfigFile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create Rich console
console = Console()

CONFIG_FILES = {
    "development": ConfigFile.DEVELOPMENT,
    "production": ConfigFile.PRODUCTION,
    "test": ConfigFile.TEST,
}


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_config(args):
    """Print configuration details."""
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Setting", style="bold yellow")
    config_table.add_column("Value", style="green")

    config_table.add_row("Environment", args.environment)
    config_table.add_row("Data Directory", str(args.data_dir))
    config_table.add_row("Apply Migrations", "Yes" if args.migrate else "No")
    config_table.add_row("Clear Existing", "Yes" if args.clear else "No")
    config_table.add_row("Skip Demo Fleet", "Yes" if args.skip_fleet else "No")

    console.print(config_table)
    console.print()


def print_stats(stats: dict):
    """Print seeding statistics using Rich Table."""
    print_header("SEEDING STATISTICS", "bold green")

    stats_table = Table(show_header=True, box=None, padding=(0, 2))
    stats_table.add_column("Category", style="bold cyan", width=30)
    stats_table.add_column("Count", justify="right", style="bold green")

    stats_table.add_row("Macro Fuel Types", str(stats["macro_fuel_types"]))
    stats_table.add_row("Fuel Type Mappings", str(stats["fuel_type_mappings"]))
    stats_table.add_row("GWP Values", str(stats["gwp_configs"]))
    stats_table.add_row("Emission Factors", str(stats["emission_factors"]))
    stats_table.add_row("Vehicles", str(stats["vehicles"]))
    stats_table.add_row("Fuel Records", str(stats["fuel_records"]))

    console.print(stats_table)
    console.print()

    # Show errors if any
    if stats.get("errors"):
        console.print(
            Panel(
                f"[yellow]{len(stats['errors'])} rows skipped during seeding[/yellow]",
                border_style="yellow",
            )
        )
        for i, error in enumerate(stats["errors"][:5], 1):
            console.print(f"  {i}. [dim]{error}[/dim]")
        if len(stats["errors"]) > 5:
            console.print(f"  [dim]... and {len(stats['errors']) - 5} more[/dim]")

    console.print()


async def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(
        description="Seed the database with the emission catalog from CSV files"
    )
    parser.add_argument(
        "--environment",
        choices=sorted(CONFIG_FILES),
        default="development",
        help="Configuration to use (default: development)",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Apply Alembic migrations before seeding",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing data before seeding",
    )
    parser.add_argument(
        "--skip-fleet",
        action="store_true",
        help="Only seed the emission catalog, not the demo vehicles",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=str(DEFAULT_DATA_DIR),
        help="Directory containing CSV files (default: fleet_emissions/test/test_data)",
    )

    args = parser.parse_args()

    print_header("DATABASE SEEDING", "bold cyan")
    print_config(args)

    try:
        config = get_config(CONFIG_FILES[args.environment])

        if args.migrate:
            with console.status("[bold cyan]Applying migrations...", spinner="dots"):
                await apply_db_migration(config)

        async_db_url = get_db_url(config)
        Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
        logger.info("Database initialized")

        with console.status("[bold cyan]Seeding database...", spinner="dots"):
            async with DatabaseSeeder(data_dir=args.data_dir) as seeder:
                stats = await seeder.seed_all(
                    clear_existing=args.clear,
                    skip_fleet=args.skip_fleet,
                )

        print_stats(stats)

        console.print(
            Panel(
                Text("SEEDING COMPLETED SUCCESSFULLY", justify="center"),
                border_style="bold green",
                style="bold green",
            )
        )

    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)

        console.print()
        console.print(
            Panel(
                f"[bold red]SEEDING FAILED[/bold red]\n\n[red]{e!s}[/red]",
                border_style="bold red",
            )
        )
        console.print()
        sys.exit(1)

    finally:
        await Database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
