#!/usr/bin/env python3
"""
CLI script to create the database and apply Alembic migrations.

Usage:
    ENVIRONMENT=production python scripts/migrate_database.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import get_config, get_config_file_for_environment
from app.database.base import apply_db_migration
from rich.console import Console
from rich.panel import Panel

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


async def main():
    config_file = get_config_file_for_environment()
    console.print(Panel(f"[bold cyan]Migrating database ({config_file})[/bold cyan]"))
    try:
        await apply_db_migration(get_config(config_file))
    except Exception as e:
        logger.error(f"Migration failed: {e}", exc_info=True)
        console.print(Panel(f"[bold red]MIGRATION FAILED[/bold red]\n\n[red]{e!s}[/red]", border_style="bold red"))
        sys.exit(1)
    console.print(Panel("[bold green]Migration completed[/bold green]", border_style="bold green"))


if __name__ == "__main__":
    asyncio.run(main())
