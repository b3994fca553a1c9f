"""Setup and maintenance commands: init, migrate and backup."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from finwatch.commands.shell import console, fail
from finwatch.config import create_default_config, get_config_path
from finwatch.logging import get_logger
from finwatch.store.repositories import SqliteCategoryStore
from finwatch.store.schema import get_db_path, init_database
from finwatch.store.seed import seed_default_categories

logger = get_logger(__name__)


def snapshot_database(source: Path, target: Path) -> None:
    """Copy a live database with SQLite's online backup API.

    Raises:
        sqlite3.Error: If either database cannot be opened or copied.
    """
    src = sqlite3.connect(source)
    dst = sqlite3.connect(target)
    try:
        with dst:
            src.backup(dst)
    finally:
        dst.close()
        src.close()


def backup_command(output_dir: str | None = None) -> None:
    """Write timestamped copies of the database and config file."""
    db_path = get_db_path()
    config_path = get_config_path()

    missing = [label for label, path in (("Database", db_path), ("Config", config_path)) if not path.exists()]
    if missing:
        fail(f"{' and '.join(missing)} not found. Run 'finwatch init' first.")

    target_dir = Path(output_dir).expanduser() if output_dir else db_path.parent / "backups"
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_copy = target_dir / f"finwatch_{stamp}.db"
    config_copy = target_dir / f"config_{stamp}.toml"

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        snapshot_database(db_path, db_copy)
        shutil.copy2(config_path, config_copy)
    except sqlite3.Error as e:
        fail(f"Database backup failed: {e}")
    except OSError as e:
        fail(f"Backup failed: {e}")

    logger.info("backup_written", directory=str(target_dir))
    console.print(f"[green]✓[/green] Database  → {db_copy}")
    console.print(f"[green]✓[/green] Config    → {config_copy}")


def seed_categories(db_path: Path) -> None:
    """Seed the shared default categories unless they are already there."""
    inserted = seed_default_categories(SqliteCategoryStore(db_path))
    if inserted:
        console.print(f"[green]✓[/green] Seeded {inserted} default categories")
    else:
        console.print("[dim]Default categories already present[/dim]")


def run_migration(db_path: Path) -> None:
    """Apply the current schema to an existing database, keeping its data."""
    console.print(f"[cyan]Updating schema in {db_path}[/cyan]")
    init_database(db_path)
    seed_categories(db_path)
    console.print("[green]✓[/green] Schema up to date")


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Create the database, seed categories and write a default config."""
    init_database(db_path)
    console.print(f"[green]✓[/green] Database ready at {db_path}")
    seed_categories(db_path)

    create_default_config(config_path)
    console.print(f"[green]✓[/green] Config written to {config_path} (mode 600)")
    console.print("\n[bold green]finwatch is ready.[/bold green] Next: 'finwatch budget create <category-id> <limit>'")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize finwatch, or update an existing database with --migrate."""
    db_path = get_db_path()
    config_path = get_config_path()

    try:
        if migrate:
            if not db_path.exists():
                fail(f"No database to migrate at {db_path}")
            run_migration(db_path)
            return

        existing = [path for path in (db_path, config_path) if path.exists()]
        if existing and not force:
            console.print("[red]Already initialized:[/red]", style="bold")
            for path in existing:
                console.print(f"  {path}")
            console.print("\n[yellow]Use 'finwatch init --force' to rewrite the config and re-run setup,[/yellow]")
            console.print("[yellow]or 'finwatch init --migrate' to update the database schema only.[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")
