"""Admin commands for init, backup, sign-in and planner settings."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

import typer

from duet.commands.common import console, fail, open_planner
from duet.config import create_default_config, get_config_path, get_remote_settings, load_config_or_default
from duet.errors import DuetError
from duet.session import clear_session, get_session_path, save_session, sign_in
from duet.store.queries import list_collections
from duet.store.schema import get_db_path, get_xdg_data_home, init_database


def run_migration(db_path: Path) -> None:
    """Run database migrations on existing database."""
    console.print(f"[cyan]Running migrations on {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Migrations complete")
    console.print("[dim]Database schema is up to date[/dim]")


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize duet database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if migrate:
            if not db_exists:
                console.print("[red]No database found to migrate[/red]", style="bold")
                fail(f"Expected location: {db_path}")
            run_migration(db_path)
            return

        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'duet init --force' to overwrite[/yellow]")
            console.print("[yellow]Or 'duet init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")


def backup_command(output_dir: str | None = None) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        fail("Database not found. Run 'duet init' first.")

    if not config_path.exists():
        fail("Config not found. Run 'duet init' first.")

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = get_xdg_data_home() / "duet" / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"duet_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        collections = list_collections(db_path)

        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")
        for collection in collections:
            updated = collection["updated_at"] or "never"
            console.print(f"  [dim]{collection['name']} (updated {updated})[/dim]")

        shutil.copy2(config_path, config_backup)
        console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Backup failed: {e}")


def login_command(email: str | None = None) -> None:
    """Sign in to the remote ledger and store the session."""
    url, api_key, timeout = get_remote_settings(load_config_or_default())
    if not url or not api_key:
        fail("Set [remote] url and api_key in the config file before signing in.")

    if not email:
        email = typer.prompt("Email")
    password = typer.prompt("Password", hide_input=True)

    try:
        session = sign_in(url, api_key, email, password, timeout)
        save_session(session)
    except DuetError as e:
        fail(str(e))
    except OSError as e:
        fail(f"Could not save session: {e}")

    console.print(f"[green]✓[/green] Signed in as {email.strip()}")
    console.print(f"[dim]Session: {get_session_path()}[/dim]")


def logout_command() -> None:
    if clear_session():
        console.print("[green]✓[/green] Signed out")
    else:
        console.print("[yellow]No stored session[/yellow]")


def settings_command(
    name: str | None = None,
    spouse_a: str | None = None,
    spouse_b: str | None = None,
) -> None:
    """Show or change the planner and partner names."""
    planner = open_planner(refresh=False)

    if name or spouse_a or spouse_b:
        try:
            planner.update_settings(name, spouse_a, spouse_b)
        except sqlite3.Error as e:
            fail(f"Database error: {e}")
        console.print("[green]✓[/green] Settings saved")

    settings = planner.state.settings
    console.print(f"[bold]Planner:[/bold]   {settings.planner_name}")
    console.print(f"[bold]Partner A:[/bold] {settings.spouse_a}")
    console.print(f"[bold]Partner B:[/bold] {settings.spouse_b}")
