#!/usr/bin/env python3
"""
Database migration runner for the users database.

Connects to PostgreSQL using USERHUB_DATABASE_URL and applies the SQL
files in migrations/ in name order, recording each one with a checksum.

Usage:
    python run_migrations.py             # Run pending migrations
    python run_migrations.py --status    # Show migration status
    python run_migrations.py --dry-run   # Show what would run
"""

import argparse
import hashlib
import sys
from pathlib import Path

import psycopg2
from psycopg2 import sql
from psycopg2.extensions import connection as PgConnection
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


def get_db_connection() -> PgConnection:
    """Open a single connection for the migration run."""
    settings = get_settings()
    try:
        return psycopg2.connect(settings.database_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        console.print("Check USERHUB_DATABASE_URL in your environment or .env file.")
        sys.exit(1)


def ensure_migrations_table(conn: PgConnection) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def checksum_of(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def get_applied_migrations(conn: PgConnection) -> dict[str, dict]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {
            row[0]: {"checksum": row[1], "applied_at": row[2]}
            for row in cur.fetchall()
        }


def get_pending_migrations(conn: PgConnection) -> list[tuple[str, Path, str]]:
    """Migration files not yet applied. Warns about applied files that changed."""
    applied = get_applied_migrations(conn)
    pending = []

    for sql_file in sorted(MIGRATIONS_DIR.glob("*.sql")):
        checksum = checksum_of(sql_file)
        if sql_file.name not in applied:
            pending.append((sql_file.name, sql_file, checksum))
        elif applied[sql_file.name]["checksum"] != checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {sql_file.name} changed after it was applied"
            )

    return pending


def run_migration(
    conn: PgConnection, name: str, sql_file: Path, checksum: str, dry_run: bool = False
) -> None:
    if dry_run:
        console.print(f"[cyan]Would run:[/cyan] {name}")
        return

    console.print(f"[blue]Running:[/blue] {name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(sql_file.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (name, checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {name} applied")


def show_status(conn: PgConnection) -> None:
    applied = get_applied_migrations(conn)
    pending = get_pending_migrations(conn)

    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, info in applied.items():
        applied_at = info["applied_at"]
        table.add_row(
            name,
            "[green]Applied[/green]",
            applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else "",
            info["checksum"],
        )
    for name, _, checksum in pending:
        table.add_row(name, "[yellow]Pending[/yellow]", "", checksum)

    console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run database migrations for Userhub")
    parser.add_argument(
        "--status", action="store_true", help="Show migration status without running anything"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Show what would run without executing it"
    )
    args = parser.parse_args()

    console.print("[bold]Userhub Database Migrations[/bold]")

    conn = get_db_connection()
    try:
        ensure_migrations_table(conn)
        if args.status:
            show_status(conn)
            return

        pending = get_pending_migrations(conn)
        if not pending:
            console.print("[green]All migrations are up to date![/green]")
            return

        for name, sql_file, checksum in pending:
            run_migration(conn, name, sql_file, checksum, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
