from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, NoReturn, Optional

import httpx
import typer

from personal_expense.cli.client import LedgerApi, LedgerApiError

app = typer.Typer(help="Command line client for the personal expense ledger API.", no_args_is_help=True)

_TYPES = ("income", "expense")


class _State:
    base_url: str = "http://localhost:3000"
    emit_curl: bool = False


state = _State()


def _api() -> LedgerApi:
    return LedgerApi(base_url=state.base_url, emit_curl=state.emit_curl)


def _fail(exc: Exception) -> NoReturn:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _format_row(txn: dict[str, Any]) -> str:
    description = txn.get("description") or ""
    return (
        f"{txn['id']:>5}  {txn['date']}  {txn['type']:<7}  "
        f"cat={txn['category']!s:<4} {txn['amount']:>10}  {description}"
    )


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def _body(txn_type: str, category: int, amount: int, on: date, description: Optional[str]) -> dict[str, Any]:
    txn_type = txn_type.strip().lower()
    if txn_type not in _TYPES:
        raise typer.BadParameter("type must be 'income' or 'expense'")
    return {
        "type": txn_type,
        "category": category,
        "amount": amount,
        "date": on.isoformat(),
        "description": description,
    }


@app.callback()
def main(
    base_url: str = typer.Option("http://localhost:3000", "--base-url", help="Backend API base URL"),
    curl: bool = typer.Option(False, "--curl", help="Print equivalent curl commands"),
) -> None:
    state.base_url = base_url
    state.emit_curl = curl


@app.command("add")
def add(
    txn_type: str = typer.Argument(..., metavar="TYPE", help="income | expense"),
    category: int = typer.Argument(..., help="Category id"),
    amount: int = typer.Argument(...),
    on: Optional[str] = typer.Option(None, "--date", help="YYYY-MM-DD (defaults to today)"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    """Record a new transaction."""
    day = _parse_date(on) if on else date.today()
    body = _body(txn_type, category, amount, day, description)
    with _api() as api:
        try:
            txn = api.create_transaction(body)
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    typer.echo(f"Created transaction {txn['id']}")


@app.command("list")
def list_() -> None:
    """List every transaction."""
    with _api() as api:
        try:
            rows = api.list_transactions()
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    if not rows:
        typer.echo("No transactions.")
        return
    for txn in rows:
        typer.echo(_format_row(txn))


@app.command("show")
def show(txn_id: int = typer.Argument(...)) -> None:
    """Show one transaction."""
    with _api() as api:
        try:
            txn = api.get_transaction(txn_id)
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    typer.echo(_format_row(txn))


@app.command("update")
def update(
    txn_id: int = typer.Argument(...),
    txn_type: str = typer.Argument(..., metavar="TYPE", help="income | expense"),
    category: int = typer.Argument(..., help="Category id"),
    amount: int = typer.Argument(...),
    on: str = typer.Option(..., "--date", help="YYYY-MM-DD"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    """Replace every field of a transaction."""
    body = _body(txn_type, category, amount, _parse_date(on), description)
    with _api() as api:
        try:
            api.update_transaction(txn_id, body)
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    typer.echo(f"Updated transaction {txn_id}")


@app.command("delete")
def delete(txn_id: int = typer.Argument(...)) -> None:
    """Delete a transaction."""
    with _api() as api:
        try:
            deleted = api.delete_transaction(txn_id)
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    typer.echo(f"Deleted transaction {deleted}")


@app.command("summary")
def summary() -> None:
    """Print total income, total expense and balance."""
    with _api() as api:
        try:
            totals = api.summary()
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    typer.echo(f"Income:  {totals['total_income']}")
    typer.echo(f"Expense: {totals['total_expense']}")
    typer.echo(f"Balance: {totals['balance']}")


@app.command("categories")
def categories() -> None:
    """List the predefined categories."""
    with _api() as api:
        try:
            rows = api.list_categories()
        except (LedgerApiError, httpx.HTTPError) as exc:
            _fail(exc)
    for cat in rows:
        typer.echo(f"{cat['id']:>3}  {cat['type']:<7}  {cat['name']}")


@app.command("init-db")
def init_db(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Overrides LEDGER_DATABASE_URL"),
) -> None:
    """Create the tables and seed categories directly, without the API."""
    from personal_expense.imports.init_categories import init_database

    if not asyncio.run(init_database(database_url)):
        typer.secho("Database initialization failed; see log output.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo("Database ready.")


if __name__ == "__main__":
    app()
