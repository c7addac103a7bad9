import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import typer

from pawshop.config import settings
from pawshop.logging import configure_logging, logger
from pawshop.ui.api_client import APIError, PawshopClient
from pawshop.ui.formatting import format_count, format_currency

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override PAWSHOP_LOG_LEVEL"),
):
    """
    Dog adoption storefront CLI.
    """
    configure_logging(log_level)


@app.command(name="doctor")
def doctor():
    """
    Check configuration and catalog service reachability.
    """
    from pawshop.ui.validation import validate_backend_connection, validate_settings

    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Pawshop Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    passed += 1

    # ── Check 2: Configuration ───────────────────────────────────────────────
    print("\n[Configuration]")
    print(f"  PAWSHOP_API_BASE_URL:          {settings.API_BASE_URL}")
    print(f"  PAWSHOP_HTTP_TIMEOUT_SECONDS:  {settings.HTTP_TIMEOUT_SECONDS}")
    print(f"  PAWSHOP_PAGE_SIZE:             {settings.PAGE_SIZE or 'unset (server-driven)'}")
    settings_errors = validate_settings()
    if settings_errors:
        failures.extend(settings_errors)
        print("  Base URL:                      ❌ Invalid")
    else:
        print("  Base URL:                      ✅ Valid")
        passed += 1

    # ── Check 3: Backend ─────────────────────────────────────────────────────
    print("\n[Backend]")
    backend_errors = validate_backend_connection()
    if backend_errors:
        failures.extend(backend_errors)
        print("  GET /dogs                     ❌ Unreachable")
    else:
        print("  GET /dogs                     ✅ Reachable")
        passed += 1

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


@app.command(name="dogs")
def dogs(
    page: int = typer.Option(1, min=1, help="1-based page number"),
    breed: Optional[List[str]] = typer.Option(None, "--breed", "-b", help="Repeat to filter several breeds"),
    min_price: Optional[float] = typer.Option(None, min=0),
    max_price: Optional[float] = typer.Option(None, min=0),
):
    """List one page of the public catalog."""
    if min_price is not None and max_price is not None and min_price > max_price:
        print("❌ --min-price cannot exceed --max-price")
        raise typer.Exit(code=2)

    try:
        with PawshopClient() as client:
            result = client.list_dogs(
                page=page, breeds=breed or [], min_price=min_price, max_price=max_price,
            )
    except APIError as e:
        logger.error(f"Catalog fetch failed: {e}")
        print(f"❌ Error loading dogs: {e.detail}")
        raise typer.Exit(code=1)

    if not result.dogs:
        print(f"No dogs found on page {page}.")
        return

    print(f"Page {page} — {len(result.dogs)} dog(s):")
    for dog in result.dogs:
        print(f"  [{dog.id}] {dog.name:<20} {dog.breed:<24} {format_currency(dog.price):>10}")
    if result.has_more is False:
        print("(last page)")


@app.command(name="stats")
def stats():
    """Print the admin dashboard statistics."""
    try:
        with PawshopClient() as client:
            dashboard = client.get_dashboard()
    except APIError as e:
        logger.error(f"Dashboard fetch failed: {e}")
        print(f"❌ Failed to fetch dashboard data: {e.detail}")
        raise typer.Exit(code=1)

    s = dashboard.statistics
    if s is None:
        print("No statistics available.")
        return

    print(f"Total Dogs:     {format_count(s.total_dogs)}")
    print(f"Unique Breeds:  {format_count(s.unique_breeds)}")
    print(f"Total Value:    {format_currency(s.total_inventory_value)}")
    print(f"Average Price:  {format_currency(s.average_price)}")
    if s.breed_distribution:
        print("\nBy breed:")
        for name, count in sorted(s.breed_distribution.items(), key=lambda kv: (-kv[1], kv[0])):
            print(f"  {name:<24} {count}")


@app.command(name="ui")
def ui(port: int = typer.Option(8501, help="Streamlit server port")):
    """Launch the Streamlit storefront."""
    script = Path(__file__).parent / "ui" / "app.py"
    logger.info(f"Starting Streamlit on port {port}")
    raise typer.Exit(
        code=subprocess.call(
            [sys.executable, "-m", "streamlit", "run", str(script), "--server.port", str(port)]
        )
    )


if __name__ == "__main__":
    app()
