#!/usr/bin/env python3
"""CLI tool for running and inspecting a chip tracker server."""
import asyncio
import sys

import httpx

from chiptracker.config import config
from chiptracker.ledger.summary import format_summary_table


async def _get_json(path: str) -> dict:
    async with httpx.AsyncClient(base_url=config.api_url, timeout=10.0) as client:
        response = await client.get(path)
        response.raise_for_status()
        return response.json()


def _error_detail(error: httpx.HTTPStatusError) -> str:
    try:
        return error.response.json().get("detail", str(error))
    except ValueError:
        return str(error)


def _fail(message: str) -> None:
    print(f"Error: {message}")
    sys.exit(1)


async def show_summary(code: str):
    """Print a session's balances and settlements."""
    try:
        data = await _get_json(f"/api/sessions/{code}/summary")
    except httpx.HTTPStatusError as e:
        _fail(_error_detail(e))
    except httpx.HTTPError as e:
        _fail(f"Could not reach {config.api_url}: {e}")

    print(f"\nSession {code.upper()}\n")
    print(format_summary_table(data))


async def show_transactions(code: str):
    """Print a session's transaction log."""
    try:
        data = await _get_json(f"/api/sessions/{code}/transactions")
    except httpx.HTTPStatusError as e:
        _fail(_error_detail(e))
    except httpx.HTTPError as e:
        _fail(f"Could not reach {config.api_url}: {e}")

    transactions = data["transactions"]
    if not transactions:
        print("No transactions recorded.")
        return

    print(f"\n{'#':>4}  {'Type':<9} {'From':<12} {'To':<12} {'Amount':>7}  {'Paid'}")
    print("-" * 56)
    for t in transactions:
        print(
            f"{t['id']:>4}  {t['type']:<9} {t['from']:<12} {t['to']:<12} "
            f"{t['amount']:>7}  {t['paymentType']}"
        )
    print(f"\nTotal: {len(transactions)} transactions")


def serve():
    """Run the API server."""
    import uvicorn
    uvicorn.run("chiptracker.main:app", host=config.host, port=config.port)


def print_usage():
    """Print usage information."""
    print("""
Chip Tracker CLI

Usage:
  python -m chiptracker.cli <command> [args]

Commands:
  serve                   Run the API server
  summary <code>          Show balances and settlements for a session
  transactions <code>     Show the transaction log for a session

The summary and transactions commands query the server at API_URL.

Examples:
  python -m chiptracker.cli serve
  python -m chiptracker.cli summary K3ZQ8A
""")


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    command = sys.argv[1].lower()

    if command == "serve":
        serve()

    elif command in ("summary", "transactions"):
        if len(sys.argv) < 3:
            print("Error: Session code required.")
            print(f"Usage: python -m chiptracker.cli {command} <code>")
            sys.exit(1)
        if command == "summary":
            asyncio.run(show_summary(sys.argv[2]))
        else:
            asyncio.run(show_transactions(sys.argv[2]))

    elif command in ("help", "-h", "--help"):
        print_usage()

    else:
        print(f"Unknown command: {command}")
        print_usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
