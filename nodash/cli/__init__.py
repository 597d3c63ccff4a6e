"""
CLI Client Module.

Command-line client built with Typer for working with notes through
the backend API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the backend
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID header for log routing

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes search "groceries"
"""
