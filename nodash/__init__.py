"""
Application Modules.

- backend/: Notes API service, storage bindings, configuration
- cli/: Command-line client for the notes API (Typer + Rich)
"""
