"""
swarm list - List records in a directory.
"""

from pathlib import Path

from swarm.lib.result import CommandError, command, ok
from swarm.pm.stories import list_records


@command
def run_list(directory: Path, status: str = "") -> dict:
    """List id/title/status/file for every record, optionally filtered by status."""
    if not directory.is_dir():
        raise CommandError(f"Directory not found: {directory}")

    items = list_records(directory, status)
    return ok(items=items, count=len(items))
