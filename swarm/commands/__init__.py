"""
Command implementations behind the `swarm` CLI.

Each command takes plain paths/values and returns a tagged result
mapping (see swarm.lib.result); none of them print or exit.
"""

from pathlib import Path

from swarm.lib.frontmatter import Record
from swarm.lib.result import CommandError
from swarm.pm.stories import read_record


def read_and_parse(path: Path) -> Record:
    """Read a record file or raise CommandError."""
    if not path.exists():
        raise CommandError(f"File not found: {path}")

    record = read_record(path)
    if record is None:
        raise CommandError("Failed to parse frontmatter", ["File does not contain valid YAML frontmatter"])
    return record
