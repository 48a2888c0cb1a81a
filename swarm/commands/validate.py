"""
swarm validate - Check a story file against the story schema.
"""

from pathlib import Path

from swarm.commands import read_and_parse
from swarm.lib.result import CommandError, command, ok
from swarm.lib.validate import validate_story


@command
def run_validate(story_path: Path) -> dict:
    """Validate a story; report id, status and AC/task counts."""
    header = read_and_parse(story_path).header

    result = validate_story(header)
    if not result.valid:
        raise CommandError("Invalid story", result.details())

    acs = header.get("acceptance_criteria")
    tasks = header.get("tasks")
    return ok(
        id=header["id"],
        status=header["status"],
        ac_count=len(acs) if isinstance(acs, list) else 0,
        task_count=len(tasks) if isinstance(tasks, list) else 0,
    )
