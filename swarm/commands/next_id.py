"""
swarm next-id - Hand out the next story ID from the project config.
"""

from pathlib import Path

from swarm.commands import read_and_parse
from swarm.lib.config import ConfigError, format_story_id, project_config_from_header
from swarm.lib.result import CommandError, command, ok
from swarm.pm.stories import write_record


@command
def run_next_id(config_path: Path) -> dict:
    """Increment the config counter, write it back, return the new ID."""
    record = read_and_parse(config_path)

    try:
        config = project_config_from_header(record.header)
    except ConfigError as e:
        raise CommandError(str(e), e.details) from None

    counter = config.counter + 1
    header = dict(record.header)
    header["counter"] = counter
    write_record(config_path, header, record.body)

    return ok(id=format_story_id(config.prefix, counter), counter=counter)
