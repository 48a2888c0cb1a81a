"""
swarm index - Summarize every story in the backlog and archive.
"""

import logging
from dataclasses import asdict
from pathlib import Path

from swarm.lib import constants
from swarm.lib.config import ConfigError, load_project_config
from swarm.lib.result import CommandError, command, ok
from swarm.lib.validate import validate_story
from swarm.pm.models import Story, ac_summary, task_summary
from swarm.pm.stories import read_record

logger = logging.getLogger(__name__)


def _index_dir(directory: Path, source: str) -> list[dict]:
    entries = []
    if not directory.is_dir():
        return entries

    for f in sorted(directory.glob("*.md")):
        record = read_record(f)
        if record is None:
            logger.warning(f"Skipping {f.name}: no valid frontmatter")
            continue
        result = validate_story(record.header)
        if not result.valid:
            logger.warning(f"Skipping {f.name}: {'; '.join(result.details())}")
            continue

        story = Story.from_header(record.header)
        entries.append({
            "id": story.id,
            "title": story.title,
            "status": story.status.value,
            "priority": story.priority.value,
            "complexity": story.complexity.value,
            "created": story.created,
            "updated": story.updated,
            "tags": story.tags,
            "source": source,
            "ac_summary": asdict(ac_summary(story)),
            "task_summary": asdict(task_summary(story)),
        })
    return entries


@command
def run_index(base_dir: Path) -> dict:
    """Index valid stories from .swarm/backlog and .swarm/archive."""
    project = ""
    config_path = base_dir / constants.CONFIG_FILE
    if config_path.exists():
        try:
            project = load_project_config(config_path).project
        except ConfigError as e:
            raise CommandError(str(e), e.details) from None

    stories = (
        _index_dir(base_dir / constants.BACKLOG_DIR, "backlog")
        + _index_dir(base_dir / constants.ARCHIVE_DIR, "archive")
    )
    return ok(project=project, stories=stories, count=len(stories))
