"""
swarm extract-knowledge - Mine a retrospective for knowledge items.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from swarm.commands import read_and_parse
from swarm.knowledge.extractor import extract_knowledge
from swarm.knowledge.models import ExtractionContext
from swarm.lib.clock import utc_now
from swarm.lib.config import Settings
from swarm.lib.result import CommandError, command, ok
from swarm.lib.validate import validate_retro
from swarm.pm.stories import scan_knowledge_ids, write_knowledge_items

logger = logging.getLogger(__name__)


@command
def run_extract_knowledge(
    retro_path: Path,
    base_dir: Path,
    settings: Settings,
    story_id: str = "",
    repo: str = "",
    clock: Callable[[], datetime] = utc_now,
) -> dict:
    """Extract knowledge items from a retro and write them under the knowledge dir.

    story_id/repo fall back to the retro header's story_id/repo fields.
    Existing IDs are re-scanned from disk on every call.
    """
    record = read_and_parse(retro_path)
    header = record.header

    check = validate_retro(header)
    if not check.valid:
        logger.warning(f"[CMD] {retro_path.name}: incomplete retro header: {'; '.join(check.details())}")

    if not story_id and isinstance(header.get("story_id"), str):
        story_id = header["story_id"]
    if not repo and isinstance(header.get("repo"), str):
        repo = header["repo"]

    if not story_id:
        raise CommandError("Missing story ID", ["Provide --story-id or include story_id in frontmatter"])

    knowledge_dir = base_dir / settings.knowledge_dir
    ctx = ExtractionContext(
        story_id=story_id,
        repo_name=repo or settings.repo_name or "unknown",
        author=settings.default_author,
        existing_ids=scan_knowledge_ids(knowledge_dir),
        clock=clock,
    )

    items = extract_knowledge(record.body, ctx)
    if not items:
        return ok(items=[], count=0, files_written=[])

    files_written = write_knowledge_items(base_dir, knowledge_dir, story_id, items)
    logger.info(f"[CMD] {story_id}: wrote {len(items)} knowledge item(s)")

    return ok(
        items=[item.summary() for item in items],
        count=len(items),
        files_written=files_written,
    )
