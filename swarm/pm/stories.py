"""
Record file operations for PM module.

Records are markdown files with a YAML header, stored in:
  .swarm/backlog/PROJ-001.md      stories
  .swarm/retros/PROJ-001.md       retrospectives
  .swarm/knowledge/PROJ-001-1.md  knowledge items

This is the only layer that touches the filesystem; the codec,
validator, FSM and extractor all work on in-memory values.
"""

import logging
from pathlib import Path
from typing import Optional

from swarm.knowledge.models import KnowledgeItem
from swarm.lib import frontmatter
from swarm.lib.frontmatter import Record
from swarm.pm.models import Story

logger = logging.getLogger(__name__)


def read_record(path: Path) -> Optional[Record]:
    """Read and decode a record file.

    Returns None if the file has no valid header.
    """
    return frontmatter.parse(path.read_text())


def write_record(path: Path, header: dict, body: str) -> None:
    """Encode and write a record file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(frontmatter.serialize(header, body))


def save_story(path: Path, story: Story, body: str) -> None:
    """Write a story back to disk, body untouched."""
    write_record(path, story.to_header(), body)


def list_records(directory: Path, status: str = "") -> list[dict]:
    """List records in a directory, optionally filtered by status.

    Files without a header are skipped. The id falls back to the file stem.
    """
    items = []
    for f in sorted(directory.glob("*.md")):
        record = read_record(f)
        if record is None:
            logger.warning(f"Skipping {f.name}: no valid frontmatter")
            continue

        header = record.header
        record_status = header.get("status") if isinstance(header.get("status"), str) else ""
        if status and record_status != status:
            continue

        items.append({
            "id": header["id"] if isinstance(header.get("id"), str) else f.stem,
            "title": header["title"] if isinstance(header.get("title"), str) else "",
            "status": record_status,
            "file": f.name,
        })

    return items


def scan_knowledge_ids(knowledge_dir: Path) -> list[str]:
    """Collect the IDs of every persisted knowledge item.

    The result is a snapshot: extraction runs that share one snapshot
    will mint colliding IDs, so scan again before each run.
    """
    if not knowledge_dir.exists():
        return []

    ids = []
    for f in sorted(knowledge_dir.glob("*.md")):
        record = read_record(f)
        if record and isinstance(record.header.get("id"), str):
            ids.append(record.header["id"])
        else:
            logger.warning(f"Knowledge file without id ignored: {f.name}")
    return ids


def write_knowledge_items(
    base_dir: Path,
    knowledge_dir: Path,
    story_id: str,
    items: list[KnowledgeItem],
) -> list[str]:
    """Write items as {story_id}-{n}.md, n counting from 1.

    Returns the written paths relative to base_dir.
    """
    knowledge_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for n, item in enumerate(items, 1):
        path = knowledge_dir / f"{story_id}-{n}.md"
        write_record(path, item.to_header(), item.render_body())
        written.append(_relative(path, base_dir))
    return written


def _relative(path: Path, base_dir: Path) -> str:
    try:
        return path.relative_to(base_dir).as_posix()
    except ValueError:
        return path.as_posix()
