"""
swarm transition - Check (and optionally apply) a story status change.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from swarm.commands import read_and_parse
from swarm.lib.clock import utc_now
from swarm.lib.result import CommandError, command, ok
from swarm.lib.validate import validate_story
from swarm.lifecycle.fsm import StoryFSM
from swarm.lifecycle.guards import can_transition, validate_transition
from swarm.lifecycle.states import StoryStatus, parse_status
from swarm.pm.models import Story
from swarm.pm.stories import save_story

logger = logging.getLogger(__name__)


@command
def run_transition(
    story_path: Path,
    target: str,
    apply: bool = False,
    clock: Callable[[], datetime] = utc_now,
) -> dict:
    """Check a transition from the story's status to target.

    With apply=True the story is moved through StoryFSM and written back.
    """
    record = read_and_parse(story_path)

    validation = validate_story(record.header)
    if not validation.valid:
        raise CommandError("Invalid story structure", validation.details())

    story = Story.from_header(record.header)
    from_state = story.status

    to_state = parse_status(target)
    if to_state is None:
        valid = ", ".join(s.value for s in StoryStatus)
        raise CommandError(f"Unknown status '{target}'", [f"Valid statuses: {valid}"])

    error = f"Cannot transition from '{from_state.value}' to '{to_state.value}'"

    structural = can_transition(from_state, to_state)
    if not structural.allowed:
        raise CommandError(error, [structural.reason or "Invalid transition"])

    if not apply:
        result = validate_transition(story, to_state)
        if not result.allowed:
            raise CommandError(error, [result.reason or "Preconditions not met"])
        return ok(**{"from": from_state.value, "to": to_state.value})

    fsm = StoryFSM(story, clock=clock)
    result = fsm.advance(to_state)
    if not result.allowed:
        raise CommandError(error, [result.reason or "Preconditions not met"])

    save_story(story_path, story, record.body)
    logger.info(f"[CMD] {story.id}: wrote status {story.status.value} to {story_path}")
    return ok(**{"from": from_state.value, "to": to_state.value, "applied": True, "updated": story.updated})
