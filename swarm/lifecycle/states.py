"""Story lifecycle states.

Values match the `status` strings written in story headers.

Usage:
    from swarm.lifecycle.states import StoryStatus, parse_status

    parse_status("planned")  # StoryStatus.PLANNED
"""

from enum import Enum


class StoryStatus(Enum):
    """All valid story states."""

    # Initial state
    DRAFT = "draft"

    # Active states
    IDEATING = "ideating"
    PLANNED = "planned"
    EXECUTING = "executing"
    VERIFYING = "verifying"

    # Completion
    DONE = "done"

    # Terminal state
    ARCHIVED = "archived"

    # Blocked on a human answer
    AWAITING_INPUT = "awaiting_input"


INITIAL_STATE = StoryStatus.DRAFT

TERMINAL_STATES = [StoryStatus.ARCHIVED]

ACTIVE_STATES = [
    StoryStatus.IDEATING,
    StoryStatus.PLANNED,
    StoryStatus.EXECUTING,
    StoryStatus.VERIFYING,
]

HAPPY_PATH = [
    StoryStatus.DRAFT,
    StoryStatus.IDEATING,
    StoryStatus.PLANNED,
    StoryStatus.EXECUTING,
    StoryStatus.VERIFYING,
    StoryStatus.DONE,
    StoryStatus.ARCHIVED,
]

STATUS_LABELS = {
    StoryStatus.DRAFT: "Draft",
    StoryStatus.IDEATING: "Ideating",
    StoryStatus.PLANNED: "Planned",
    StoryStatus.EXECUTING: "Executing",
    StoryStatus.VERIFYING: "Verifying",
    StoryStatus.DONE: "Done",
    StoryStatus.ARCHIVED: "Archived",
    StoryStatus.AWAITING_INPUT: "Awaiting Input",
}


def parse_status(status_str: str | None) -> StoryStatus | None:
    """Parse a status string into StoryStatus.

    Returns None if status is unknown.
    """
    if status_str is None:
        return None
    for state in StoryStatus:
        if state.value == status_str:
            return state
    return None
