"""Transition checks for the story lifecycle.

Two layers:
- can_transition(): is the edge in the workflow graph at all?
- validate_transition(): does this particular story meet the
  Definition-of-Ready/Done precondition for the target state?

Both are pure and return a TransitionResult instead of raising.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from swarm.lifecycle.fsm import VALID_TRANSITIONS
from swarm.lifecycle.states import StoryStatus
from swarm.pm.models import ACStatus, Story, TaskStatus


@dataclass(frozen=True)
class TransitionResult:
    allowed: bool
    reason: Optional[str] = None


ALLOWED = TransitionResult(allowed=True)


def can_transition(from_state: StoryStatus, to_state: StoryStatus) -> TransitionResult:
    """Check if a status transition is structurally valid."""
    targets = VALID_TRANSITIONS[from_state]
    if to_state not in targets:
        valid = ", ".join(t.value for t in targets) or "none"
        return TransitionResult(
            allowed=False,
            reason=f"Cannot transition from '{from_state.value}' to '{to_state.value}'. Valid targets: {valid}",
        )
    return ALLOWED


def _check_planned(story: Story) -> TransitionResult:
    # DoR: acceptance criteria and a WHY
    if not story.acceptance_criteria:
        return TransitionResult(False, "Cannot plan: no acceptance criteria defined")
    if not story.why.problem:
        return TransitionResult(False, "Cannot plan: problem statement is empty")
    return ALLOWED


def _check_executing(story: Story) -> TransitionResult:
    if not story.tasks:
        return TransitionResult(False, "Cannot execute: no tasks defined")
    return ALLOWED


def _check_verifying(story: Story) -> TransitionResult:
    open_tasks = [t for t in story.tasks if t.status not in (TaskStatus.DONE, TaskStatus.SKIPPED)]
    if open_tasks:
        return TransitionResult(False, f"Cannot verify: {len(open_tasks)} task(s) still in progress")
    return ALLOWED


def _check_done(story: Story) -> TransitionResult:
    # DoD: every AC passing
    not_passing = [ac for ac in story.acceptance_criteria if ac.status is not ACStatus.PASSING]
    if not_passing:
        return TransitionResult(False, f"Cannot mark done: {len(not_passing)} AC(s) not passing")
    return ALLOWED


def _check_archived(story: Story) -> TransitionResult:
    if story.status is not StoryStatus.DONE:
        return TransitionResult(False, "Cannot archive: story is not done")
    return ALLOWED


def _no_precondition(story: Story) -> TransitionResult:
    return ALLOWED


# One entry per state; test_lifecycle checks this stays exhaustive
PRECONDITIONS: dict[StoryStatus, Callable[[Story], TransitionResult]] = {
    StoryStatus.DRAFT: _no_precondition,
    StoryStatus.IDEATING: _no_precondition,
    StoryStatus.PLANNED: _check_planned,
    StoryStatus.EXECUTING: _check_executing,
    StoryStatus.VERIFYING: _check_verifying,
    StoryStatus.DONE: _check_done,
    StoryStatus.ARCHIVED: _check_archived,
    StoryStatus.AWAITING_INPUT: _no_precondition,
}


def validate_transition(story: Story, to_state: StoryStatus) -> TransitionResult:
    """Structural check first, then the target state's precondition."""
    structural = can_transition(story.status, to_state)
    if not structural.allowed:
        return structural
    return PRECONDITIONS[to_state](story)
