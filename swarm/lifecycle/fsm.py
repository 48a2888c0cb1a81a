"""Story state machine using the transitions library.

The workflow graph is declared once in TRANSITIONS. VALID_TRANSITIONS
(state -> legal targets) and TRIGGER_FOR ((source, dest) -> trigger) are
derived from it.

StoryFSM drives a Story in place: advance() runs the guard checks from
guards.py and, only when they pass, fires the trigger. The after-change
callback updates the story's status and timestamps.

Usage:
    from swarm.lifecycle.fsm import StoryFSM

    fsm = StoryFSM(story)
    result = fsm.advance(StoryStatus.PLANNED)
    if not result.allowed:
        print(result.reason)
"""

import logging
from datetime import datetime
from typing import Callable

from transitions import Machine

from swarm.lib.clock import utc_now
from swarm.lifecycle.states import StoryStatus
from swarm.pm.models import Story

logger = logging.getLogger(__name__)


STATES = [s.value for s in StoryStatus]

# Grouped by source; within a group, order is the order targets are reported in
TRANSITIONS = [
    {"trigger": "ideate", "source": "draft", "dest": "ideating"},

    {"trigger": "plan", "source": "ideating", "dest": "planned"},
    {"trigger": "await_input", "source": "ideating", "dest": "awaiting_input"},

    {"trigger": "execute", "source": "planned", "dest": "executing"},
    {"trigger": "await_input", "source": "planned", "dest": "awaiting_input"},

    {"trigger": "verify", "source": "executing", "dest": "verifying"},
    {"trigger": "complete", "source": "executing", "dest": "done"},

    {"trigger": "complete", "source": "verifying", "dest": "done"},
    {"trigger": "execute", "source": "verifying", "dest": "executing"},  # Verification failed, rework

    {"trigger": "archive", "source": "done", "dest": "archived"},

    # archived is terminal

    {"trigger": "ideate", "source": "awaiting_input", "dest": "ideating"},
    {"trigger": "plan", "source": "awaiting_input", "dest": "planned"},
]


def _build_valid_transitions() -> dict[StoryStatus, list[StoryStatus]]:
    """Every state gets a row, empty for terminal states."""
    table: dict[StoryStatus, list[StoryStatus]] = {state: [] for state in StoryStatus}
    for t in TRANSITIONS:
        table[StoryStatus(t["source"])].append(StoryStatus(t["dest"]))
    return table


def _build_trigger_lookup() -> dict[tuple[str, str], str]:
    """Build lookup from (source, dest) -> trigger name."""
    return {(t["source"], t["dest"]): t["trigger"] for t in TRANSITIONS}


VALID_TRANSITIONS = _build_valid_transitions()
TRIGGER_FOR = _build_trigger_lookup()


class StoryFSM:
    """State machine for one story's status.

    Wraps the transitions library with story-specific logic:
    - Starts from the story's current status
    - Refuses triggers whose precondition guard fails
    - Writes status/updated/execution timestamps back onto the story
    """

    def __init__(
        self,
        story: Story,
        clock: Callable[[], datetime] = utc_now,
        on_transition: Callable[[str, str, str], None] | None = None,
    ):
        """Initialize FSM for a story.

        Args:
            story: Story to drive; mutated in place on every transition
            clock: Source of the timestamps written on transition
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        self.story = story
        self.clock = clock
        self.on_transition = on_transition

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=story.status.value,
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",
        )

    def advance(self, to_state: StoryStatus):
        """Move the story to to_state if the graph and its guard allow it.

        Returns the TransitionResult from validate_transition(); the story
        is left untouched when it is not allowed.
        """
        from swarm.lifecycle.guards import validate_transition

        result = validate_transition(self.story, to_state)
        if not result.allowed:
            logger.info(f"[FSM] {self.story.id}: {self.story.status.value} -> {to_state.value} refused: {result.reason}")
            return result

        # The story may have been edited since the machine was built
        from_state = self.story.status.value
        if self.state != from_state:
            logger.debug(f"[FSM] {self.story.id}: resyncing machine {self.state} -> {from_state}")
            self.machine.set_state(from_state)

        trigger = TRIGGER_FOR[(from_state, to_state.value)]
        getattr(self, trigger)()
        return result

    def on_state_change(self, event) -> None:
        """Callback after any state transition.

        Copies the new state and timestamps onto the story.
        """
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name
        now = self.clock().isoformat()

        self.story.status = StoryStatus(to_state)
        self.story.updated = now
        if self.story.status is StoryStatus.EXECUTING and not self.story.execution.started_at:
            self.story.execution.started_at = now
        if self.story.status is StoryStatus.DONE:
            self.story.execution.completed_at = now

        logger.info(f"[FSM] {self.story.id}: {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    def can(self, trigger: str) -> bool:
        """Check if a trigger exists for the current state (guards not applied)."""
        return trigger in self.machine.get_triggers(self.state)

    def get_available_triggers(self) -> list[str]:
        """Get list of triggers available in current state."""
        return self.machine.get_triggers(self.state)
