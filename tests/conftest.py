"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from swarm.lifecycle.states import StoryStatus
from swarm.pm.models import (
    ACStatus,
    AcceptanceCriterion,
    Complexity,
    Priority,
    Story,
    Task,
    TaskStatus,
    Why,
)

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def make_story():
    """Factory for a valid story in the given status."""

    def _make(status=StoryStatus.IDEATING, **overrides):
        fields = dict(
            id="TEST-001",
            title="Test Story",
            status=status,
            priority=Priority.MEDIUM,
            complexity=Complexity.MODERATE,
            created="2026-01-01",
            updated="2026-01-01",
            author="claude",
            acceptance_criteria=[AcceptanceCriterion(id="AC-1", description="Test AC", status=ACStatus.PENDING)],
            tasks=[Task(id="T-1", title="Task 1", agent="backend-dev", status=TaskStatus.DONE)],
            why=Why(problem="Test problem", root_cause="Root cause", impact="Impact"),
        )
        fields.update(overrides)
        return Story(**fields)

    return _make
