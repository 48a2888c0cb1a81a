"""
Data models for story and retrospective records.

Headers on disk use snake_case keys; from_header()/to_header() convert
between a validated header mapping and these dataclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from swarm.lifecycle.states import StoryStatus


class Priority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Complexity(Enum):
    TRIVIAL = "trivial"
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    EPIC = "epic"


class ACStatus(Enum):
    PENDING = "pending"
    PASSING = "passing"
    FAILING = "failing"


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    SKIPPED = "skipped"


def _unmodelled(data: dict, known: tuple[str, ...]) -> dict[str, Any]:
    """Keys of a header mapping that no dataclass field covers."""
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class AcceptanceCriterion:
    id: str                                    # AC-1
    description: str = ""
    status: ACStatus = ACStatus.PENDING
    evidence: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    FIELDS = ("id", "description", "status", "evidence")

    @classmethod
    def from_header(cls, data: dict) -> "AcceptanceCriterion":
        return cls(
            id=data["id"],
            description=data.get("description") or "",
            status=ACStatus(data.get("status", "pending")),
            evidence=data.get("evidence") or "",
            extra=_unmodelled(data, cls.FIELDS),
        )

    def to_header(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "evidence": self.evidence,
            **self.extra,
        }


@dataclass
class Task:
    id: str                                    # T-1
    title: str = ""
    agent: str = ""                            # Agent assigned, e.g. backend-dev
    status: TaskStatus = TaskStatus.PENDING
    depends_on: list[str] = field(default_factory=list)
    effort_estimate: str = ""
    ac_coverage: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    FIELDS = ("id", "title", "agent", "status", "depends_on", "effort_estimate", "ac_coverage")

    @classmethod
    def from_header(cls, data: dict) -> "Task":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            agent=data.get("agent") or "",
            status=TaskStatus(data.get("status", "pending")),
            depends_on=list(data.get("depends_on") or []),
            effort_estimate=data.get("effort_estimate") or "",
            ac_coverage=list(data.get("ac_coverage") or []),
            extra=_unmodelled(data, cls.FIELDS),
        )

    def to_header(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "agent": self.agent,
            "status": self.status.value,
            "depends_on": list(self.depends_on),
            "effort_estimate": self.effort_estimate,
            "ac_coverage": list(self.ac_coverage),
            **self.extra,
        }


@dataclass
class Execution:
    started_at: Optional[str] = None           # ISO timestamp, set on first entry to executing
    completed_at: Optional[str] = None         # ISO timestamp, set on entry to done
    task_list_id: Optional[str] = None
    session_ids: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    FIELDS = ("started_at", "completed_at", "task_list_id", "session_ids")

    @classmethod
    def from_header(cls, data: dict) -> "Execution":
        return cls(
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            task_list_id=data.get("task_list_id"),
            session_ids=list(data.get("session_ids") or []),
            extra=_unmodelled(data, cls.FIELDS),
        )

    def to_header(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "task_list_id": self.task_list_id,
            "session_ids": list(self.session_ids),
            **self.extra,
        }


@dataclass
class Why:
    problem: str = ""
    root_cause: str = ""
    impact: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    FIELDS = ("problem", "root_cause", "impact")

    @classmethod
    def from_header(cls, data: dict) -> "Why":
        return cls(
            problem=data.get("problem") or "",
            root_cause=data.get("root_cause") or "",
            impact=data.get("impact") or "",
            extra=_unmodelled(data, cls.FIELDS),
        )

    def to_header(self) -> dict[str, Any]:
        return {
            "problem": self.problem,
            "root_cause": self.root_cause,
            "impact": self.impact,
            **self.extra,
        }


@dataclass
class Story:
    """A story record.

    Created in draft, mutated in place by the lifecycle FSM and by task/AC
    status updates, never deleted (archived is terminal). Header keys the
    model does not know about are kept in `extra` at every level and
    written back unchanged.
    """
    id: str                                    # PROJ-001
    title: str
    status: StoryStatus
    priority: Priority
    complexity: Complexity
    created: str                               # ISO timestamp
    updated: str                               # ISO timestamp
    author: str
    tags: list[str] = field(default_factory=list)
    acceptance_criteria: list[AcceptanceCriterion] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    execution: Execution = field(default_factory=Execution)
    why: Why = field(default_factory=Why)
    extra: dict[str, Any] = field(default_factory=dict)

    FIELDS = (
        "id", "title", "status", "priority", "complexity", "created",
        "updated", "author", "tags", "acceptance_criteria", "tasks",
        "execution", "why",
    )

    @classmethod
    def from_header(cls, header: dict) -> "Story":
        """Build a Story from a header that passed validate_story()."""
        return cls(
            id=header["id"],
            title=header["title"],
            status=StoryStatus(header["status"]),
            priority=Priority(header["priority"]),
            complexity=Complexity(header["complexity"]),
            created=header["created"],
            updated=header["updated"],
            author=header["author"],
            tags=list(header.get("tags") or []),
            acceptance_criteria=[
                AcceptanceCriterion.from_header(ac)
                for ac in header.get("acceptance_criteria") or []
            ],
            tasks=[Task.from_header(t) for t in header.get("tasks") or []],
            execution=Execution.from_header(header.get("execution") or {}),
            why=Why.from_header(header.get("why") or {}),
            extra=_unmodelled(header, cls.FIELDS),
        )

    def to_header(self) -> dict[str, Any]:
        """Ordered header mapping, ready for frontmatter.serialize()."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "complexity": self.complexity.value,
            "created": self.created,
            "updated": self.updated,
            "author": self.author,
            "tags": list(self.tags),
            "acceptance_criteria": [ac.to_header() for ac in self.acceptance_criteria],
            "tasks": [t.to_header() for t in self.tasks],
            "execution": self.execution.to_header(),
            "why": self.why.to_header(),
            **self.extra,
        }


@dataclass
class ACSummary:
    total: int
    passing: int
    failing: int
    pending: int


@dataclass
class TaskSummary:
    total: int
    done: int
    in_progress: int
    pending: int


def ac_summary(story: Story) -> ACSummary:
    """Count acceptance criteria by status."""
    statuses = [ac.status for ac in story.acceptance_criteria]
    return ACSummary(
        total=len(statuses),
        passing=statuses.count(ACStatus.PASSING),
        failing=statuses.count(ACStatus.FAILING),
        pending=statuses.count(ACStatus.PENDING),
    )


def task_summary(story: Story) -> TaskSummary:
    """Count tasks by status. Skipped tasks only count toward the total."""
    statuses = [t.status for t in story.tasks]
    return TaskSummary(
        total=len(statuses),
        done=statuses.count(TaskStatus.DONE),
        in_progress=statuses.count(TaskStatus.IN_PROGRESS),
        pending=statuses.count(TaskStatus.PENDING),
    )


@dataclass
class KnowledgeReference:
    id: str
    dimension: str
    title: str


@dataclass
class Retro:
    """Retrospective record. The body is the sole input to knowledge extraction."""
    story_id: str
    title: str
    completed: str
    duration: str
    agents_involved: list[str] = field(default_factory=list)
    repo: str = ""
    team: Optional[str] = None
    knowledge_extracted: list[KnowledgeReference] = field(default_factory=list)
    metrics: dict[str, int | float] = field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_record(cls, header: dict, body: str) -> "Retro":
        """Build a Retro from a header that passed validate_retro()."""
        return cls(
            story_id=header["story_id"],
            title=header["title"],
            completed=header["completed"],
            duration=header["duration"],
            agents_involved=list(header.get("agents_involved") or []),
            repo=header.get("repo") or "",
            team=header.get("team"),
            knowledge_extracted=[
                KnowledgeReference(id=k["id"], dimension=k.get("dimension", ""), title=k.get("title", ""))
                for k in header.get("knowledge_extracted") or []
                if isinstance(k, dict) and "id" in k
            ],
            metrics=dict(header.get("metrics") or {}),
            body=body,
        )
