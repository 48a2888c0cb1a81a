"""
Knowledge layer types.

Knowledge items are classified on three axes:
- dimension: Epistemology (patterns), Qualia (pain points),
  Praxeology (best practices)
- scope: how far up the hierarchy the item applies (repo < team <
  department < enterprise)
- domain: the technical area it belongs to
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from swarm.lib.clock import utc_now


class Dimension(Enum):
    EPISTEMOLOGY = "epistemology"
    QUALIA = "qualia"
    PRAXEOLOGY = "praxeology"


class Scope(Enum):
    REPO = "repo"
    TEAM = "team"
    DEPARTMENT = "department"
    ENTERPRISE = "enterprise"


class Confidence(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Domain(Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    DEVOPS = "devops"
    ARCHITECTURE = "architecture"
    TESTING = "testing"
    PROCESS = "process"
    DOCUMENTATION = "documentation"
    SECURITY = "security"


DIMENSION_LABELS = {
    Dimension.EPISTEMOLOGY: ("Patterns", "Reusable architectural and design patterns"),
    Dimension.QUALIA: ("Pain Points", "Gotchas, pitfalls, and surprises"),
    Dimension.PRAXEOLOGY: ("Best Practices", "Proven techniques and conventions"),
}

# Lowest to highest
SCOPE_ORDER = [Scope.REPO, Scope.TEAM, Scope.DEPARTMENT, Scope.ENTERPRISE]


def is_scope_higher_than(a: Scope, b: Scope) -> bool:
    """True if scope a sits above scope b in the hierarchy."""
    return SCOPE_ORDER.index(a) > SCOPE_ORDER.index(b)


@dataclass
class RawLearning:
    """A bullet lifted from a retrospective body."""
    text: str
    section: str                               # Retro section it came from, e.g. "What Went Well"
    agent: Optional[str] = None                # ### sub-heading it sat under, if any


@dataclass
class ExtractionContext:
    """Caller-supplied context for one extraction run.

    existing_ids is a snapshot scanned from persisted knowledge items; the
    pipeline never writes to it. Two runs fed the same snapshot mint the
    same IDs, so callers must re-scan between runs.
    """
    story_id: str
    repo_name: str
    author: str
    existing_ids: list[str] = field(default_factory=list)
    clock: Callable[[], datetime] = utc_now


@dataclass
class KnowledgeItem:
    id: str                                    # K-001
    source_story: str                          # PROJ-003
    source_repo: str                           # my-api-service
    created: str                               # ISO timestamp
    author: str                                # Agent that discovered it
    dimension: Dimension
    scope: Scope
    hoistable: bool                            # scope above repo
    confidence: Confidence
    domain: Domain
    title: str
    description: str
    context: str                               # Situation this applies to
    recommendation: str                        # What to do about it
    tags: list[str] = field(default_factory=list)
    hoisted_to: Optional[str] = None           # Set by the external hoisting process
    hoisted_at: Optional[str] = None
    supersedes: Optional[str] = None           # ID of the item this replaces
    ttl: Optional[str] = None                  # ISO duration

    def to_header(self) -> dict[str, Any]:
        """Header fields as written to .swarm/knowledge/*.md."""
        return {
            "id": self.id,
            "source_story": self.source_story,
            "source_repo": self.source_repo,
            "created": self.created,
            "author": self.author,
            "dimension": self.dimension.value,
            "scope": self.scope.value,
            "hoistable": self.hoistable,
            "hoisted_to": self.hoisted_to,
            "hoisted_at": self.hoisted_at,
            "confidence": self.confidence.value,
            "tags": list(self.tags),
            "domain": self.domain.value,
            "title": self.title,
            "supersedes": self.supersedes,
            "ttl": self.ttl,
        }

    def render_body(self) -> str:
        """Markdown body carrying the long-form fields."""
        return "\n".join([
            "",
            f"# {self.title}",
            "",
            "## Context",
            "",
            self.context,
            "",
            "## Description",
            "",
            self.description,
            "",
            "## Recommendation",
            "",
            self.recommendation,
            "",
            "## Evidence",
            "",
            f"- Source story: `{self.source_story}`",
            f"- Discovered by: {self.author}",
            f"- Confidence: {self.confidence.value}",
            "",
        ])

    def summary(self) -> dict[str, str]:
        return {
            "id": self.id,
            "dimension": self.dimension.value,
            "scope": self.scope.value,
            "title": self.title,
        }
