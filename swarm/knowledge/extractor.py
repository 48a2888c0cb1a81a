"""
Knowledge extractor.

Mines retrospective markdown for learnings and turns them into
KnowledgeItem records:

    body -> extract_raw_learnings() -> [RawLearning]
         -> transform_learnings()   -> [KnowledgeItem]

No file I/O happens here. Callers scan existing IDs, pass them in via
ExtractionContext, and persist the returned items themselves.
"""

import logging

from swarm.knowledge.dimensions import suggest_dimension, suggest_domain
from swarm.knowledge.models import (
    Confidence,
    ExtractionContext,
    KnowledgeItem,
    RawLearning,
    Scope,
)
from swarm.lib.constants import KNOWLEDGE_ID_PATTERN, KNOWLEDGE_ID_WIDTH

logger = logging.getLogger(__name__)

TITLE_MAX_LEN = 80

# Checked in order, first hit wins
SCOPE_TERMS = [
    (Scope.ENTERPRISE, ["enterprise", "organization", "company-wide"]),
    (Scope.DEPARTMENT, ["department", "cross-team"]),
    (Scope.TEAM, ["team", "convention", "standard", "always", "never"]),
]

HIGH_CONFIDENCE_TERMS = ["proven", "confirmed", "consistently"]
LOW_CONFIDENCE_TERMS = ["might", "possibly", "unclear"]

TECH_TAGS = [
    "typescript", "javascript", "react", "bun", "node", "sql", "sqlite",
    "postgres", "docker", "kubernetes", "css", "html", "graphql", "rest",
    "api", "jwt", "oauth",
]


def _is_placeholder(text: str) -> bool:
    """Unfilled template text like `[Effective patterns, smooth workflows]`."""
    return text.startswith("[") and text.endswith("]")


def extract_raw_learnings(body: str) -> list[RawLearning]:
    """Pull bullet learnings out of a retrospective body, in document order.

    `## Heading` sets the section (and clears the agent), `### Name` sets
    the agent for the bullets beneath it.
    """
    learnings = []
    section = ""
    agent = ""

    for line in body.split("\n"):
        trimmed = line.strip()

        if trimmed.startswith("## "):
            section = trimmed[3:].strip()
            agent = ""
            continue

        if trimmed.startswith("### "):
            agent = trimmed[4:].strip()
            continue

        if trimmed.startswith("- ") and len(trimmed) > 4:
            text = trimmed[2:].strip()
            if not text or _is_placeholder(text):
                continue
            learnings.append(RawLearning(text=text, section=section, agent=agent or None))

    logger.debug(f"[EXTRACT] {len(learnings)} raw learning(s)")
    return learnings


def assess_scope(text: str) -> Scope:
    """Scope from enterprise/department/team wording; repo otherwise."""
    lower = text.lower()
    for scope, terms in SCOPE_TERMS:
        if any(term in lower for term in terms):
            return scope
    return Scope.REPO


def assess_confidence(text: str) -> Confidence:
    """High for certainty wording, low for hedging, medium otherwise."""
    lower = text.lower()
    if any(term in lower for term in HIGH_CONFIDENCE_TERMS):
        return Confidence.HIGH
    if any(term in lower for term in LOW_CONFIDENCE_TERMS):
        return Confidence.LOW
    return Confidence.MEDIUM


def extract_tags(text: str) -> list[str]:
    """Technology terms mentioned in the text, in TECH_TAGS order."""
    lower = text.lower()
    return [tech for tech in TECH_TAGS if tech in lower]


def next_knowledge_id(used_ids: list[str]) -> str:
    """One past the highest K-NNN number in used_ids (K-001 if none)."""
    highest = 0
    for knowledge_id in used_ids:
        match = KNOWLEDGE_ID_PATTERN.search(knowledge_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"K-{highest + 1:0{KNOWLEDGE_ID_WIDTH}d}"


def transform_learnings(raw_learnings: list[RawLearning], ctx: ExtractionContext) -> list[KnowledgeItem]:
    """Classify raw learnings and mint sequential IDs for them."""
    items = []
    used_ids = list(ctx.existing_ids)

    for learning in raw_learnings:
        item_id = next_knowledge_id(used_ids)
        used_ids.append(item_id)

        scope = assess_scope(learning.text)
        item = KnowledgeItem(
            id=item_id,
            source_story=ctx.story_id,
            source_repo=ctx.repo_name,
            created=ctx.clock().isoformat(),
            author=learning.agent or ctx.author,
            dimension=suggest_dimension(learning.text),
            scope=scope,
            hoistable=scope is not Scope.REPO,
            confidence=assess_confidence(learning.text),
            domain=suggest_domain(learning.text),
            title=learning.text[:TITLE_MAX_LEN],
            description=learning.text,
            context=f"From {learning.section} section of {ctx.story_id} retrospective",
            recommendation=learning.text,
            tags=extract_tags(learning.text),
        )
        logger.debug(f"[EXTRACT] {item.id}: {item.dimension.value}/{item.domain.value}/{item.scope.value}")
        items.append(item)

    return items


def extract_knowledge(retro_body: str, ctx: ExtractionContext) -> list[KnowledgeItem]:
    """Full pipeline: retrospective body -> classified knowledge items."""
    return transform_learnings(extract_raw_learnings(retro_body), ctx)
