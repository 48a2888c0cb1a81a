"""
Knowledge module for SWARM.

Extracts E/Q/P-classified knowledge items from retrospective prose.
"""

from swarm.knowledge.dimensions import (
    DIMENSION_KEYWORDS,
    DOMAIN_KEYWORDS,
    suggest_dimension,
    suggest_domain,
)
from swarm.knowledge.extractor import (
    assess_confidence,
    assess_scope,
    extract_knowledge,
    extract_raw_learnings,
    extract_tags,
    next_knowledge_id,
    transform_learnings,
)
from swarm.knowledge.models import (
    Confidence,
    Dimension,
    Domain,
    ExtractionContext,
    KnowledgeItem,
    RawLearning,
    Scope,
)

__all__ = [
    "DIMENSION_KEYWORDS",
    "DOMAIN_KEYWORDS",
    "suggest_dimension",
    "suggest_domain",
    "assess_confidence",
    "assess_scope",
    "extract_knowledge",
    "extract_raw_learnings",
    "extract_tags",
    "next_knowledge_id",
    "transform_learnings",
    "Confidence",
    "Dimension",
    "Domain",
    "ExtractionContext",
    "KnowledgeItem",
    "RawLearning",
    "Scope",
]
