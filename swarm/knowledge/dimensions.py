"""
E/Q/P taxonomy keyword classifier.

Epistemology (E) = Patterns: reusable architectural/design patterns
Qualia (Q) = Pain Points: gotchas, pitfalls, surprises
Praxeology (P) = Best Practices: proven techniques and conventions

Scoring is a plain substring hit count per category. The highest score
wins; ties go to the category declared first, and a text with no hits
at all falls back to the default. Dict order is the tie-break order, so
keep the declarations in Enum order.
"""

import logging

from swarm.knowledge.models import Dimension, Domain

logger = logging.getLogger(__name__)


DIMENSION_KEYWORDS: dict[Dimension, list[str]] = {
    Dimension.EPISTEMOLOGY: [
        "pattern", "architecture", "design", "structure", "abstraction",
        "module", "interface", "decomposition", "composition", "separation",
        "layering", "encapsulation", "polymorphism", "factory", "strategy",
        "observer", "adapter", "singleton",
    ],
    Dimension.QUALIA: [
        "gotcha", "pitfall", "surprise", "unexpected", "bug", "issue",
        "problem", "workaround", "hack", "caveat", "warning", "careful",
        "trap", "edge case", "subtle", "confusing", "misleading", "broken",
    ],
    Dimension.PRAXEOLOGY: [
        "best practice", "convention", "standard", "recommend", "should",
        "always", "never", "prefer", "avoid", "technique", "approach",
        "method", "workflow", "guideline", "rule", "practice", "proven",
        "effective",
    ],
}

DOMAIN_KEYWORDS: dict[Domain, list[str]] = {
    Domain.FRONTEND: [
        "react", "component", "ui", "css", "style", "hook", "state",
        "render", "dom", "browser", "responsive",
    ],
    Domain.BACKEND: [
        "api", "server", "database", "endpoint", "service", "middleware",
        "route", "query", "sql", "rest", "graphql",
    ],
    Domain.DEVOPS: [
        "deploy", "ci", "cd", "docker", "kubernetes", "pipeline",
        "infrastructure", "monitor", "log", "container",
    ],
    Domain.ARCHITECTURE: [
        "architecture", "design", "schema", "migration", "scale",
        "performance", "microservice", "monolith",
    ],
    Domain.TESTING: [
        "test", "spec", "assert", "mock", "stub", "fixture", "coverage",
        "integration", "unit", "e2e",
    ],
    Domain.PROCESS: [
        "workflow", "process", "agile", "sprint", "retrospective",
        "standup", "review", "planning",
    ],
    Domain.DOCUMENTATION: [
        "doc", "readme", "comment", "jsdoc", "typedoc", "changelog",
        "guide", "api doc",
    ],
    Domain.SECURITY: [
        "auth", "security", "permission", "token", "jwt", "oauth",
        "encrypt", "vulnerability", "cors", "csrf",
    ],
}


def _best_match(text: str, keywords: dict, default):
    lower = text.lower()
    best, best_score = default, 0
    for category, words in keywords.items():
        score = sum(1 for word in words if word in lower)
        # Strictly greater: earlier categories win ties
        if score > best_score:
            best, best_score = category, score
    return best


def suggest_dimension(text: str) -> Dimension:
    """Classify text as epistemology, qualia or praxeology (the default)."""
    return _best_match(text, DIMENSION_KEYWORDS, Dimension.PRAXEOLOGY)


def suggest_domain(text: str) -> Domain:
    """Classify text into one of the eight domains; backend by default."""
    return _best_match(text, DOMAIN_KEYWORDS, Domain.BACKEND)
