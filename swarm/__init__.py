"""SWARM record core.

Frontmatter codec, record validation, the story lifecycle state machine
and the retrospective knowledge extractor, plus the thin command layer
that exposes them.
"""

__version__ = "0.4.0"
