"""
Frontmatter codec for SWARM record files.

A record file is a YAML header between two `---` lines followed by a
free-form markdown body:

    ---
    id: PROJ-001
    status: draft
    ---
    # Body text

parse() and serialize() are inverses for any header holding plain
JSON-style values (mappings, lists, strings, numbers, booleans, null).

Headers are decoded with YAML 1.2 scalar rules: unquoted timestamps
(`created: 2026-01-01`) stay strings, and only true/false are booleans
(`yes`, `no`, `on`, `off` stay strings). Both LF and CRLF files parse.
"""

import logging
import re
from typing import Any, NamedTuple

import yaml

from swarm.lib.constants import FRONTMATTER_DELIMITER

logger = logging.getLogger(__name__)

_OPENING_RE = re.compile(rf'{re.escape(FRONTMATTER_DELIMITER)}\r?\n')
# Closing delimiter must sit on its own line
_CLOSING_RE = re.compile(rf'^{re.escape(FRONTMATTER_DELIMITER)}[ \t\r]*$', re.MULTILINE)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_BOOL_TAG = "tag:yaml.org,2002:bool"


class HeaderLoader(yaml.SafeLoader):
    """SafeLoader without the YAML 1.1 timestamp and yes/no/on/off resolvers."""


HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_TIMESTAMP_TAG, _BOOL_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
HeaderLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r'^(?:true|True|TRUE|false|False|FALSE)$'),
    list("tTfF"),
)


class Record(NamedTuple):
    """A decoded record file."""
    header: dict[str, Any]
    body: str


def parse(text: str) -> Record | None:
    """Split a record file into header mapping and body.

    Returns None when there is no header: the text does not open with a
    delimiter line, the closing delimiter is missing, the YAML is
    malformed, or it decodes to anything other than a non-empty mapping.
    """
    opening = _OPENING_RE.match(text)
    if opening is None:
        return None

    closing = _CLOSING_RE.search(text, opening.end())
    if closing is None:
        logger.debug("[CODEC] no closing delimiter")
        return None

    header_block = text[opening.end():closing.start()]
    body = text[closing.end():]
    # Any \r was taken by the closing match
    if body.startswith("\n"):
        body = body[1:]

    try:
        header = yaml.load(header_block, Loader=HeaderLoader)
    except yaml.YAMLError as e:
        logger.debug(f"[CODEC] malformed header: {e}")
        return None

    # Headers must carry at least one field
    if not isinstance(header, dict) or not header:
        return None

    return Record(header=header, body=body)


def serialize(header: dict[str, Any], body: str) -> str:
    """Encode header and body into record file text.

    Key order is kept and long scalars are never folded, so a parse of
    the result gives back the same header and the body byte for byte.
    """
    header_block = yaml.safe_dump(
        header,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return f"{FRONTMATTER_DELIMITER}\n{header_block}{FRONTMATTER_DELIMITER}\n{body}"
