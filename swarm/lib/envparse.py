"""
Safe .env parser for .swarm/swarm.env.

Parses KEY=value lines without shell execution. Values containing shell
metacharacters are rejected rather than passed along.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    re.compile(r'`'),           # backticks
    re.compile(r'\$\('),        # command substitution
    re.compile(r'\$\{'),        # variable expansion
    re.compile(r';'),           # command chaining
    re.compile(r'&&'),          # AND chaining
    re.compile(r'\|'),          # pipe / OR chaining
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env(text: str) -> dict[str, str]:
    """
    Parse env text, return dict.

    Raises:
        ValueError: if syntax invalid or forbidden pattern found
    """
    result = {}
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue

        key, sep, value = line.partition('=')
        if not sep:
            raise ValueError(f"Line {lineno}: Invalid syntax (no '=')")

        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Line {lineno}: Invalid key '{key}'")

        value = _unquote(value.strip())
        if any(p.search(value) for p in FORBIDDEN_PATTERNS):
            raise ValueError(f"Line {lineno}: Forbidden pattern in value for {key}")

        result[key] = value

    return result


def load_env(path: Path) -> dict[str, str]:
    """Parse an env file. A missing file is an empty environment."""
    if not path.exists():
        return {}
    return parse_env(path.read_text())
