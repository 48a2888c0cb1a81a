#!/usr/bin/env python3
"""SWARM CLI entrypoint.

Every command prints one JSON object on stdout:
    {"ok": true, ...}                         exit 0
    {"ok": false, "error": ..., "details": [...]}  exit 1

Logs go to stderr so stdout stays machine-readable.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from swarm.commands.extract import run_extract_knowledge
from swarm.commands.index import run_index
from swarm.commands.list import run_list
from swarm.commands.next_id import run_next_id
from swarm.commands.transition import run_transition
from swarm.commands.validate import run_validate
from swarm.lib.config import Settings, load_settings
from swarm.lib.result import fail


def get_base_dir(args) -> Path:
    """Project root holding .swarm/ (cwd unless --base-dir given)."""
    return Path(args.base_dir) if args.base_dir else Path.cwd()


def setup_logging(args, settings: Settings) -> None:
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def emit(result: dict) -> int:
    """Print a tagged result, return the process exit code."""
    print(json.dumps(result))
    return 0 if result.get("ok") else 1


def cmd_validate(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_validate(Path(args.story_file)))


def cmd_transition(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_transition(Path(args.story_file), args.target, apply=args.apply))


def cmd_extract_knowledge(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_extract_knowledge(
        Path(args.retro_file),
        base_dir,
        settings,
        story_id=args.story_id or "",
        repo=args.repo or "",
    ))


def cmd_next_id(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_next_id(Path(args.config_file)))


def cmd_list(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_list(Path(args.directory), status=args.status or ""))


def cmd_index(args, base_dir: Path, settings: Settings) -> int:
    return emit(run_index(base_dir))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='swarm', description='SWARM record tooling')
    parser.add_argument('--base-dir', '-C', help='Project root containing .swarm/ (default: cwd)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging on stderr')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # swarm validate
    p_validate = subparsers.add_parser('validate', help='Validate a story file')
    p_validate.add_argument('story_file', help='Path to story markdown file')
    p_validate.set_defaults(func=cmd_validate)

    # swarm transition
    p_transition = subparsers.add_parser('transition', help='Check a story status transition')
    p_transition.add_argument('story_file', help='Path to story markdown file')
    p_transition.add_argument('target', help='Target status (e.g., planned)')
    p_transition.add_argument('--apply', action='store_true', help='Write the new status back to the file')
    p_transition.set_defaults(func=cmd_transition)

    # swarm extract-knowledge
    p_extract = subparsers.add_parser('extract-knowledge', help='Extract knowledge items from a retrospective')
    p_extract.add_argument('retro_file', help='Path to retrospective markdown file')
    p_extract.add_argument('--story-id', help='Source story ID (default: story_id from frontmatter)')
    p_extract.add_argument('--repo', help='Source repo name (default: repo from frontmatter)')
    p_extract.set_defaults(func=cmd_extract_knowledge)

    # swarm next-id
    p_next = subparsers.add_parser('next-id', help='Allocate the next story ID')
    p_next.add_argument('config_file', help='Path to .swarm/config.md')
    p_next.set_defaults(func=cmd_next_id)

    # swarm list
    p_list = subparsers.add_parser('list', help='List records in a directory')
    p_list.add_argument('directory', help='Directory of markdown records')
    p_list.add_argument('--status', help='Only records with this status')
    p_list.set_defaults(func=cmd_list)

    # swarm index
    p_index = subparsers.add_parser('index', help='Summarize backlog and archived stories')
    p_index.set_defaults(func=cmd_index)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    base_dir = get_base_dir(args)

    try:
        settings = load_settings(base_dir)
    except ValueError as e:
        return emit(fail("Invalid settings", [str(e)]))

    setup_logging(args, settings)
    return args.func(args, base_dir, settings)


if __name__ == '__main__':
    sys.exit(main())
