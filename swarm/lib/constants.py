"""Shared constants for SWARM."""

import re

# Record header delimiter (first and closing line of every record file)
FRONTMATTER_DELIMITER = "---"

# Project layout, relative to the base directory
SWARM_DIR = ".swarm"
CONFIG_FILE = f"{SWARM_DIR}/config.md"
SETTINGS_FILE = f"{SWARM_DIR}/swarm.env"
BACKLOG_DIR = f"{SWARM_DIR}/backlog"
ARCHIVE_DIR = f"{SWARM_DIR}/archive"
RETROS_DIR = f"{SWARM_DIR}/retros"
KNOWLEDGE_DIR = f"{SWARM_DIR}/knowledge"

# Knowledge item IDs: K-001, K-002, ...
KNOWLEDGE_ID_PATTERN = re.compile(r'K-(\d+)')
KNOWLEDGE_ID_WIDTH = 3

# Story IDs minted from the config counter: PROJ-001
STORY_ID_WIDTH = 3
