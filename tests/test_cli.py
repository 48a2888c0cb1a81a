"""Tests for the swarm CLI entrypoint."""

import json

import pytest

from swarm.cli import build_parser, main
from swarm.pm.stories import save_story


def run_cli(capsys, *argv):
    code = main(list(argv))
    return code, json.loads(capsys.readouterr().out)


class TestParser:
    """Tests for build_parser()."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_transition_flags(self):
        args = build_parser().parse_args(["transition", "s.md", "planned", "--apply"])
        assert (args.story_file, args.target, args.apply) == ("s.md", "planned", True)


class TestMain:
    """End-to-end runs through main()."""

    def test_validate_ok(self, tmp_path, make_story, capsys):
        path = tmp_path / "story.md"
        save_story(path, make_story(), "")
        code, out = run_cli(capsys, "-C", str(tmp_path), "validate", str(path))
        assert code == 0
        assert out["ok"] is True
        assert out["id"] == "TEST-001"

    def test_failure_exit_code(self, tmp_path, capsys):
        code, out = run_cli(capsys, "-C", str(tmp_path), "list", str(tmp_path / "missing"))
        assert code == 1
        assert out["error"].startswith("Directory not found")

    def test_extract_uses_base_dir(self, tmp_path, capsys):
        retro = tmp_path / "retro.md"
        retro.write_text("---\ntitle: Retro\n---\n\n## S\n- something learned\n")
        code, out = run_cli(
            capsys, "-C", str(tmp_path), "extract-knowledge", str(retro),
            "--story-id", "PROJ-001", "--repo", "api-service",
        )
        assert code == 0
        assert out["files_written"] == [".swarm/knowledge/PROJ-001-1.md"]
        assert (tmp_path / ".swarm/knowledge/PROJ-001-1.md").exists()

    def test_bad_settings_file(self, tmp_path, capsys):
        (tmp_path / ".swarm").mkdir()
        (tmp_path / ".swarm/swarm.env").write_text("REPO_NAME=`id`\n")
        code, out = run_cli(capsys, "-C", str(tmp_path), "index")
        assert code == 1
        assert out["error"] == "Invalid settings"
        assert out["details"] == ["Line 1: Forbidden pattern in value for REPO_NAME"]
