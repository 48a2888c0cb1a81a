"""Tests for swarm.knowledge.extractor module."""

import pytest

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
    ExtractionContext,
    RawLearning,
    Scope,
)
from swarm.lib.validate import validate_knowledge

RETRO_BODY = """# Retrospective: PROJ-001

## What Went Well

- [Effective patterns, smooth workflows]
- Actual learning here
- Proven: consistently green builds after pinning Docker images

## What Could Improve

- [Pain points, blockers]
- Gotcha: async functions swallow errors
- The team might need a convention for API errors

## Learnings by Agent

### backend-dev

- Best practice: always validate input
- SQLite locks under parallel tests

## Action Items

- [ ] Follow up on flaky test
"""


@pytest.fixture
def ctx(clock):
    return ExtractionContext(
        story_id="PROJ-001",
        repo_name="api-service",
        author="swarm-cli",
        existing_ids=[],
        clock=clock,
    )


class TestExtractRawLearnings:
    """Tests for extract_raw_learnings()."""

    def test_sections_and_agents(self):
        body = (
            "## What Went Well\n"
            "- Actual learning here\n"
            "## Learnings by Agent\n"
            "### backend-dev\n"
            "- Always validate input at the boundary\n"
            "### frontend-dev\n"
            "- React state updates are batched\n"
            "## Action Items\n"
            "- Follow up on flaky test\n"
        )
        assert extract_raw_learnings(body) == [
            RawLearning("Actual learning here", "What Went Well", None),
            RawLearning("Always validate input at the boundary", "Learnings by Agent", "backend-dev"),
            RawLearning("React state updates are batched", "Learnings by Agent", "frontend-dev"),
            RawLearning("Follow up on flaky test", "Action Items", None),
        ]

    def test_placeholder_filtered(self):
        body = "## What Went Well\n- [Effective patterns, smooth workflows]\n- Actual learning here\n"
        learnings = extract_raw_learnings(body)
        assert [l.text for l in learnings] == ["Actual learning here"]

    def test_checkbox_is_not_placeholder(self):
        learnings = extract_raw_learnings("## Actions\n- [ ] Write docs\n")
        assert [l.text for l in learnings] == ["[ ] Write docs"]

    def test_short_and_empty_bullets_skipped(self):
        body = "## S\n-\n- \n- ab\n- abc\n"
        assert [l.text for l in extract_raw_learnings(body)] == ["abc"]

    def test_indented_bullets(self):
        assert [l.text for l in extract_raw_learnings("## S\n   - nested item\n")] == ["nested item"]

    def test_non_bullets_ignored(self):
        body = "# Title\n\n## S\nSome prose.\n* star bullet\n1. numbered\n"
        assert extract_raw_learnings(body) == []

    def test_bullet_before_any_section(self):
        assert extract_raw_learnings("- orphan learning") == [RawLearning("orphan learning", "", None)]

    def test_degenerate_inputs(self):
        assert extract_raw_learnings("") == []
        assert extract_raw_learnings("## Only headings\n### agent\n") == []
        assert extract_raw_learnings("## S\n- [one]\n- [two]\n") == []


class TestAssessScope:
    """Tests for assess_scope()."""

    @pytest.mark.parametrize("text,expected", [
        ("Use the enterprise logging standard", Scope.ENTERPRISE),
        ("Organization-wide secrets policy", Scope.ENTERPRISE),
        ("Agreed cross-team on API versioning", Scope.DEPARTMENT),
        ("Department budget for CI minutes", Scope.DEPARTMENT),
        ("Team convention: squash merges", Scope.TEAM),
        ("Never commit generated files", Scope.TEAM),
        ("The cache key includes the path", Scope.REPO),
    ])
    def test_scopes(self, text, expected):
        assert assess_scope(text) == expected


class TestAssessConfidence:
    """Tests for assess_confidence()."""

    @pytest.mark.parametrize("text,expected", [
        ("Proven to cut build time", Confidence.HIGH),
        ("Confirmed by load tests", Confidence.HIGH),
        ("This might be flaky", Confidence.LOW),
        ("Unclear whether retries help", Confidence.LOW),
        ("Caching helped", Confidence.MEDIUM),
        ("Confirmed, but might regress", Confidence.HIGH),
    ])
    def test_confidence(self, text, expected):
        assert assess_confidence(text) == expected


class TestExtractTags:
    """Tests for extract_tags()."""

    def test_all_matches_in_table_order(self):
        assert extract_tags("Postgres and SQLite via the REST API") == ["sql", "sqlite", "postgres", "rest", "api"]

    def test_no_matches(self):
        assert extract_tags("Pair earlier") == []


class TestNextKnowledgeId:
    """Tests for next_knowledge_id()."""

    def test_first_id(self):
        assert next_knowledge_id([]) == "K-001"

    def test_one_past_highest(self):
        assert next_knowledge_id(["K-003", "K-005", "K-001"]) == "K-006"

    def test_ignores_other_ids(self):
        assert next_knowledge_id(["garbage", "K-010", "PROJ-1"]) == "K-011"

    def test_grows_past_padding(self):
        assert next_knowledge_id(["K-999"]) == "K-1000"


class TestTransformLearnings:
    """Tests for transform_learnings()."""

    def test_ids_continue_from_existing(self, ctx):
        ctx.existing_ids = ["K-003", "K-005"]
        raw = [RawLearning("first", "S"), RawLearning("second", "S")]
        items = transform_learnings(raw, ctx)
        assert [i.id for i in items] == ["K-006", "K-007"]

    def test_existing_ids_not_mutated(self, ctx):
        ctx.existing_ids = ["K-001"]
        transform_learnings([RawLearning("first", "S")], ctx)
        assert ctx.existing_ids == ["K-001"]

    def test_record_fields(self, ctx, clock):
        raw = [RawLearning("Gotcha: async functions swallow errors", "What Could Improve", "backend-dev")]
        item = transform_learnings(raw, ctx)[0]

        assert item.source_story == "PROJ-001"
        assert item.source_repo == "api-service"
        assert item.author == "backend-dev"
        assert item.created == clock().isoformat()
        assert item.dimension == Dimension.QUALIA
        assert item.scope == Scope.REPO
        assert item.hoistable is False
        assert item.title == item.description == item.recommendation == raw[0].text
        assert item.context == "From What Could Improve section of PROJ-001 retrospective"
        assert item.supersedes is None and item.ttl is None
        assert item.hoisted_to is None and item.hoisted_at is None

    def test_author_falls_back_to_context(self, ctx):
        item = transform_learnings([RawLearning("something learned", "S")], ctx)[0]
        assert item.author == "swarm-cli"

    def test_hoistable_iff_above_repo(self, ctx):
        raw = [RawLearning("Team convention here", "S"), RawLearning("Local quirk", "S")]
        team, repo = transform_learnings(raw, ctx)
        assert (team.scope, team.hoistable) == (Scope.TEAM, True)
        assert (repo.scope, repo.hoistable) == (Scope.REPO, False)

    def test_title_truncated(self, ctx):
        text = "x" * 120
        item = transform_learnings([RawLearning(text, "S")], ctx)[0]
        assert item.title == "x" * 80
        assert item.description == text

    def test_headers_pass_validation(self, ctx):
        for item in extract_knowledge(RETRO_BODY, ctx):
            assert validate_knowledge(item.to_header()).valid


class TestExtractKnowledge:
    """End-to-end extraction."""

    def test_retro_template(self, ctx):
        items = extract_knowledge(RETRO_BODY, ctx)

        # 2 + 2 + 2 real bullets, plus the checkbox action item
        assert len(items) == 7
        assert [i.id for i in items] == [f"K-00{n}" for n in range(1, 8)]
        assert all(i.source_story == "PROJ-001" for i in items)
        assert all(i.source_repo == "api-service" for i in items)

    def test_six_records_from_three_sections(self, ctx):
        body = (
            "## What Went Well\n- Went well one\n- Went well two\n"
            "## What Could Improve\n- Improve one\n- Improve two\n"
            "## Learnings by Agent\n### tester\n- Agent one\n- Agent two\n"
        )
        items = extract_knowledge(body, ctx)
        assert len(items) == 6
        assert {(i.source_story, i.source_repo) for i in items} == {("PROJ-001", "api-service")}
        assert [i.author for i in items] == ["swarm-cli"] * 4 + ["tester"] * 2

    def test_deterministic(self, ctx):
        first = [i.to_header() for i in extract_knowledge(RETRO_BODY, ctx)]
        second = [i.to_header() for i in extract_knowledge(RETRO_BODY, ctx)]
        assert first == second

    def test_empty_body(self, ctx):
        assert extract_knowledge("", ctx) == []

    def test_shared_snapshot_collides(self, ctx):
        # The pipeline does not coordinate concurrent callers: two runs
        # fed the same snapshot mint the same IDs.
        ctx.existing_ids = ["K-001"]
        first = extract_knowledge("## S\n- one learning\n", ctx)
        second = extract_knowledge("## S\n- another learning\n", ctx)
        assert first[0].id == second[0].id == "K-002"

    def test_rescanned_snapshot_does_not_collide(self, ctx):
        first = extract_knowledge("## S\n- one learning\n", ctx)
        ctx.existing_ids = ctx.existing_ids + [i.id for i in first]
        second = extract_knowledge("## S\n- another learning\n", ctx)
        assert second[0].id == "K-002"
