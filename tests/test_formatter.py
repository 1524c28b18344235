"""Tests for formatter: export_json, parse_json, render_markdown."""

import json

import pytest

from prdgen.utils.formatter import export_json, parse_json, render_markdown


# --- export_json / parse_json ---

class TestExportJson:
    def test_round_trip(self, sample_prd):
        assert parse_json(export_json(sample_prd)) == sample_prd

    def test_round_trip_after_edits(self, sample_prd):
        from prdgen import editor

        prd = editor.add_persona(sample_prd)
        prd = editor.add_nested_item(prd, "features", 1, "userStories")
        prd = editor.update_field(prd, "features[1].priority", "Medium")
        assert parse_json(export_json(prd)) == prd

    def test_key_order_is_canonical(self, sample_prd):
        shuffled = dict(reversed(list(sample_prd.items())))
        shuffled["features"] = [dict(reversed(list(f.items()))) for f in sample_prd["features"]]
        data = json.loads(export_json(shuffled))
        assert list(data) == [
            "title",
            "introduction",
            "userPersonas",
            "features",
            "nonFunctionalRequirements",
            "successMetrics",
        ]
        assert list(data["features"][0]) == ["featureName", "description", "userStories", "priority"]
        assert list(data["introduction"]) == ["problemStatement", "solution", "targetAudience"]

    def test_same_document_same_text(self, sample_prd):
        shuffled = dict(reversed(list(sample_prd.items())))
        assert export_json(shuffled) == export_json(sample_prd)

    def test_priority_written_as_label(self, sample_prd):
        assert '"priority": "High"' in export_json(sample_prd)

    def test_two_space_indent(self, sample_prd):
        assert export_json(sample_prd).startswith('{\n  "title": "SeedSwap"')

    def test_non_ascii_preserved(self, sample_prd):
        sample_prd["title"] = "Jardín ✿"
        text = export_json(sample_prd)
        assert "Jardín ✿" in text
        assert parse_json(text)["title"] == "Jardín ✿"


class TestParseJson:
    def test_invalid_json_raises(self):
        with pytest.raises(ValueError):
            parse_json("not valid json {{{")

    def test_incomplete_document_raises(self):
        with pytest.raises(ValueError, match="missing required fields"):
            parse_json('{"title": "x"}')


# --- render_markdown ---

class TestRenderMarkdown:
    def test_title_heading(self, sample_prd):
        md = render_markdown(sample_prd)
        assert md.startswith("# SeedSwap — Product Requirements Document")

    def test_introduction(self, sample_prd):
        md = render_markdown(sample_prd)
        assert "### Problem Statement" in md
        assert "A local marketplace for trading seeds and produce." in md

    def test_personas(self, sample_prd):
        md = render_markdown(sample_prd)
        assert "### Maria" in md
        assert "- Grow vegetables" in md
        assert "- Packets are too large" in md

    def test_features_summary_table(self, sample_prd):
        md = render_markdown(sample_prd)
        assert "| Seed Listings | High |" in md
        assert "| Trade Chat | Low |" in md

    def test_user_stories_italic(self, sample_prd):
        md = render_markdown(sample_prd)
        assert "- *As a gardener, I want to list my spare seeds" in md

    def test_feature_without_stories_omits_heading(self, sample_prd):
        sample_prd["features"] = sample_prd["features"][1:]
        md = render_markdown(sample_prd)
        assert "**User Stories:**" not in md

    def test_requirements_and_metrics(self, sample_prd):
        md = render_markdown(sample_prd)
        assert "- **Performance:** Listings load in under 2 seconds." in md
        assert "- 40% monthly retention" in md

    def test_empty_sections_omitted(self, sample_prd):
        for key in ("userPersonas", "features", "nonFunctionalRequirements", "successMetrics"):
            sample_prd[key] = []
        md = render_markdown(sample_prd)
        assert "## User Personas" not in md
        assert "## Success Metrics" not in md
        assert "## Introduction" in md

    def test_blank_title_fallback(self, sample_prd):
        sample_prd["title"] = ""
        assert "Untitled Product" in render_markdown(sample_prd)
