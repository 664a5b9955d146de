"""Tests for apispec.py — local OpenAPI document explorer."""

import json

import pytest

from weeek_cli import apispec
from weeek_cli.exceptions import CliError

SPEC = {
    "tags": [{"name": "Tasks"}, {"name": "Boards"}],
    "paths": {
        "/tm/tasks": {
            "get": {"tags": ["Tasks"], "summary": "List tasks"},
            "post": {"tags": ["Tasks"]},
            "parameters": [{"name": "shared"}],
        },
        "/tm/boards": {"get": {"tags": ["Boards", "Workspace"], "summary": "List boards"}},
    },
}


class TestLoadSpec:
    def test_missing_file(self, tmp_path):
        with pytest.raises(CliError, match="Could not read"):
            apispec.load_spec(str(tmp_path / "weeek_spec.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "spec.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(CliError):
            apispec.load_spec(str(path))

    def test_reads_document(self, tmp_path):
        path = tmp_path / "spec.json"
        path.write_text(json.dumps(SPEC), encoding="utf-8")
        assert apispec.load_spec(str(path))["tags"][0]["name"] == "Tasks"


class TestExplore:
    def test_list_tags_merges_declared_and_used(self):
        assert apispec.list_tags(SPEC) == ["Boards", "Tasks", "Workspace"]

    def test_list_endpoints(self):
        assert apispec.list_endpoints(SPEC, "Tasks") == [
            {"path": "/tm/tasks", "method": "GET", "summary": "List tasks"},
            {"path": "/tm/tasks", "method": "POST", "summary": "No summary"},
        ]

    def test_list_endpoints_unknown_tag(self):
        assert apispec.list_endpoints(SPEC, "Nope") == []

    def test_describe_endpoint_normalizes_path(self):
        detail = apispec.describe_endpoint(SPEC, "get", "tm/boards")
        assert detail["method"] == "GET"
        assert detail["path"] == "/tm/boards"
        assert detail["summary"] == "List boards"
        assert detail["parameters"] == []

    def test_describe_unknown_path(self):
        with pytest.raises(CliError, match="Path not found"):
            apispec.describe_endpoint(SPEC, "GET", "/nope")

    def test_describe_unknown_method(self):
        with pytest.raises(CliError, match="Method DELETE not found"):
            apispec.describe_endpoint(SPEC, "delete", "/tm/tasks")
