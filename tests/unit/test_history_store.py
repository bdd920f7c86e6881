"""Tests for the History Store — append-only deployment ledger."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lambdaforge.core import history_store
from lambdaforge.core.errors import NotFoundError, ParseError
from lambdaforge.models.history import DeploymentHistory, DeploymentRecord


def _record(version: str, package: str | None = None) -> DeploymentRecord:
    return DeploymentRecord(
        lambda_version=version,
        module_version="1.0.0",
        deployment_package=package,
        date="2026-10-19T10:00:00.000+0000",
        user="octocat",
    )


class TestHistoryPath:
    def test_replaces_json_extension(self):
        path = history_store.history_path_for(Path("/deploy/orders.json"))
        assert path == Path("/deploy/orders-history.json")

    def test_spec_without_extension(self):
        assert history_store.history_path_for(Path("orders")) == Path("orders-history.json")

    def test_custom_suffix(self):
        path = history_store.history_path_for(Path("orders.json"), ".deployments.json")
        assert path == Path("orders.deployments.json")


class TestAppend:
    def test_append_preserves_order(self):
        history = history_store.new_history(_record("1"))
        history = history_store.append(history, _record("2"))
        history = history_store.append(history, _record("3"))
        assert history.deployed_versions() == ["1", "2", "3"]

    def test_append_does_not_touch_original(self):
        original = history_store.new_history(_record("1"))
        history_store.append(original, _record("2"))
        assert original.deployed_versions() == ["1"]

    def test_new_history_has_no_aliases(self):
        assert history_store.new_history(_record("1")).aliases == {}


class TestPointAlias:
    def test_created_alias_starts_fresh(self):
        history = history_store.new_history(_record("1"))
        history = history_store.point_alias(history, "dev", "1", created=True)
        assert history.aliases["dev"].current == "1"
        assert history.aliases["dev"].versions == ["1"]

    def test_created_alias_replaces_stale_local_entry(self):
        history = DeploymentHistory.model_validate(
            {"versions": [], "aliases": {"dev": {"current": "1", "versions": ["1"]}}}
        )
        history = history_store.point_alias(history, "dev", "4", created=True)
        assert history.aliases["dev"].versions == ["4"]

    def test_updated_alias_appends_new_version(self):
        history = history_store.point_alias(DeploymentHistory(), "prod", "1", created=True)
        history = history_store.point_alias(history, "prod", "2", created=False)
        assert history.aliases["prod"].current == "2"
        assert history.aliases["prod"].versions == ["1", "2"]

    def test_updated_alias_never_duplicates(self):
        history = history_store.point_alias(DeploymentHistory(), "prod", "1", created=True)
        history = history_store.point_alias(history, "prod", "2", created=False)
        history = history_store.point_alias(history, "prod", "1", created=False)
        assert history.aliases["prod"].current == "1"
        assert history.aliases["prod"].versions == ["1", "2"]

    def test_update_of_untracked_alias_starts_entry(self):
        history = history_store.point_alias(DeploymentHistory(), "qa", "5", created=False)
        assert history.aliases["qa"].versions == ["5"]

    def test_other_aliases_untouched(self):
        history = history_store.point_alias(DeploymentHistory(), "prod", "1", created=True)
        history = history_store.point_alias(history, "dev", "2", created=True)
        assert history.aliases["prod"].current == "1"


class TestLoadSave:
    def test_missing_history(self, tmp_path: Path):
        with pytest.raises(NotFoundError):
            history_store.load_history(tmp_path / "orders-history.json")

    def test_alias_invariant_violation_is_parse_error(self, tmp_path: Path, write_json):
        path = write_json(
            tmp_path / "h.json",
            {"versions": [], "aliases": {"prod": {"current": "9", "versions": ["1"]}}},
        )
        with pytest.raises(ParseError):
            history_store.load_history(path)

    def test_writes_camel_case_document(self, tmp_path: Path):
        path = tmp_path / "orders-history.json"
        history = history_store.append(
            history_store.new_history(_record("1")), _record("2", "orders_2.zip")
        )
        history = history_store.point_alias(history, "prod", "2", created=True)
        history_store.save_history(path, history)

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["versions"][0] == {
            "lambdaVersion": "1",
            "moduleVersion": "1.0.0",
            "date": "2026-10-19T10:00:00.000+0000",
            "user": "octocat",
        }
        assert document["versions"][1]["deploymentPackage"] == "orders_2.zip"
        assert document["aliases"] == {"prod": {"current": "2", "versions": ["2"]}}

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "orders-history.json"
        history = history_store.point_alias(
            history_store.new_history(_record("1")), "prod", "1", created=True
        )
        history_store.save_history(path, history)
        assert history_store.load_history(path) == history
