"""Tests for ghrel.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghrel.core.config import (
    CONFIG_FILE_NAME,
    VERSION_ENV_VAR,
    ReleaseConfiguration,
    find_config,
    load_config,
    resolve_version,
)
from ghrel.core.result import Err, Ok


class TestDefaults:
    def test_gates_enabled_by_default(self) -> None:
        config = ReleaseConfiguration()
        assert config.only_from_master is True
        assert config.fail_on_uncommitted_changes is True
        assert dict(config.artifacts) == {}

    def test_other_defaults(self) -> None:
        config = ReleaseConfiguration()
        assert config.api_url == "https://api.github.com"
        assert config.remote == "origin"
        assert config.main_branch == "master"
        assert config.token_env == "GITHUB_TOKEN"
        assert config.timeout_seconds == 60.0
        assert config.legacy_branch_name is False

    def test_frozen(self) -> None:
        config = ReleaseConfiguration()
        with pytest.raises(AttributeError):
            config.only_from_master = False  # type: ignore[misc]

    def test_releases_endpoint(self) -> None:
        assert ReleaseConfiguration().releases_endpoint is None
        config = ReleaseConfiguration(repository="acme/widget", api_url="https://x.test/")
        assert config.releases_endpoint == "https://x.test/repos/acme/widget/releases"


class TestFromDict:
    def test_full(self) -> None:
        config = ReleaseConfiguration.from_dict(
            {
                "release": {
                    "repository": "acme/widget",
                    "version": "1.2.3",
                    "only_from_master": False,
                    "fail_on_uncommitted_changes": False,
                    "remote": "upstream",
                    "main_branch": "main",
                    "timeout_seconds": 5,
                    "legacy_branch_name": True,
                },
                "artifacts": {"app": "build/app.jar"},
            }
        )
        assert config.repository == "acme/widget"
        assert config.version == "1.2.3"
        assert config.only_from_master is False
        assert config.fail_on_uncommitted_changes is False
        assert config.remote == "upstream"
        assert config.main_branch == "main"
        assert config.timeout_seconds == 5.0
        assert config.legacy_branch_name is True
        assert dict(config.artifacts) == {"app": Path("build/app.jar")}

    def test_empty(self) -> None:
        assert ReleaseConfiguration.from_dict({}) == ReleaseConfiguration()

    @pytest.mark.parametrize("slug", ["widget", "acme/", "/widget", "acme/widget/extra"])
    def test_invalid_repository(self, slug: str) -> None:
        with pytest.raises(ValueError, match="owner/name"):
            ReleaseConfiguration.from_dict({"release": {"repository": slug}})

    def test_invalid_artifact(self) -> None:
        with pytest.raises(ValueError, match="artifact 'app'"):
            ReleaseConfiguration.from_dict({"artifacts": {"app": 3}})

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError, match="timeout_seconds"):
            ReleaseConfiguration.from_dict({"release": {"timeout_seconds": 0}})

    @pytest.mark.parametrize(
        ("key", "value", "match"),
        [
            ("only_from_master", "false", "only_from_master must be true or false"),
            ("fail_on_uncommitted_changes", 0, "fail_on_uncommitted_changes"),
            ("version", 1.0, "version must be a string"),
            ("repository", ["acme", "widget"], "repository must be a string"),
            ("timeout_seconds", "30", "timeout_seconds must be a number"),
            ("timeout_seconds", True, "timeout_seconds must be a number"),
        ],
    )
    def test_wrong_type_is_rejected(self, key: str, value: object, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            ReleaseConfiguration.from_dict({"release": {key: value}})

    def test_release_must_be_a_table(self) -> None:
        with pytest.raises(ValueError, match=r"\[release\] must be a table"):
            ReleaseConfiguration.from_dict({"release": "acme/widget"})


class TestLoadConfig:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text(
            '[release]\nrepository = "acme/widget"\n\n[artifacts]\napp = "app.jar"\n',
            encoding="utf-8",
        )

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.repository == "acme/widget"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / CONFIG_FILE_NAME)

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text('[release]\nrepository = "nope"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_quoted_boolean_is_a_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text('[release]\nonly_from_master = "false"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "only_from_master" in result.error.message


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(nested) == Ok((tmp_path / CONFIG_FILE_NAME).resolve())

    def test_not_found(self, tmp_path: Path) -> None:
        assert isinstance(find_config(tmp_path), Err)


class TestResolveVersion:
    def test_override_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(VERSION_ENV_VAR, "2.0.0")
        config = ReleaseConfiguration(version="1.0.0")
        assert resolve_version(config, "3.0.0") == "3.0.0"

    def test_env_before_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(VERSION_ENV_VAR, "2.0.0")
        assert resolve_version(ReleaseConfiguration(version="1.0.0")) == "2.0.0"

    def test_config_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(VERSION_ENV_VAR, raising=False)
        assert resolve_version(ReleaseConfiguration(version="1.0.0")) == "1.0.0"

    def test_blank_values_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(VERSION_ENV_VAR, "  ")
        assert resolve_version(ReleaseConfiguration(), " ") is None
