from __future__ import annotations

import json
from pathlib import Path

import pytest

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok
from ghrel.http.client import MockHttpClient
from ghrel.output.console import MockConsole
from ghrel.release.errors import (
    InvalidInput,
    NetworkError,
    PolicyViolation,
    RemoteApiError,
    VcsWriteError,
)
from ghrel.release.model import Artifact
from ghrel.services.publish import parse_release_response, publish
from ghrel.test._fakes import HEAD_SHA, FakeRepo

RELEASES_URL = "https://api.github.com/repos/acme/widget/releases"
ASSETS_URL = "https://api.github.com/repos/acme/widget/releases/42/assets"


@pytest.fixture(autouse=True)
def _no_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


def _config(**overrides: object) -> ReleaseConfiguration:
    values: dict[str, object] = {"repository": "acme/widget"}
    values.update(overrides)
    return ReleaseConfiguration(**values)  # type: ignore[arg-type]


def _artifact() -> Artifact:
    return Artifact(name="app", path=Path("build/app.jar"), content=b"\x00PK\x03\x04jar-bytes")


def _http_ok() -> MockHttpClient:
    http = MockHttpClient()
    http.respond("POST", RELEASES_URL, 201, json.dumps({"id": 42, "assets_url": ASSETS_URL}))
    http.respond("POST", ASSETS_URL, 201, "{}")
    return http


def _publish(repo: FakeRepo, http: MockHttpClient, **kwargs: object):
    params: dict[str, object] = {
        "config": _config(),
        "repo": repo,
        "http": http,
        "version": "1.2.3",
        "artifact": _artifact(),
        "console": MockConsole(),
    }
    params.update(kwargs)
    return publish(**params)  # type: ignore[arg-type]


def test_publish_happy_path() -> None:
    repo = FakeRepo()
    http = _http_ok()

    result = _publish(repo, http)

    assert isinstance(result, Ok)
    assert result.value.tag == "v1.2.3"
    assert result.value.commit == HEAD_SHA
    assert result.value.assets_url == ASSETS_URL
    assert repo.writes() == [
        ("create_annotated_tag", "v1.2.3", "Release v1.2.3"),
        ("push_tags", "origin"),
    ]


def test_release_request_body() -> None:
    http = _http_ok()
    _publish(FakeRepo(), http)

    create_calls = http.calls_to(RELEASES_URL)
    assert len(create_calls) == 1
    payload = json.loads(create_calls[0].body)
    assert payload == {
        "tag_name": "v1.2.3",
        "name": "v1.2.3",
        "target_commitish": HEAD_SHA,
        "body": "Release v1.2.3",
        "draft": False,
        "prerelease": False,
    }
    assert create_calls[0].headers["Content-Type"] == "application/json"


def test_exactly_one_upload_with_exact_bytes() -> None:
    http = _http_ok()
    _publish(FakeRepo(), http)

    uploads = http.calls_to(ASSETS_URL)
    assert len(uploads) == 1
    assert uploads[0].body == _artifact().content
    assert uploads[0].headers["Content-Type"] == "application/octet-stream"


def test_calls_happen_in_order() -> None:
    http = _http_ok()
    _publish(FakeRepo(), http)
    assert [c.url for c in http.calls] == [RELEASES_URL, ASSETS_URL]


@pytest.mark.parametrize("status", [200, 202, 400, 401, 404, 422, 500])
def test_non_201_aborts_before_tagging(status: int) -> None:
    repo = FakeRepo()
    http = MockHttpClient()
    http.respond("POST", RELEASES_URL, status, '{"message": "Validation Failed"}')

    result = _publish(repo, http)

    assert isinstance(result, Err)
    assert isinstance(result.error, RemoteApiError)
    assert result.error.status == status
    assert repo.writes() == []
    assert http.calls_to(ASSETS_URL) == []


def test_api_message_becomes_hint() -> None:
    http = MockHttpClient()
    http.respond("POST", RELEASES_URL, 422, '{"message": "Validation Failed"}')

    result = _publish(FakeRepo(), http)

    assert isinstance(result, Err)
    assert result.error.hint == "Validation Failed"


def test_missing_assets_url_is_malformed_response() -> None:
    repo = FakeRepo()
    http = MockHttpClient()
    http.respond("POST", RELEASES_URL, 201, '{"id": 42}')

    result = _publish(repo, http)

    assert isinstance(result, Err)
    assert isinstance(result.error, RemoteApiError)
    assert result.error.message == "malformed response"
    assert repo.writes() == []


def test_upload_failure_stops_before_tag() -> None:
    repo = FakeRepo()
    http = MockHttpClient()
    http.respond("POST", RELEASES_URL, 201, json.dumps({"assets_url": ASSETS_URL}))
    http.respond("POST", ASSETS_URL, 500, "boom")
    console = MockConsole()

    result = _publish(repo, http, console=console)

    assert isinstance(result, Err)
    assert isinstance(result.error, RemoteApiError)
    assert result.error.status == 500
    assert repo.writes() == []
    assert console.find("delete it before retrying")


def test_network_error_propagates() -> None:
    http = MockHttpClient()
    http.fail("POST", RELEASES_URL, "connection refused")

    result = _publish(FakeRepo(), http)

    assert isinstance(result, Err)
    assert isinstance(result.error, NetworkError)


def test_policy_violation_aborts_before_any_request() -> None:
    http = _http_ok()
    result = _publish(FakeRepo(branch="develop"), http)

    assert isinstance(result, Err)
    assert isinstance(result.error, PolicyViolation)
    assert http.calls == []


def test_tag_failure_skips_push() -> None:
    repo = FakeRepo(fail_tag=True)
    result = _publish(repo, _http_ok())

    assert isinstance(result, Err)
    assert isinstance(result.error, VcsWriteError)
    assert ("push_tags", "origin") not in repo.ops


def test_push_failure_is_remote_error() -> None:
    repo = FakeRepo(fail_push=True)
    result = _publish(repo, _http_ok(), config=_config(remote="upstream"))

    assert isinstance(result, Err)
    assert isinstance(result.error, RemoteApiError)
    assert repo.writes()[-1] == ("push_tags", "upstream")


def test_dry_run_has_no_side_effects() -> None:
    repo = FakeRepo()
    http = _http_ok()

    result = _publish(repo, http, dry_run=True)

    assert isinstance(result, Ok)
    assert result.value.dry_run is True
    assert result.value.assets_url is None
    assert http.calls == []
    assert repo.writes() == []


def test_missing_repository_is_invalid_input() -> None:
    result = _publish(FakeRepo(), _http_ok(), config=ReleaseConfiguration())

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidInput)


def test_token_is_sent_when_set(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "s3cret")
    http = _http_ok()

    _publish(FakeRepo(), http)

    assert all(c.headers["Authorization"] == "Bearer s3cret" for c in http.calls)


def test_no_authorization_header_without_token() -> None:
    http = _http_ok()
    _publish(FakeRepo(), http)
    assert all("Authorization" not in c.headers for c in http.calls)


def test_custom_api_url() -> None:
    http = MockHttpClient()
    url = "https://ghe.example.com/api/v3/repos/acme/widget/releases"
    http.respond("POST", url, 201, json.dumps({"assets_url": ASSETS_URL}))
    http.respond("POST", ASSETS_URL, 200, "{}")

    result = _publish(FakeRepo(), http, config=_config(api_url="https://ghe.example.com/api/v3/"))

    assert isinstance(result, Ok)


class TestParseReleaseResponse:
    def test_valid(self) -> None:
        result = parse_release_response(json.dumps({"id": 1, "assets_url": ASSETS_URL}))
        assert isinstance(result, Ok)
        assert result.value.assets_url == ASSETS_URL

    @pytest.mark.parametrize(
        "body",
        ["not json", "[]", "{}", '{"assets_url": 3}', '{"assets_url": "  "}'],
    )
    def test_malformed(self, body: str) -> None:
        result = parse_release_response(body)
        assert isinstance(result, Err)
        assert result.error.message == "malformed response"
