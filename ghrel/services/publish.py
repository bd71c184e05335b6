"""Publish a GitHub release for the current commit.

The workflow is strictly sequential and fail-fast:

    validate -> resolve HEAD -> create release -> upload asset -> tag -> push tag

There is no rollback. If a step after release creation fails, the remote
release stays in place and the operator is warned to remove it before
retrying.
"""

from __future__ import annotations

import json

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok, Result
from ghrel.core.structured import as_str_dict, get_str
from ghrel.http.client import HttpClient
from ghrel.output.console import ConsoleProtocol, Style
from ghrel.release.contracts import VersionControl
from ghrel.release.errors import InvalidInput, ReleaseError, RemoteApiError
from ghrel.release.model import Artifact, PublishReport, ReleaseRequest, ReleaseResponse
from ghrel.services.preflight import validate

_RELEASE_CREATED = 201
_GITHUB_JSON = "application/vnd.github+json"


def publish(
    *,
    config: ReleaseConfiguration,
    repo: VersionControl,
    http: HttpClient,
    version: str,
    artifact: Artifact,
    console: ConsoleProtocol,
    dry_run: bool = False,
    skip_checks: bool = False,
) -> Result[PublishReport, ReleaseError]:
    """Create the release, attach the artifact, then tag and push.

    Args:
        config: Release configuration
        repo: Version control collaborator
        http: HTTP gateway
        version: Version string without the ``v`` prefix
        artifact: Build artifact, already read
        console: Progress output
        dry_run: Stop after building the request; no network, no tag
        skip_checks: The pre-flight gate already ran in this invocation

    Returns:
        Ok(PublishReport) on success, Err on the first failing step
    """
    version = version.strip()
    if not version:
        return Err(InvalidInput(message="release version is empty"))

    endpoint = config.releases_endpoint
    if endpoint is None:
        return Err(
            InvalidInput(
                message="no GitHub repository configured",
                hint="Set repository = \"owner/name\" in the [release] table",
            )
        )

    if not skip_checks:
        gate = validate(config, repo)
        if isinstance(gate, Err):
            return gate

    commit = repo.head_commit()
    if isinstance(commit, Err):
        return commit

    request = ReleaseRequest.for_version(version, commit.value)
    console.info(f"Publishing a release with version {request.tag_name} on commit {commit.value}")

    if dry_run:
        console.print(f"POST {endpoint}", Style.DIM)
        console.print(json.dumps(request.to_payload(), indent=2), Style.DIM)
        console.print(f"POST <assets_url> ({artifact.size} bytes from {artifact.path})", Style.DIM)
        console.print(f"git tag -a {request.tag_name} && git push {config.remote} --tags", Style.DIM)
        return Ok(
            PublishReport(tag=request.tag_name, commit=commit.value, assets_url=None, dry_run=True)
        )

    created = create_release(config=config, http=http, endpoint=endpoint, request=request)
    if isinstance(created, Err):
        return created
    console.success(f"GitHub release {request.tag_name} created")

    uploaded = upload_asset(
        config=config,
        http=http,
        assets_url=created.value.assets_url,
        artifact=artifact,
    )
    if isinstance(uploaded, Err):
        _warn_release_left_behind(console, request.tag_name)
        return uploaded
    console.success(f"uploaded {artifact.name} ({artifact.size} bytes)")

    console.info("Tagging the git commit")
    tagged = repo.create_annotated_tag(request.tag_name, request.body)
    if isinstance(tagged, Err):
        _warn_release_left_behind(console, request.tag_name)
        return tagged

    pushed = repo.push_tags(config.remote)
    if isinstance(pushed, Err):
        _warn_release_left_behind(console, request.tag_name)
        return pushed
    console.success(f"git tag {request.tag_name} pushed to {config.remote}")

    return Ok(
        PublishReport(
            tag=request.tag_name,
            commit=commit.value,
            assets_url=created.value.assets_url,
        )
    )


def create_release(
    *,
    config: ReleaseConfiguration,
    http: HttpClient,
    endpoint: str,
    request: ReleaseRequest,
) -> Result[ReleaseResponse, ReleaseError]:
    """POST the release object; anything but 201 is an error."""
    body = json.dumps(request.to_payload()).encode("utf-8")
    response = http.request(
        endpoint,
        "POST",
        body,
        _headers(config, content_type="application/json"),
    )
    if isinstance(response, Err):
        return response

    if response.value.status != _RELEASE_CREATED:
        return Err(
            RemoteApiError(
                message="unexpected status while creating the GitHub release",
                status=response.value.status,
                hint=_api_message(response.value.body),
            )
        )

    return parse_release_response(response.value.body)


def parse_release_response(body: str) -> Result[ReleaseResponse, RemoteApiError]:
    """Extract ``assets_url`` from the create-release reply."""
    try:
        obj: object = json.loads(body)
    except json.JSONDecodeError:
        return Err(RemoteApiError(message="malformed response", hint="reply is not JSON"))

    data = as_str_dict(obj)
    if data is None:
        return Err(RemoteApiError(message="malformed response", hint="reply is not an object"))

    assets_url = get_str(data, "assets_url")
    if assets_url is None:
        return Err(RemoteApiError(message="malformed response", hint="missing assets_url"))

    return Ok(ReleaseResponse(assets_url=assets_url))


def upload_asset(
    *,
    config: ReleaseConfiguration,
    http: HttpClient,
    assets_url: str,
    artifact: Artifact,
) -> Result[None, ReleaseError]:
    """POST the raw artifact bytes; the reply must be 2xx."""
    response = http.request(
        assets_url,
        "POST",
        artifact.content,
        _headers(config, content_type="application/octet-stream"),
    )
    if isinstance(response, Err):
        return response

    if not response.value.is_success:
        return Err(
            RemoteApiError(
                message=f"unexpected status while uploading {artifact.name}",
                status=response.value.status,
                hint=_api_message(response.value.body),
            )
        )
    return Ok(None)


def _headers(config: ReleaseConfiguration, *, content_type: str) -> dict[str, str]:
    headers = {"Accept": _GITHUB_JSON, "Content-Type": content_type}
    token = config.token()
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _api_message(body: str) -> str | None:
    """GitHub error replies carry a ``message`` field."""
    try:
        obj: object = json.loads(body)
    except json.JSONDecodeError:
        return body.strip()[:200] or None
    data = as_str_dict(obj)
    if data is None:
        return None
    return get_str(data, "message")


def _warn_release_left_behind(console: ConsoleProtocol, tag: str) -> None:
    console.warning(
        f"GitHub release {tag} was already created; delete it before retrying the publish"
    )
