from __future__ import annotations

import json

import httpx
import pytest

from reposync import RepoSync, RepoSyncConfig, UrlValidationError
from reposync.auth.base import Credential
from reposync.auth.resolvers.static import StaticCredentialStore
from reposync.contracts.sync import ChangeAction
from tests.fakes.messenger import RecordingCacheInvalidator, RecordingMessenger

WIDGET_URL = "https://github.com/acme/widget"


def _github_handler(issues: dict[str, int]):
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.removeprefix("/repos/")
        if name not in issues:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(
            200,
            json={
                "full_name": name,
                "name": name.split("/")[-1],
                "description": "A widget",
                "open_issues_count": issues[name],
                "html_url": f"https://github.com/{name}",
            },
        )

    return handler


def _sdk(
    config: RepoSyncConfig,
    issues: dict[str, int],
    *,
    messenger: RecordingMessenger | None = None,
    cache: RecordingCacheInvalidator | None = None,
) -> RepoSync:
    return RepoSync.from_config(
        config,
        messenger=messenger or RecordingMessenger(),
        credentials=StaticCredentialStore({"github": Credential(token="t")}),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(_github_handler(issues))),
        cache_invalidator=cache,
    )


@pytest.mark.asyncio
async def test_submit_urls_declares_and_reconciles(sample_config: RepoSyncConfig) -> None:
    messenger = RecordingMessenger()
    async with _sdk(sample_config, {"acme/widget": 3}, messenger=messenger) as sdk:
        result = await sdk.submit_urls("U", [WIDGET_URL, "  "])

    assert result.count(ChangeAction.CREATED) == 1
    assert json.loads(sample_config.declarations_path.read_text(encoding="utf-8")) == {"owners": {"U": [WIDGET_URL]}}
    stored = json.loads(sample_config.store_path.read_text(encoding="utf-8"))
    assert [record["key"] for record in stored["records"]] == ["acme/widget"]
    assert messenger.statuses == [
        "The repository named widget has been created (https://github.com/acme/widget). "
        "The repository is owned by U."
    ]


@pytest.mark.asyncio
async def test_submit_urls_rejects_invalid_without_declaring(sample_config: RepoSyncConfig) -> None:
    async with _sdk(sample_config, {}) as sdk:
        with pytest.raises(UrlValidationError, match="was not found"):
            await sdk.submit_urls("U", [WIDGET_URL])
        assert not await sdk.has_owner("U")

    assert not sample_config.declarations_path.exists()


@pytest.mark.asyncio
async def test_has_records_covers_owners_dropped_from_declarations(sample_config: RepoSyncConfig) -> None:
    async with _sdk(sample_config, {"acme/widget": 3}) as sdk:
        await sdk.submit_urls("U", [WIDGET_URL])
    sample_config.declarations_path.write_text(json.dumps({"owners": {}}), encoding="utf-8")

    async with _sdk(sample_config, {"acme/widget": 3}) as sdk:
        assert not await sdk.has_owner("U")
        assert await sdk.has_records("U")
        assert not await sdk.has_records("V")
        result = await sdk.reconcile_one("U")

    assert result.count(ChangeAction.DELETED) == 1


@pytest.mark.asyncio
async def test_reconcile_all_picks_up_remote_changes(sample_config: RepoSyncConfig) -> None:
    sample_config.declarations_path.write_text(json.dumps({"owners": {"U": [WIDGET_URL]}}), encoding="utf-8")
    cache = RecordingCacheInvalidator()

    async with _sdk(sample_config, {"acme/widget": 3}, cache=cache) as sdk:
        first = await sdk.reconcile_all()
    async with _sdk(sample_config, {"acme/widget": 4}, cache=cache) as sdk:
        preview = await sdk.reconcile_all(dry_run=True)
        second = await sdk.reconcile_all()

    assert first.total(ChangeAction.CREATED) == 1
    assert preview.total(ChangeAction.UPDATED) == 1
    assert second.total(ChangeAction.UPDATED) == 1
    stored = json.loads(sample_config.store_path.read_text(encoding="utf-8"))
    assert stored["records"][0]["open_issue_count"] == 4
    assert cache.calls == [["reposync"], ["reposync"]]


@pytest.mark.asyncio
async def test_validation_helpers(sample_config: RepoSyncConfig) -> None:
    async with _sdk(sample_config, {"acme/widget": 0}) as sdk:
        assert sdk.enabled_providers() == ["github"]
        assert sdk.validate_help_text() == "https://github.com/vendor/name"
        assert await sdk.validate_urls([WIDGET_URL], "U") == ""
        assert await sdk.validate_urls(["nope"], "U") == "The repository url nope is not valid."


@pytest.mark.asyncio
async def test_injected_http_client_is_not_closed(sample_config: RepoSyncConfig) -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(_github_handler({})))
    sdk = RepoSync.from_config(sample_config, http_client=client)

    await sdk.aclose()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_http_client_is_closed(sample_config: RepoSyncConfig) -> None:
    sdk = RepoSync.from_config(sample_config, credentials=StaticCredentialStore())
    client = sdk._http_client

    await sdk.aclose()

    assert client is not None and client.is_closed
