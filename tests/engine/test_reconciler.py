from __future__ import annotations

import asyncio

import pytest

from reposync.contracts.exceptions import FetchError
from reposync.contracts.repository import RepositoryMetadata
from reposync.contracts.sync import ChangeAction
from reposync.engine.hasher import compute_content_hash
from reposync.engine.reconciler import Reconciler
from reposync.storage import InMemoryOwnerDirectory, InMemoryRepositoryStore
from tests.fakes.provider import FakeProvider, make_metadata
from tests.fakes.store import FailingRepositoryStore

WIDGET_URL = "https://github.com/acme/widget"


def _github(responses: dict[str, RepositoryMetadata | FetchError]) -> FakeProvider:
    return FakeProvider(provider_id="github", prefix="https://github.com/", responses=responses)


@pytest.mark.asyncio
async def test_reconcile_creates_updates_and_deletes_across_runs(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    provider = _github({WIDGET_URL: widget})
    reconciler = Reconciler(store, directory)

    first = await reconciler.reconcile("U", [provider])
    assert [event.action for event in first.events] == [ChangeAction.CREATED]
    records = await store.find_all_by_owner("U")
    assert len(records) == 1
    assert records[0].key == "acme/widget"
    assert records[0].open_issue_count == 3
    assert records[0].content_hash == compute_content_hash(widget)

    second = await reconciler.reconcile("U", [provider])
    assert second.events == []
    assert second.planned == []

    provider.responses[WIDGET_URL] = widget.model_copy(update={"open_issue_count": 4})
    third = await reconciler.reconcile("U", [provider])
    assert [event.action for event in third.events] == [ChangeAction.UPDATED]
    updated = await store.find_all_by_owner("U")
    assert updated[0].open_issue_count == 4
    assert updated[0].record_id == records[0].record_id

    await directory.declare("U", [])
    fourth = await reconciler.reconcile("U", [provider])
    assert [event.action for event in fourth.events] == [ChangeAction.DELETED]
    assert await store.find_all_by_owner("U") == []


@pytest.mark.asyncio
async def test_reconcile_twice_without_remote_change_is_idempotent(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    other = make_metadata("acme/gadget", open_issue_count=1)
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL, other.url]})
    provider = _github({WIDGET_URL: widget, other.url: other})
    reconciler = Reconciler(store, directory)

    await reconciler.reconcile("U", [provider])
    before = store.records()
    again = await reconciler.reconcile("U", [provider])

    assert again.events == []
    assert again.planned == []
    assert store.records() == before


@pytest.mark.asyncio
async def test_reconcile_deletes_only_records_for_removed_urls(widget: RepositoryMetadata) -> None:
    gadget = make_metadata("acme/gadget")
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL, gadget.url]})
    provider = _github({WIDGET_URL: widget, gadget.url: gadget})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [provider])

    await directory.declare("U", [WIDGET_URL])
    result = await reconciler.reconcile("U", [provider])

    assert [(event.action, event.record.key) for event in result.events] == [(ChangeAction.DELETED, "acme/gadget")]
    assert [record.key for record in await store.find_all_by_owner("U")] == ["acme/widget"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value",
    [("label", "Widget 2"), ("description", "Changed"), ("open_issue_count", 9), ("url", "https://github.com/acme/w")],
)
async def test_reconcile_updates_when_any_hashed_field_changes(
    widget: RepositoryMetadata, field: str, value: object
) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    provider = _github({WIDGET_URL: widget})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [provider])

    provider.responses[WIDGET_URL] = widget.model_copy(update={field: value})
    result = await reconciler.reconcile("U", [provider])

    assert [event.action for event in result.events] == [ChangeAction.UPDATED]
    assert getattr(result.events[0].record, field) == value


@pytest.mark.asyncio
async def test_reconcile_failed_fetch_deletes_previous_record(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    provider = _github({WIDGET_URL: widget})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [provider])

    provider.responses[WIDGET_URL] = FetchError("boom", kind="unreachable", provider_id="github", url=WIDGET_URL)
    result = await reconciler.reconcile("U", [provider])

    assert result.fetched == 0
    assert [event.action for event in result.events] == [ChangeAction.DELETED]


@pytest.mark.asyncio
async def test_reconcile_dry_run_plans_without_persisting(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    provider = _github({WIDGET_URL: widget})
    reconciler = Reconciler(store, directory)

    preview = await reconciler.reconcile("U", [provider], dry_run=True)

    assert preview.dry_run is True
    assert preview.events == []
    assert [change.action for change in preview.planned] == [ChangeAction.CREATED]
    assert store.records() == []

    applied = await reconciler.reconcile("U", [provider])
    assert [change.action for change in applied.planned] == [change.action for change in preview.planned]


@pytest.mark.asyncio
async def test_reconcile_dry_run_reports_deletion_but_keeps_record(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [_github({WIDGET_URL: widget})])

    await directory.declare("U", [])
    preview = await reconciler.reconcile("U", [_github({})], dry_run=True)

    assert [change.action for change in preview.planned] == [ChangeAction.DELETED]
    assert preview.events == []
    assert len(store.records()) == 1


@pytest.mark.asyncio
async def test_reconcile_never_touches_other_owners(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL], "V": [WIDGET_URL]})
    provider = _github({WIDGET_URL: widget})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [provider])
    await reconciler.reconcile("V", [provider])

    await directory.declare("U", [])
    await reconciler.reconcile("U", [provider])

    assert await store.find_all_by_owner("U") == []
    assert [record.owner_id for record in await store.find_all_by_owner("V")] == ["V"]


@pytest.mark.asyncio
async def test_reconcile_provider_independence(widget: RepositoryMetadata) -> None:
    manifest_url = "https://example.com/acme/widget.yml"
    from_manifest = make_metadata("acme/widget", provider_id="yml_remote", url=manifest_url)
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL, manifest_url]})
    github = _github({WIDGET_URL: widget})
    manifest = FakeProvider(provider_id="yml_remote", prefix="https://example.com/", responses={manifest_url: from_manifest})
    reconciler = Reconciler(store, directory)

    await reconciler.reconcile("U", [github, manifest])
    records = await store.find_all_by_owner("U")
    assert [(record.key, record.source_provider_id) for record in records] == [("acme/widget", "yml_remote")]

    result = await reconciler.reconcile("U", [github])

    assert {(event.action, event.record.source_provider_id) for event in result.events} == {
        (ChangeAction.CREATED, "github"),
        (ChangeAction.DELETED, "yml_remote"),
    }


@pytest.mark.asyncio
async def test_reconcile_later_url_wins_on_key_collision() -> None:
    first = make_metadata("acme/widget", label="first", url="https://github.com/acme/widget")
    second = make_metadata("acme/widget", label="second", url="https://github.com/acme/widget.git")
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [first.url, second.url]})
    reconciler = Reconciler(store, directory)

    result = await reconciler.reconcile("U", [_github({first.url: first, second.url: second})])

    assert result.fetched == 1
    assert [record.label for record in store.records()] == ["second"]


@pytest.mark.asyncio
async def test_reconcile_skips_blank_and_unmatched_urls(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": ["", "   ", "https://bitbucket.org/acme/widget", f"  {WIDGET_URL}  "]})
    provider = _github({WIDGET_URL: widget})

    result = await Reconciler(store, directory).reconcile("U", [provider])

    assert provider.fetched == [WIDGET_URL]
    assert result.count(ChangeAction.CREATED) == 1


@pytest.mark.asyncio
async def test_reconcile_without_providers_deletes_everything(widget: RepositoryMetadata) -> None:
    store = InMemoryRepositoryStore()
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})
    reconciler = Reconciler(store, directory)
    await reconciler.reconcile("U", [_github({WIDGET_URL: widget})])

    result = await reconciler.reconcile("U", [])

    assert result.count(ChangeAction.DELETED) == 1
    assert store.records() == []


@pytest.mark.asyncio
async def test_reconcile_storage_failure_is_reported_per_record(widget: RepositoryMetadata) -> None:
    gadget = make_metadata("acme/gadget")
    store = FailingRepositoryStore(fail_keys={"acme/gadget"})
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL, gadget.url]})

    result = await Reconciler(store, directory).reconcile("U", [_github({WIDGET_URL: widget, gadget.url: gadget})])

    assert not result.succeeded
    assert len(result.errors) == 1
    assert result.errors[0].startswith("acme/gadget: ")
    assert [record.key for record in store.records()] == ["acme/widget"]
    assert [event.record.key for event in result.events] == ["acme/widget"]
    assert result.count(ChangeAction.CREATED) == 1
    assert [change.key for change in result.planned] == ["acme/widget"]


@pytest.mark.asyncio
async def test_reconcile_owner_listing_failure_skips_delete_phase(widget: RepositoryMetadata) -> None:
    store = FailingRepositoryStore(fail_owner_listing=True)
    directory = InMemoryOwnerDirectory({"U": [WIDGET_URL]})

    result = await Reconciler(store, directory).reconcile("U", [_github({WIDGET_URL: widget})])

    assert result.count(ChangeAction.CREATED) == 1
    assert result.count(ChangeAction.DELETED) == 0
    assert result.errors == ["*: listing failed"]


@pytest.mark.asyncio
async def test_collect_limits_concurrent_fetches(widget: RepositoryMetadata) -> None:
    active = 0
    peak = 0

    class SlowProvider(FakeProvider):
        async def get_repo(self, url: str) -> dict[str, RepositoryMetadata]:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            active -= 1
            return await super().get_repo(url)

    urls = [f"https://github.com/acme/repo{index}" for index in range(6)]
    provider = SlowProvider(responses={url: make_metadata(url.removeprefix("https://github.com/")) for url in urls})
    reconciler = Reconciler(InMemoryRepositoryStore(), InMemoryOwnerDirectory(), max_concurrent=2)

    fresh = await reconciler.collect([provider], urls)

    assert len(fresh) == 6
    assert peak <= 2
