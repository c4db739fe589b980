import asyncio
import threading

import httpx

from targettap.cdp.models import DiscoveredTarget
from targettap.config import DiscoveryConfig
from targettap.services.cache import SENTINEL_NAME
from targettap.services.provider import TargetsProvider
from targettap.services.reporting import EVENT_LIST, EVENT_REFRESH

CONFIG = DiscoveryConfig(hostname="devbox", port=9333)


def make_provider(icon_dir, handler, reporter) -> TargetsProvider:
    return TargetsProvider(
        config_source=lambda: CONFIG,
        icon_dir=icon_dir,
        reporter=reporter,
        transport=httpx.MockTransport(handler),
    )


def test_root_children_are_discovered_targets(icon_dir, reporter, make_handler):
    provider = make_provider(icon_dir, make_handler(), reporter)
    children = asyncio.run(provider.get_children())

    assert all(isinstance(child, DiscoveredTarget) for child in children)
    assert [child.id for child in children] == ["P1", "P2", "F1", "O1"]
    assert provider.last_result.targets == children


def test_target_children_are_detail_rows(icon_dir, reporter, make_handler):
    provider = make_provider(icon_dir, make_handler(), reporter)

    async def run():
        targets = await provider.get_children()
        rows = await provider.get_children(targets[0])
        leaf = await provider.get_children(rows[0])
        return rows, leaf

    rows, leaf = asyncio.run(run())
    assert [row.label for row in rows[:2]] == ["id: P1", "type: page"]
    assert leaf == []


def test_refresh_clears_cache_then_discovers(icon_dir, reporter, make_handler):
    (icon_dir / "staleFavicon.ico").write_bytes(b"old")
    provider = make_provider(icon_dir, make_handler(), reporter)

    result = asyncio.run(provider.refresh())

    names = sorted(p.name for p in icon_dir.iterdir())
    assert "staleFavicon.ico" not in names
    assert SENTINEL_NAME in names
    assert "exampleFavicon.ico" in names
    assert result.ok
    assert reporter.names() == [EVENT_REFRESH, EVENT_LIST]


def test_refresh_notifies_subscribers(icon_dir, reporter, make_handler):
    provider = make_provider(icon_dir, make_handler(), reporter)
    received = []
    unsubscribe = provider.subscribe(received.append)

    first = asyncio.run(provider.refresh())
    unsubscribe()
    asyncio.run(provider.refresh())

    assert received == [first]


def test_failing_subscriber_does_not_block_others(icon_dir, reporter, make_handler):
    provider = make_provider(icon_dir, make_handler(), reporter)
    received = []

    def broken(result):
        raise RuntimeError("boom")

    provider.subscribe(broken)
    provider.subscribe(received.append)
    asyncio.run(provider.refresh())

    assert len(received) == 1


def test_refresh_survives_cache_clear_failure(icon_dir, reporter, make_handler, monkeypatch):
    from targettap.errors import CacheClearError

    provider = make_provider(icon_dir, make_handler(), reporter)

    def failing_clear(directory=None):
        raise CacheClearError([(icon_dir / "x.ico", PermissionError("locked"))])

    monkeypatch.setattr(provider.cache, "clear", failing_clear)
    result = asyncio.run(provider.refresh())

    assert result.ok
    assert len(result.targets) == 4
    assert len(result.warnings) == 1
    assert "x.ico" in result.warnings[0]


def test_config_read_for_each_pass(icon_dir, reporter, make_handler):
    configs = iter([CONFIG, DiscoveryConfig(hostname="devbox", port=9333, show_workers=True)])
    provider = TargetsProvider(
        config_source=lambda: next(configs),
        icon_dir=icon_dir,
        reporter=reporter,
        transport=httpx.MockTransport(make_handler()),
    )

    first = asyncio.run(provider.discover())
    second = asyncio.run(provider.discover())

    assert len(first.targets) == 4
    assert len(second.targets) == 6


def test_discover_has_no_warnings(icon_dir, reporter, make_handler):
    provider = make_provider(icon_dir, make_handler(), reporter)
    assert asyncio.run(provider.discover()).warnings == []


def test_missing_icon_dir_created_before_discovery(tmp_path, reporter, make_handler):
    icon_dir = tmp_path / "not" / "yet" / "there"
    provider = make_provider(icon_dir, make_handler(), reporter)

    result = asyncio.run(provider.discover())

    assert (icon_dir / SENTINEL_NAME).exists()
    assert result.targets[1].icon_path == icon_dir / "exampleFavicon.ico"
    assert (icon_dir / "exampleFavicon.ico").read_bytes()


def test_refresh_recreates_missing_icon_dir(tmp_path, reporter, make_handler):
    icon_dir = tmp_path / "favicons"
    provider = make_provider(icon_dir, make_handler(), reporter)

    result = asyncio.run(provider.refresh())

    assert result.warnings == []
    assert (icon_dir / "exampleFavicon.ico").exists()


class TestCall:
    def test_runs_from_sync_code(self, icon_dir, reporter, make_handler):
        provider = make_provider(icon_dir, make_handler(), reporter)
        try:
            result = provider.call(provider.discover())
        finally:
            provider.close()

        assert [t.id for t in result.targets] == ["P1", "P2", "F1", "O1"]

    def test_runs_while_caller_loop_is_running(self, icon_dir, reporter, make_handler):
        provider = make_provider(icon_dir, make_handler(), reporter)

        async def host():
            # Sync tool body invoked directly on the host's loop
            return provider.call(provider.refresh())

        try:
            result = asyncio.run(host())
        finally:
            provider.close()

        assert result.ok
        assert len(result.targets) == 4

    def test_close_is_repeatable(self, icon_dir, reporter, make_handler):
        provider = make_provider(icon_dir, make_handler(), reporter)
        provider.call(provider.discover())
        provider.close()
        provider.close()

        # A later call starts a fresh loop thread
        try:
            assert provider.call(provider.discover()).ok
        finally:
            provider.close()


def test_cache_work_runs_off_the_event_loop_thread(icon_dir, reporter, make_handler, monkeypatch):
    provider = make_provider(icon_dir, make_handler(), reporter)
    threads = []
    original_clear = provider.cache.clear

    def recording_clear(directory=None):
        threads.append(threading.current_thread())
        return original_clear(directory)

    monkeypatch.setattr(provider.cache, "clear", recording_clear)
    asyncio.run(provider.refresh())

    assert threads and threads[0] is not threading.main_thread()
