import threading

from htmx_sse.core.registry import ChannelRegistry

from conftest import RecordingChannel


def test_unknown_client_has_no_channels(registry):
    assert registry.channels_for("nobody") == set()
    assert len(registry) == 0


def test_register_accumulates_channels_per_client(registry):
    tabs = [RecordingChannel(f"tab{i}") for i in range(3)]
    for tab in tabs:
        registry.register("abc", tab)
    other = RecordingChannel("other")
    registry.register("xyz", other)

    assert registry.channels_for("abc") == set(tabs)
    assert registry.channels_for("xyz") == {other}
    assert registry.client_ids() == {"abc", "xyz"}
    assert registry.channel_count() == 4


def test_registering_same_channel_twice_is_idempotent(registry):
    chan = RecordingChannel()
    registry.register("abc", chan)
    registry.register("abc", chan)
    assert registry.channels_for("abc") == {chan}


def test_channels_for_returns_a_snapshot(registry):
    chan = RecordingChannel()
    registry.register("abc", chan)
    snapshot = registry.channels_for("abc")
    snapshot.clear()
    assert registry.channels_for("abc") == {chan}


def test_discard_drops_empty_client_entry(registry):
    a, b = RecordingChannel("a"), RecordingChannel("b")
    registry.register("abc", a)
    registry.register("abc", b)

    assert registry.discard("abc", a) is True
    assert registry.channels_for("abc") == {b}
    assert registry.discard("abc", a) is False

    assert registry.discard("abc", b) is True
    assert "abc" not in registry.client_ids()
    assert len(registry) == 0


def test_discard_unknown_client_is_noop(registry):
    assert registry.discard("ghost", RecordingChannel()) is False


def test_concurrent_registration():
    registry = ChannelRegistry()
    channels = [RecordingChannel(str(i)) for i in range(200)]

    def worker(chunk):
        for chan in chunk:
            registry.register("shared", chan)

    threads = [threading.Thread(target=worker, args=(channels[i::4],)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert registry.channels_for("shared") == set(channels)
