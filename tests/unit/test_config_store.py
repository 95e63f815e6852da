"""Unit tests for the endpoint configuration store"""

import pytest
from fraud_monitor.domain.exceptions import InvalidEndpointError
from fraud_monitor.infrastructure.config_store import EndpointConfigStore, normalize_base_url


@pytest.fixture
def store(session_factory) -> EndpointConfigStore:
    return EndpointConfigStore(
        session_factory,
        default_base_url="http://localhost:5000",
        timeout_seconds=10.0,
        fallback_fraud_count=11,
    )


def test_current_defaults_when_nothing_saved(store):
    config = store.current()

    assert config.base_url == "http://localhost:5000"
    assert config.timeout_seconds == 10.0
    assert config.fallback_fraud_count == 11


def test_update_persists(store, session_factory):
    store.update("https://abc123.ngrok.io/")

    reopened = EndpointConfigStore(session_factory, default_base_url="http://localhost:5000")
    assert reopened.current().base_url == "https://abc123.ngrok.io"


def test_update_notifies_subscribers(store):
    """Test every subscriber receives the new config"""
    received_a, received_b = [], []
    store.subscribe(received_a.append)
    store.subscribe(received_b.append)

    config = store.update("http://model.internal:8080")

    assert received_a == [config]
    assert received_b == [config]


def test_unsubscribe_stops_notifications(store):
    received = []
    unsubscribe = store.subscribe(received.append)

    unsubscribe()
    store.update("http://model.internal:8080")

    assert received == []


def test_failing_listener_does_not_block_others(store):
    received = []

    def broken(config):
        raise RuntimeError("listener bug")

    store.subscribe(broken)
    store.subscribe(received.append)

    store.update("http://model.internal:8080")

    assert len(received) == 1


def test_invalid_url_rejected_without_notifying(store):
    received = []
    store.subscribe(received.append)

    with pytest.raises(InvalidEndpointError):
        store.update("not a url")

    assert received == []
    assert store.current().base_url == "http://localhost:5000"


@pytest.mark.parametrize("url", ["", "ftp://model.test", "localhost:5000"])
def test_normalize_rejects(url):
    with pytest.raises(InvalidEndpointError):
        normalize_base_url(url)


def test_normalize_strips_trailing_slash():
    assert normalize_base_url("  http://model.test/api/ ") == "http://model.test/api"
