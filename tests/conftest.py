"""Shared fixtures for the sampled metrics tests."""

import threading

import pytest

from sampled_metrics import MetricBatcher
from sampled_metrics.core.events import encode_payload
from sampled_metrics.sender import SendResponse


class RecordingTransport:
    """Transport that records every send and completes synchronously."""

    def __init__(self, error=None, raise_on_send=None):
        self.error = error
        self.raise_on_send = raise_on_send
        self.calls = []
        self.sent = threading.Event()
        self._lock = threading.Lock()

    def send(self, url, payload, headers, completion):
        if self.raise_on_send is not None:
            raise self.raise_on_send

        with self._lock:
            self.calls.append({"url": url, "payload": payload, "headers": headers, "body": encode_payload(payload).decode("utf-8")})
        self.sent.set()

        if self.error is not None:
            completion(self.error, None)
        else:
            completion(None, SendResponse(status=200, reason="OK"))

    @property
    def call_count(self):
        with self._lock:
            return len(self.calls)


class ScriptedRandom:
    """Random source returning a fixed sequence of values."""

    def __init__(self, *values):
        self.values = list(values)

    def __call__(self):
        return self.values.pop(0)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def batcher(transport):
    metrics = MetricBatcher(transport=transport)
    yield metrics
    metrics.close(flush=False)
