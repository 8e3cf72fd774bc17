"""Shared pytest fixtures for voip_client tests."""

from __future__ import annotations

import httpx
import pytest

from httpmock import ENDPOINT, PASSWORD, USERNAME, Recorder
from voip_client import VoipClient


@pytest.fixture
def make_client():
    """Build VoipClients whose transport answers with a given handler."""
    clients: list[VoipClient] = []

    def _make(handler, debug: bool = False, **kwargs):
        recorder = Recorder(handler)
        client = VoipClient(
            ENDPOINT,
            USERNAME,
            PASSWORD,
            debug,
            transport=httpx.MockTransport(recorder),
            **kwargs,
        )
        clients.append(client)
        return client, recorder

    yield _make
    for c in clients:
        c.close()
