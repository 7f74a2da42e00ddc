"""Tests for loss history lookup and the outbound HTTP clients"""
import threading

import pytest
import requests
from fastapi.testclient import TestClient

from eve_srp.clients import EveSsoClient, ZKillboardLossSource
from eve_srp.config import settings
from eve_srp.errors import AuthExchangeFailed, LossSourceFailed


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=""):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Routes GET/POST by URL to canned responses and records every call"""

    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.calls = []

    def _respond(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.routes.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(status_code=404, text="not found")
        return response

    def get(self, url, **kwargs):
        return self._respond(url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond(url, **kwargs)

    def close(self):
        pass


def test_list_losses(client: TestClient, player_headers: dict, loss_source):
    response = client.get("/api/losses/100", headers=player_headers)
    assert response.status_code == 200
    assert response.json() == [
        {"killmail_id": 9100, "ship_type_id": 587, "killmail_time": "2026-10-01T12:00:00Z"},
    ]
    assert loss_source.calls == [100]


def test_list_losses_other_character(client: TestClient, player_headers: dict, loss_source):
    """Test that the loss source is never queried for someone else's character"""
    response = client.get("/api/losses/200", headers=player_headers)
    assert response.status_code == 403
    assert loss_source.calls == []


def test_list_losses_upstream_failure(client: TestClient, player_headers: dict, loss_source):
    loss_source.fail = True
    response = client.get("/api/losses/100", headers=player_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch loss history"}


def test_zkillboard_enrichment():
    zkill = f"{settings.ZKILLBOARD_BASE_URL}/api/characterID/100/losses/"
    session = FakeSession({
        zkill: FakeResponse([
            {"killmail_id": 1, "zkb": {"hash": "h1", "totalValue": 1000.0}},
            {"killmail_id": 2, "zkb": {"hash": "h2"}},
            {"killmail_id": 3},
        ]),
        f"{settings.ESI_BASE_URL}/killmails/1/h1/": FakeResponse({
            "killmail_time": "2026-10-02T20:15:00Z",
            "victim": {"ship_type_id": 17738},
        }),
        f"{settings.ESI_BASE_URL}/killmails/2/h2/": requests.ConnectionError("esi down"),
    })
    source = ZKillboardLossSource(settings, session=session)

    losses = source.fetch_losses(100)

    assert losses[0]["killmail_time"] == "2026-10-02T20:15:00Z"
    assert losses[0]["ship_type_id"] == 17738
    assert losses[0]["zkb"]["totalValue"] == 1000.0
    assert losses[1] == {"killmail_id": 2, "zkb": {"hash": "h2"}}
    assert losses[2] == {"killmail_id": 3}
    assert all(kwargs["timeout"] == settings.EXTERNAL_TIMEOUT_SECONDS for _, kwargs in session.calls)


class BarrierResponse(FakeResponse):
    """Blocks in json() until every sibling lookup has started"""

    def __init__(self, barrier, payload):
        super().__init__(payload)
        self._barrier = barrier

    def json(self):
        self._barrier.wait(timeout=5)
        return super().json()


def test_zkillboard_enrichment_runs_in_parallel():
    """Test that all killmail lookups are in flight at once and results keep list order"""
    barrier = threading.Barrier(3)
    zkill = f"{settings.ZKILLBOARD_BASE_URL}/api/characterID/100/losses/"
    routes = {zkill: FakeResponse([{"killmail_id": i, "zkb": {"hash": f"h{i}"}} for i in (1, 2, 3)])}
    for i in (1, 2, 3):
        routes[f"{settings.ESI_BASE_URL}/killmails/{i}/h{i}/"] = BarrierResponse(
            barrier, {"killmail_time": f"2026-10-0{i}T00:00:00Z", "victim": {"ship_type_id": 600 + i}}
        )

    losses = ZKillboardLossSource(settings, session=FakeSession(routes)).fetch_losses(100)

    assert [loss["ship_type_id"] for loss in losses] == [601, 602, 603]
    assert not barrier.broken


def test_zkillboard_empty_list():
    zkill = f"{settings.ZKILLBOARD_BASE_URL}/api/characterID/100/losses/"
    assert ZKillboardLossSource(settings, session=FakeSession({zkill: FakeResponse([])})).fetch_losses(100) == []


def test_zkillboard_limit():
    zkill = f"{settings.ZKILLBOARD_BASE_URL}/api/characterID/100/losses/"
    session = FakeSession({zkill: FakeResponse([{"killmail_id": i} for i in range(1, 50)])})

    losses = ZKillboardLossSource(settings, session=session).fetch_losses(100)
    assert len(losses) == settings.LOSS_FETCH_LIMIT


@pytest.mark.parametrize("response", [
    FakeResponse(status_code=502, text="bad gateway"),
    FakeResponse({"error": "rate limited"}),
    FakeResponse(ValueError("not json")),
    requests.Timeout("slow"),
])
def test_zkillboard_failure(response):
    zkill = f"{settings.ZKILLBOARD_BASE_URL}/api/characterID/100/losses/"
    source = ZKillboardLossSource(settings, session=FakeSession({zkill: response}))

    with pytest.raises(LossSourceFailed):
        source.fetch_losses(100)


def test_eve_sso_client_flow():
    session = FakeSession({
        settings.EVE_SSO_TOKEN_URL: FakeResponse({"access_token": "at-1"}),
        settings.EVE_SSO_VERIFY_URL: FakeResponse({"CharacterID": 100, "CharacterName": "Pilot One"}),
        f"{settings.ESI_BASE_URL}/characters/100/": FakeResponse({"corporation_id": 98000001}),
    })
    client = EveSsoClient(settings, session=session)

    assert client.exchange_code("code-1") == "at-1"
    assert client.verify("at-1") == (100, "Pilot One")
    assert client.get_corporation_id(100) == 98000001

    _, token_kwargs = session.calls[0]
    assert token_kwargs["data"]["code"] == "code-1"
    assert token_kwargs["data"]["grant_type"] == "authorization_code"
    assert session.calls[1][1]["headers"] == {"Authorization": "Bearer at-1"}


def test_eve_sso_client_failures():
    session = FakeSession({
        settings.EVE_SSO_TOKEN_URL: FakeResponse(status_code=400, text='{"error":"invalid_grant"}'),
        settings.EVE_SSO_VERIFY_URL: FakeResponse({"unexpected": True}),
    })
    client = EveSsoClient(settings, session=session)

    with pytest.raises(AuthExchangeFailed):
        client.exchange_code("expired")
    with pytest.raises(AuthExchangeFailed):
        client.verify("at-1")
    with pytest.raises(AuthExchangeFailed):
        client.get_corporation_id(100)
