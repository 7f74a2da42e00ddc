"""Tests for payout and status statistics"""
from fastapi.testclient import TestClient

from eve_srp.services import srp_requests, stats


def _seed(db):
    """3 pending, 2 approved (50M, 30M), 1 rejected; two characters"""
    owners = [
        (100, "Pilot One"),
        (100, "Pilot One"),
        (200, "Pilot Two"),
        (100, "Pilot One"),
        (200, "Pilot Two"),
        (200, "Pilot Two"),
    ]
    requests = [
        srp_requests.submit_request(db, {"char_id": char_id, "char_name": name}, 5000 + i, 587, None)
        for i, (char_id, name) in enumerate(owners)
    ]
    srp_requests.review_request(db, requests[3].id, "approve", None, 50000000, "reviewer")
    srp_requests.review_request(db, requests[4].id, "approve", None, 30000000, "reviewer")
    srp_requests.review_request(db, requests[5].id, "reject", None, 99, "reviewer")
    return requests


def test_status_counts(db):
    assert stats.status_counts(db) == {"pending": 0, "approved": 0, "rejected": 0}

    _seed(db)
    assert stats.status_counts(db) == {"pending": 3, "approved": 2, "rejected": 1}


def test_payout_totals(db):
    _seed(db)
    assert stats.payout_totals(db) == {
        "totalRequests": 6,
        "approvedCount": 2,
        "totalPayout": 80000000.0,
    }


def test_player_payout_stats(db):
    _seed(db)
    assert stats.player_payout_stats(db, 100) == {
        "totalRequests": 3,
        "approvedCount": 1,
        "totalPayout": 50000000.0,
    }
    assert stats.player_payout_stats(db, 999) == {
        "totalRequests": 0,
        "approvedCount": 0,
        "totalPayout": 0.0,
    }


def test_top_players_by_payout(db):
    _seed(db)
    assert stats.top_players_by_payout(db) == [
        {"charId": 100, "charName": "Pilot One", "requestCount": 1, "totalAmount": 50000000.0},
        {"charId": 200, "charName": "Pilot Two", "requestCount": 1, "totalAmount": 30000000.0},
    ]
    assert len(stats.top_players_by_payout(db, limit=1)) == 1


def test_stats_endpoint(client: TestClient, db, admin_headers: dict):
    _seed(db)
    response = client.get("/api/admin/stats", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"pending": 3, "approved": 2, "rejected": 1}


def test_payout_stats_endpoint(client: TestClient, db, admin_headers: dict):
    _seed(db)
    response = client.get("/api/admin/payout-stats", headers=admin_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["totals"] == {"totalRequests": 6, "approvedCount": 2, "totalPayout": 80000000.0}
    assert [p["charId"] for p in data["byPlayer"]] == [100, 200]
    assert data["byPlayer"][0]["totalAmount"] == 50000000.0
