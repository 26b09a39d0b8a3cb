"""
Tests for the HTTP endpoints
"""
import pytest

from pipeline import RipenessPipeline


VALID_BODY = {
    "sku": "sample",
    "receivedAt": "2024-01-01",
    "storage": "room",
    "climate": "normal",
    "issues": ["too firm"],
}


def test_estimate_ok(client):
    response = client.post("/api/ripeness", json=VALID_BODY)
    body = response.get_json()

    assert response.status_code == 200
    assert body["sku"] == "sample"
    assert body["name"] == "Sample Fruit"
    assert body["readyDate"] == "2024-01-06"
    assert body["advice"]["summaryMd"] == "Eat it when it smells sweet."
    assert body["advice"]["ripenessWindow"] == {
        "start": "2024-01-05",
        "end": "2024-01-07",
        "note": "Estimated from storage rules; check the item itself before eating.",
    }
    assert body["advisoryOutcome"] == "succeeded"


def test_estimate_without_advice(client):
    response = client.post("/api/ripeness", json={**VALID_BODY, "advice": False})
    body = response.get_json()

    assert response.status_code == 200
    assert body["advisoryOutcome"] == "skipped"
    assert "2024-01-05" in body["advice"]["summaryMd"]


@pytest.mark.parametrize("advisor_reply", [None])
def test_estimate_with_failed_advisor(client):
    response = client.post("/api/ripeness", json=VALID_BODY)
    body = response.get_json()

    assert response.status_code == 200
    assert body["advisoryOutcome"] == "failed"
    assert "2024-01-05" in body["advice"]["summaryMd"]
    assert "2024-01-07" in body["advice"]["summaryMd"]


def test_unknown_sku_is_client_error(client):
    response = client.post("/api/ripeness", json={**VALID_BODY, "sku": "durian"})
    body = response.get_json()

    assert response.status_code == 400
    assert body["ok"] is False
    assert "durian" in body["error"]
    assert "readyDate" not in body
    assert "advice" not in body


def test_bad_date_is_client_error(client):
    response = client.post("/api/ripeness", json={**VALID_BODY, "receivedAt": "Jan 1st"})

    assert response.status_code == 400
    assert "YYYY-MM-DD" in response.get_json()["error"]


def test_intake_date_near_calendar_end_is_client_error(client):
    response = client.post("/api/ripeness", json={**VALID_BODY, "receivedAt": "9999-12-30"})

    assert response.status_code == 400
    assert "receivedAt" in response.get_json()["error"]


def test_slash_date_is_accepted(client):
    response = client.post("/api/ripeness", json={**VALID_BODY, "receivedAt": "2024/01/01"})

    assert response.status_code == 200
    assert response.get_json()["readyDate"] == "2024-01-06"


@pytest.mark.parametrize("body", [None, [], ["sample"]])
def test_bad_body_is_client_error(client, body):
    if body is None:
        response = client.post("/api/ripeness", data="not json", content_type="text/plain")
    else:
        response = client.post("/api/ripeness", json=body)

    assert response.status_code == 400


def test_unexpected_error_is_generic_500(client, monkeypatch):
    def explode(self, payload, **kwargs):
        raise RuntimeError("secret internal detail")

    monkeypatch.setattr(RipenessPipeline, "estimate_payload", explode)
    response = client.post("/api/ripeness", json=VALID_BODY)
    body = response.get_json()

    assert response.status_code == 500
    assert body == {"ok": False, "error": "Internal server error"}


def test_fruit_rules_sorted(client):
    response = client.get("/api/fruit-rules")
    rules = response.get_json()["rules"]

    assert response.status_code == 200
    assert [r["sku"] for r in rules] == ["berry", "apple", "sample"]
    assert rules[0] == {"sku": "berry", "name": "Berry", "category": "Berry"}


def test_health(client):
    body = client.get("/health").get_json()

    assert body["ok"] is True
    assert body["rules"]["count"] == 3
    assert body["advisor"]["available"] is True
