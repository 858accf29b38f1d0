"""HTTP tests for the FastAPI app."""
from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

import app as app_module


@pytest.fixture
def client(registry):
    app_module.app.dependency_overrides[app_module.get_registry] = lambda: registry
    try:
        yield TestClient(app_module.app)
    finally:
        app_module.app.dependency_overrides.clear()


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_contract_types(client) -> None:
    resp = client.get("/contract-types")
    assert resp.status_code == 200
    values = [o["value"] for o in resp.json()]
    assert values == ["GOLF_OUTING", "GOLF_LEAGUE", "WEDDING", "SPECIAL_EVENT", "OTHER"]


def test_read_blueprint(client) -> None:
    resp = client.get("/blueprints/golf_outing")
    assert resp.status_code == 200
    body = resp.json()
    assert body["type"] == "GOLF_OUTING"
    assert body["sections"][0] == "Parties & Event Overview"


def test_read_unknown_blueprint(client) -> None:
    resp = client.get("/blueprints/PICNIC")
    assert resp.status_code == 404


def test_order_sections(client) -> None:
    resp = client.post("/sections/order", json={
        "contract_type": "GOLF_OUTING",
        "sections": [
            {"title": "conclusion", "body": "..."},
            {"title": "Parties & Event Overview", "body": "..."},
        ],
    })
    assert resp.status_code == 200
    assert [(s["title"], s["order"]) for s in resp.json()] == [
        ("Parties & Event Overview", 0),
        ("Conclusion", 1),
    ]


def test_order_sections_with_exhibits(client) -> None:
    resp = client.post("/sections/order", json={
        "contract_type": "OTHER",
        "sections": [{"title": "Signatures", "body": "x"}],
        "exhibits": [{"title": "Floor Plan", "body": "y"}],
    })
    assert resp.status_code == 200
    assert [s["title"] for s in resp.json()] == ["Signatures", "Exhibit A: Floor Plan"]


def test_order_sections_rejects_unknown_type(client) -> None:
    resp = client.post("/sections/order", json={"contract_type": "PICNIC", "sections": []})
    assert resp.status_code == 422


def test_merge_exhibits(client) -> None:
    resp = client.post("/sections/merge-exhibits", json={
        "sections": [{"title": "Parties", "body": "p"}],
        "exhibits": [
            {"title": "Pricing Sheet", "body": "a"},
            {"title": "Exhibit: Floor Plan", "body": "b"},
        ],
    })
    assert resp.status_code == 200
    assert [s["title"] for s in resp.json()] == [
        "Parties", "Exhibit A: Pricing Sheet", "Exhibit: Floor Plan",
    ]


def test_section_variables(client) -> None:
    resp = client.post("/sections/variables", json={"text": "Hi {{client_name}}, see {{event_date}}."})
    assert resp.status_code == 200
    assert resp.json() == {"variables": ["client_name", "event_date"]}


def test_assemble_contract(client) -> None:
    resp = client.post("/contracts/assemble", json={
        "contract_type": "WEDDING",
        "response": {
            "contractTitle": "Smith Wedding",
            "sections": [
                {"title": "Signatures", "body": "Signed."},
                {"title": "force majeure", "body": "Acts of God."},
            ],
        },
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Smith Wedding"
    assert body["contract_type"] == "WEDDING"
    assert [s["title"] for s in body["sections"]] == ["Force Majeure", "Signatures"]


def test_assemble_contract_from_text(client) -> None:
    raw = '```json\n{"contractTitle": "T", "sections": [{"title": "A", "body": "b"}]}\n```'
    resp = client.post("/contracts/assemble", json={"contract_type": "OTHER", "response": raw})
    assert resp.status_code == 200
    assert resp.json()["sections"] == [{"title": "A", "body": "b", "order": 0}]


def test_assemble_contract_invalid_response(client) -> None:
    resp = client.post("/contracts/assemble", json={
        "contract_type": "OTHER",
        "response": {"contractTitle": "T", "sections": []},
    })
    assert resp.status_code == 422
    assert "failed validation" in resp.json()["detail"]


def test_lifespan_configures_logging_and_loads_registry() -> None:
    with TestClient(app_module.app) as c:
        resp = c.get("/contract-types")
    assert resp.status_code == 200
    assert len(resp.json()) == 5
    assert logging.getLogger("venuecontract").handlers


def test_reorder_sections(client) -> None:
    resp = client.post("/sections/reorder", json={
        "sections": [
            {"title": "Parties", "body": "p", "order": 0},
            {"title": "Payment Terms", "body": "t", "order": 1},
            {"title": "Signatures", "body": "s", "order": 2},
        ],
        "new_order": [2, 0, 1],
    })
    assert resp.status_code == 200
    assert [(s["title"], s["order"]) for s in resp.json()] == [
        ("Signatures", 0), ("Parties", 1), ("Payment Terms", 2),
    ]


def test_reorder_sections_rejects_bad_permutation(client) -> None:
    resp = client.post("/sections/reorder", json={
        "sections": [{"title": "Parties", "body": "p", "order": 0}],
        "new_order": [0, 0],
    })
    assert resp.status_code == 422
    assert "permutation" in resp.json()["detail"]


def test_assemble_contract_with_venue_policies(client) -> None:
    resp = client.post("/contracts/assemble", json={
        "contract_type": "WEDDING",
        "response": {
            "contractTitle": "Smith Wedding",
            "sections": [
                {"title": "Signatures", "body": "Signed."},
                {"title": "Governing Law & Dispute Resolution", "body": "State law."},
            ],
        },
        "org_defaults": {
            "custom_policies": [
                {"name": "Sparklers", "content": "Not permitted indoors.", "applies_to": ["WEDDING"]},
            ],
        },
    })
    assert resp.status_code == 200
    sections = resp.json()["sections"]
    assert [s["title"] for s in sections] == [
        "Venue Policies", "Governing Law & Dispute Resolution", "Signatures",
    ]
    assert sections[0]["body"] == "Sparklers\n\nNot permitted indoors."
