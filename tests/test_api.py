from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings


@pytest.fixture
def client():
    app = create_app(Settings(_env_file=None, max_nesting_depth=8))
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": "0.1.0"}


def test_evaluate_returns_value_and_exact_result(client):
    resp = client.post("/evaluate", json={"expression": "add(div(13, 4), div(11, 4))"})

    body = resp.json()
    assert resp.status_code == 200
    assert body["value"] == 6
    assert body["exact"] == {"numerator": 24, "denominator": 4}
    assert body["steps"][-1] == "add(13/4, 11/4) = 24/4"


def test_evaluate_with_variables(client):
    resp = client.post(
        "/evaluate",
        json={"expression": "let(b, 2, mult(a, b))", "variables": {"a": 21}},
    )

    assert resp.status_code == 200
    assert resp.json()["value"] == 42


def test_parse_failure_is_400(client):
    resp = client.post("/evaluate", json={"expression": "foo(1,2)"})

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["kind"] == "parse_failure"
    assert detail["offending_text"] == "foo(1,2)"


def test_unbound_variable_is_400(client):
    resp = client.post("/evaluate", json={"expression": "add(1, a)"})

    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "unbound_variable"
    assert resp.json()["detail"]["name"] == "a"


def test_division_by_zero_is_400(client):
    resp = client.post("/evaluate", json={"expression": "div(1, 0)"})

    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "division_by_zero"


def test_nesting_limit_comes_from_settings(client):
    expression = "add(1," * 10 + "0" + ")" * 10

    resp = client.post("/evaluate", json={"expression": expression})

    assert resp.status_code == 400
    assert "nested deeper than 8" in resp.json()["detail"]["message"]


def test_missing_expression_is_422(client):
    resp = client.post("/evaluate", json={})

    assert resp.status_code == 422


def test_huge_value_is_returned_in_full(client):
    expression = "let(a, mult(2147483647, 2147483647), " + "let(a, mult(a, a), " * 5 + "a" + ")" * 6

    resp = client.post("/evaluate", json={"expression": expression})

    assert resp.status_code == 200
    assert resp.json()["value"] == 2147483647 ** 64
