from fastapi.testclient import TestClient

from api.app import create_app


def test_health_endpoint_response_shape() -> None:
    client = TestClient(create_app())
    response = client.get("/healthz")
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["status"] == "ok"


def test_ready_endpoint_response_shape() -> None:
    client = TestClient(create_app())
    response = client.get("/readyz")
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["status"] == "ready"


def test_request_validation_error_uses_error_envelope() -> None:
    client = TestClient(create_app())
    response = client.get("/v1/map/region?aspect_ratio=1&center_lat=91")
    body = response.json()

    assert response.status_code == 422
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
