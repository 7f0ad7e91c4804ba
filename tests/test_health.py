def test_health_is_public(client):
    resp = client.get("/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["db"] is True
    assert body["dialect"] == "sqlite"


def test_unknown_route_is_404(client):
    assert client.get("/v1/nope").status_code == 404
