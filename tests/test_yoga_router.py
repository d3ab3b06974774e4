def test_list_yoga_types(client):
    response = client.get("/api/yoga-types")

    assert response.status_code == 200
    names = [item["name"] for item in response.json()]
    assert len(names) == 9
    assert names[0] == "Hatha"
    assert "Vinyasa" in names


def test_get_yoga_type(client):
    response = client.get("/api/yoga-types/2")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Vinyasa Flow"
    assert body["benefits"]


def test_unknown_yoga_type(client):
    response = client.get("/api/yoga-types/99")

    assert response.status_code == 404
    assert response.json() == {"message": "Yoga type not found"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_unknown_route(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}
