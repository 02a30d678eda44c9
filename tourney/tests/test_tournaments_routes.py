def _register_and_login(client, email, password="pw1"):
    client.post("/api/register", json={"email": email, "password": password})
    token = client.post("/api/login", json={"email": email, "password": password}).get_json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_create_requires_token(client, tournaments):
    response = client.post("/api/tournaments", json={"name": "Cup", "description": "desc"})

    assert response.status_code == 401
    assert tournaments.rows == {}


def test_create_rejects_invalid_token(client, tournaments):
    response = client.post(
        "/api/tournaments",
        json={"name": "Cup"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401
    assert tournaments.rows == {}


def test_create_success(client, auth_header):
    response = client.post(
        "/api/tournaments",
        json={"name": "Cup", "description": "desc"},
        headers=auth_header(7, "a@x.com"),
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "Cup"
    assert data["description"] == "desc"
    assert data["owner"] == 7
    assert data["participants"] == [7]


def test_create_without_body_defaults_to_empty_strings(client, auth_header):
    response = client.post("/api/tournaments", headers=auth_header())

    assert response.status_code == 200
    assert response.get_json()["name"] == ""


def test_create_rejects_non_string_fields(client, auth_header):
    response = client.post("/api/tournaments", json={"name": ["Cup"]}, headers=auth_header())
    assert response.status_code == 400


def test_list_is_public_and_resolves_emails(client):
    alice = _register_and_login(client, "a@x.com")
    bob = _register_and_login(client, "b@x.com")
    created = client.post("/api/tournaments", json={"name": "Cup", "description": "d"}, headers=alice).get_json()
    client.post(f"/api/tournaments/{created['id']}/join", headers=bob)

    response = client.get("/api/tournaments")

    assert response.status_code == 200
    data = response.get_json()
    assert len(data) == 1
    assert data[0]["owner"]["email"] == "a@x.com"
    assert [p["email"] for p in data[0]["participants"]] == ["a@x.com", "b@x.com"]


def test_list_empty(client):
    response = client.get("/api/tournaments")
    assert response.status_code == 200
    assert response.get_json() == []


def test_join_requires_token(client, auth_header):
    created = client.post("/api/tournaments", json={"name": "Cup"}, headers=auth_header(1)).get_json()

    response = client.post(f"/api/tournaments/{created['id']}/join")
    assert response.status_code == 401


def test_join_adds_caller_once(client, auth_header):
    created = client.post("/api/tournaments", json={"name": "Cup"}, headers=auth_header(1)).get_json()

    first = client.post(f"/api/tournaments/{created['id']}/join", headers=auth_header(2, "b@x.com"))
    second = client.post(f"/api/tournaments/{created['id']}/join", headers=auth_header(2, "b@x.com"))

    assert first.status_code == second.status_code == 200
    assert first.get_json()["participants"] == [1, 2]
    assert second.get_json() == first.get_json()


def test_join_unknown_id(client, auth_header):
    response = client.post("/api/tournaments/999/join", headers=auth_header())

    assert response.status_code == 404
    assert response.get_json() == {"message": "Not found"}


def test_join_non_numeric_id(client, auth_header):
    response = client.post("/api/tournaments/abc/join", headers=auth_header())
    assert response.status_code == 404


def test_full_scenario(client):
    assert client.post("/api/register", json={"email": "a@x.com", "password": "pw1"}).status_code == 200

    again = client.post("/api/register", json={"email": "a@x.com", "password": "pw1"})
    assert again.status_code == 400
    assert again.get_json()["message"] == "User exists"

    login = client.post("/api/login", json={"email": "a@x.com", "password": "pw1"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    created = client.post("/api/tournaments", json={"name": "Cup", "description": "desc"}, headers=headers)
    assert created.status_code == 200
    tournament = created.get_json()
    owner = tournament["owner"]
    assert tournament["participants"] == [owner]

    joined = client.post(f"/api/tournaments/{tournament['id']}/join", headers=headers)
    assert joined.status_code == 200
    assert joined.get_json()["participants"] == [owner]

    missing = client.post(f"/api/tournaments/{tournament['id'] + 100}/join", headers=headers)
    assert missing.status_code == 404


def test_join_oversized_id_is_404(client, app, auth_header, mocker):
    from tourney.errors import StorageFailure
    # A real int4 column would reject the value at the driver
    mocker.patch.object(app.tournaments, "get", side_effect=StorageFailure())

    response = client.post("/api/tournaments/99999999999/join", headers=auth_header())

    assert response.status_code == 404
