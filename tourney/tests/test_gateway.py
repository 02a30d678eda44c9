import pytest

from tourney.errors import StorageFailure
from tourney.gateway.server import create_app


def test_health(client):
    assert client.get("/").get_json() == {"status": "gateway_ok"}
    assert client.get("/health").get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_wrong_method_is_405(client):
    response = client.get("/api/login")
    assert response.status_code == 405


def test_storage_failure_hides_details(client, app, mocker):
    mocker.patch.object(app.tournaments, "list_all", side_effect=StorageFailure())

    response = client.get("/api/tournaments")

    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal server error"}


def test_unexpected_error_is_500(client, app, mocker):
    mocker.patch.object(app.tournaments, "list_all", side_effect=KeyError("boom"))

    response = client.get("/api/tournaments")

    assert response.status_code == 500
    assert "boom" not in response.get_data(as_text=True)


def test_missing_secret_refuses_to_start():
    with pytest.raises(RuntimeError):
        create_app("testing", JWT_SECRET=None)


def test_token_lifetime_override():
    app = create_app("testing", TOKEN_EXPIRATION_MINUTES=0)
    assert app.tokens.expiration_minutes == 0


def test_cors_headers(client):
    response = client.get("/api/tournaments", headers={"Origin": "http://localhost:3000"})
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:3000")


def test_serves_client_build(tmp_path):
    (tmp_path / "index.html").write_text("<html>app</html>")
    (tmp_path / "main.js").write_text("console.log(1);")
    app = create_app("testing", SERVE_CLIENT=True, CLIENT_BUILD_DIR=str(tmp_path))
    client = app.test_client()

    assert client.get("/main.js").get_data(as_text=True) == "console.log(1);"
    assert "app" in client.get("/some/client/route").get_data(as_text=True)
    assert client.get("/api/unknown").status_code == 404
    assert client.get("/health").get_json() == {"status": "ok"}
