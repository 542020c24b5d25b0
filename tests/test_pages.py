"""Tests for the page shell and health endpoint."""
import pytest


@pytest.mark.parametrize(
    "path, endpoint",
    [
        ("/login", "/users/login"),
        ("/signup", "/users/register"),
        ("/driver/login", "/drivers/login"),
        ("/driver/signup", "/drivers/register"),
    ],
)
def test_auth_pages_post_to_matching_endpoint(client, path, endpoint):
    response = client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert endpoint in response.text


def test_driver_signup_asks_for_vehicle(client):
    assert "Vehicle Information" in client.get("/driver/signup").text
    assert "Vehicle Information" not in client.get("/signup").text


def test_home_links_to_login(client):
    response = client.get("/")

    assert response.status_code == 200
    assert 'href="/login"' in response.text


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_message_body(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
