"""End-to-end tests for the forum HTTP API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from agriforum.config import AuthSettings
from agriforum.interface.api.app import create_app
from agriforum.util.jwt import create_token
from tests.di import build_test_container


def login(client: TestClient, user_id: str | None = None) -> str:
    """Attach a valid auth cookie for a (new) user to the client."""
    user_id = user_id or str(uuid4())
    client.cookies.set("auth_token", create_token(user_id, AuthSettings()))
    return user_id


@pytest.fixture
def client():
    """Create test client backed by in-memory persistence."""
    app_instance = create_app(build_test_container(with_fastapi=True))
    with TestClient(app_instance) as test_client:
        yield test_client


@pytest.fixture
def post_id(client):
    """Create a post as a throwaway user and return its ID."""
    login(client)
    response = client.post(
        "/posts",
        json={
            "title": "Yellow leaves on maize",
            "content": "Lower leaves turn yellow from the tip.",
            "category": "crop",
        },
    )
    assert response.status_code == 201
    client.cookies.clear()
    return response.json()["post_id"]


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Health check responds without authentication."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestPostEndpoints:
    """End-to-end tests for post endpoints."""

    def test_create_post_without_auth_fails(self, client):
        """Should return 401 when not authenticated."""
        # Act
        response = client.post(
            "/posts", json={"title": "Hi", "content": "There", "category": "soil"}
        )

        # Assert
        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "not_authenticated"
        assert response.json()["detail"]["retryable"] is False

    def test_create_post_with_invalid_token_fails(self, client):
        """A token signed with another secret counts as anonymous."""
        client.cookies.set(
            "auth_token",
            create_token(str(uuid4()), AuthSettings(jwt_secret="someone-else")),
        )

        response = client.post(
            "/posts", json={"title": "Hi", "content": "There", "category": "soil"}
        )

        assert response.status_code == 401

    def test_create_post_rejects_unknown_category(self, client):
        """Categories are a closed set."""
        login(client)

        response = client.post(
            "/posts", json={"title": "Hi", "content": "There", "category": "fishing"}
        )

        assert response.status_code == 422

    def test_create_post_rejects_blank_title(self, client):
        """Whitespace-only titles are a validation error."""
        login(client)

        response = client.post(
            "/posts", json={"title": "   ", "content": "There", "category": "soil"}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "validation_error"

    def test_get_nonexistent_post(self, client):
        """Should return 404 for a post that does not exist."""
        response = client.get(f"/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "not_found"

    def test_list_posts_includes_vote_state(self, client, post_id):
        """Listing reports the authenticated caller's vote on each post."""
        # Arrange
        login(client)
        client.post(f"/posts/{post_id}/vote", json={"vote_type": "down"})

        # Act
        response = client.get("/posts", params={"sort": "most_voted"})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["posts"][0]["vote_state"] == "down"
        assert body["posts"][0]["score"] == -1

    def test_list_posts_filters_by_category(self, client, post_id):
        """Posts outside the category are excluded."""
        response = client.get("/posts", params={"category": "market"})

        assert response.status_code == 200
        assert response.json()["posts"] == []


class TestVoteEndpoints:
    """End-to-end tests for the vote endpoint."""

    def test_vote_without_auth_fails(self, client, post_id):
        """Anonymous votes are rejected and nothing is counted."""
        # Act
        response = client.post(f"/posts/{post_id}/vote", json={"vote_type": "up"})

        # Assert
        assert response.status_code == 401
        assert client.get(f"/posts/{post_id}").json()["upvotes"] == 0

    def test_upvote_then_toggle_off(self, client, post_id):
        """Voting up twice returns the post to its original counters."""
        login(client)

        first = client.post(f"/posts/{post_id}/vote", json={"vote_type": "up"})
        second = client.post(f"/posts/{post_id}/vote", json={"vote_type": "up"})

        assert first.status_code == 200
        assert first.json()["vote_state"] == "up"
        assert first.json()["upvotes"] == 1
        assert second.json()["vote_state"] == "none"
        assert second.json()["upvotes"] == 0

    def test_switch_vote(self, client, post_id):
        """Scenario B over HTTP."""
        login(client)
        client.post(f"/posts/{post_id}/vote", json={"vote_type": "down"})

        response = client.post(f"/posts/{post_id}/vote", json={"vote_type": "up"})

        assert response.json() == {
            "post_id": post_id,
            "vote_state": "up",
            "upvotes": 1,
            "downvotes": 0,
            "score": 1,
        }

    def test_votes_from_several_users_accumulate(self, client, post_id):
        """Each user's vote is counted once."""
        for _ in range(3):
            login(client)
            client.post(f"/posts/{post_id}/vote", json={"vote_type": "up"})

        post = client.get(f"/posts/{post_id}").json()
        assert (post["upvotes"], post["downvotes"]) == (3, 0)

    def test_vote_on_missing_post(self, client):
        """Voting on an unknown post returns 404."""
        login(client)

        response = client.post(f"/posts/{uuid4()}/vote", json={"vote_type": "up"})

        assert response.status_code == 404

    def test_invalid_vote_type(self, client, post_id):
        """Only up and down are accepted."""
        login(client)

        response = client.post(f"/posts/{post_id}/vote", json={"vote_type": "sideways"})

        assert response.status_code == 422


class TestCommentEndpoints:
    """End-to-end tests for comment endpoints."""

    def test_add_comment(self, client, post_id):
        """Scenario C over HTTP."""
        # Arrange
        user_id = login(client)

        # Act
        response = client.post(
            f"/posts/{post_id}/comments", json={"content": "Side-dress with urea."}
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["author_id"] == user_id
        assert body["comment_count"] == 1
        assert client.get(f"/posts/{post_id}").json()["comment_count"] == 1

    def test_add_comment_without_auth_fails(self, client, post_id):
        """Anonymous comments are rejected."""
        response = client.post(f"/posts/{post_id}/comments", json={"content": "Hi"})

        assert response.status_code == 401

    def test_blank_comment_rejected(self, client, post_id):
        """Whitespace-only comments return 400."""
        login(client)

        response = client.post(f"/posts/{post_id}/comments", json={"content": "  "})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "validation_error"

    def test_comment_on_missing_post(self, client):
        """Commenting on an unknown post returns 404."""
        login(client)

        response = client.post(f"/posts/{uuid4()}/comments", json={"content": "Hi"})

        assert response.status_code == 404

    def test_list_comments_oldest_first(self, client, post_id):
        """The thread is listed in the order it was written."""
        # Arrange
        login(client)
        for text in ["one", "two", "three"]:
            client.post(f"/posts/{post_id}/comments", json={"content": text})

        # Act
        response = client.get(f"/posts/{post_id}/comments")

        # Assert
        assert response.status_code == 200
        assert [c["content"] for c in response.json()["comments"]] == [
            "one",
            "two",
            "three",
        ]
