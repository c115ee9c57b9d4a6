"""API tests against the app wired to in-memory stores."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from discuss.config import Settings
from discuss.domain.service import JWTService
from discuss.domain.value import Actor, Role
from discuss.interface.api.app import create_app
from tests.conftest import make_actor
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app(container=build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(Settings().auth)


def auth_headers(jwt_service: JWTService, actor: Actor) -> dict[str, str]:
    return {"Authorization": f"Bearer {jwt_service.create_token(actor)}"}


def create_category(client, jwt_service, name: str = "General") -> dict:
    response = client.post(
        "/categories",
        json={"name": name},
        headers=auth_headers(jwt_service, make_actor(Role.ADMIN)),
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_thread(client, jwt_service, author: Actor, category_id: str, **fields) -> dict:
    payload = {
        "title": "Replication of the 2019 result",
        "body": "We tried to replicate the headline figure.",
        "category_id": category_id,
        **fields,
    }
    response = client.post(
        "/threads", json=payload, headers=auth_headers(jwt_service, author)
    )
    assert response.status_code == 201, response.text
    return response.json()["thread"]


class TestHealth:
    def test_health(self, client):
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    """Mutations need a valid identity token."""

    def test_create_thread_without_token_is_401(self, client):
        # Act
        response = client.post(
            "/threads",
            json={
                "title": "Anonymous thread",
                "body": "Nobody knows who wrote this.",
                "category_id": str(uuid4()),
            },
        )

        # Assert
        assert response.status_code == 401

    def test_invalid_token_is_401(self, client):
        # Act
        response = client.post(
            "/threads/" + str(uuid4()) + "/upvote",
            headers={"Authorization": "Bearer not-a-token"},
        )

        # Assert
        assert response.status_code == 401

    def test_cookie_token_is_accepted(self, client, jwt_service):
        """The auth_token cookie works like the Bearer header."""
        # Arrange
        category = create_category(client, jwt_service)
        author = make_actor()
        thread = create_thread(client, jwt_service, author, category["category_id"])
        client.cookies.set("auth_token", jwt_service.create_token(make_actor()))

        # Act
        response = client.post(f"/threads/{thread['thread_id']}/upvote")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"upvotes": 1, "has_upvoted": True}


class TestThreadRoutes:
    """Thread lifecycle over HTTP."""

    def test_create_list_and_read_thread(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        author = make_actor()

        # Act
        thread = create_thread(
            client, jwt_service, author, category["category_id"], tags=["Optics"]
        )
        listing = client.get("/threads").json()
        detail = client.get(f"/threads/{thread['slug']}").json()

        # Assert
        assert thread["reply_count"] == 0
        assert thread["author_id"] == str(author.user_id)
        assert listing["total"] == 1
        assert listing["threads"][0]["thread_id"] == thread["thread_id"]
        assert detail["content"]["tags"] == ["optics"]
        assert detail["content"]["original_post"]["upvotes"] == 0
        assert detail["content"]["comments"] == []

    def test_create_in_unknown_category_is_404(self, client, jwt_service):
        # Act
        response = client.post(
            "/threads",
            json={
                "title": "Lost thread",
                "body": "This category does not exist.",
                "category_id": str(uuid4()),
            },
            headers=auth_headers(jwt_service, make_actor()),
        )

        # Assert
        assert response.status_code == 404
        assert "Category" in response.json()["detail"]

    def test_short_title_is_422(self, client, jwt_service):
        # Act
        response = client.post(
            "/threads",
            json={
                "title": "Hey",
                "body": "Title is below the minimum.",
                "category_id": str(uuid4()),
            },
            headers=auth_headers(jwt_service, make_actor()),
        )

        # Assert
        assert response.status_code == 422

    def test_unknown_slug_is_404(self, client):
        # Act
        response = client.get("/threads/does-not-exist")

        # Assert
        assert response.status_code == 404

    def test_update_by_stranger_is_403(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])

        # Act
        response = client.patch(
            f"/threads/{thread['thread_id']}",
            json={"title": "Hijacked title"},
            headers=auth_headers(jwt_service, make_actor()),
        )

        # Assert
        assert response.status_code == 403

    def test_moderator_locks_pins_and_deletes(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])
        moderator = auth_headers(jwt_service, make_actor(Role.MODERATOR))
        thread_id = thread["thread_id"]

        # Act
        pinned = client.patch(f"/threads/{thread_id}/pin", headers=moderator)
        locked = client.patch(f"/threads/{thread_id}/lock", headers=moderator)
        comment = client.post(
            f"/threads/{thread_id}/comments",
            json={"body": "Too late"},
            headers=auth_headers(jwt_service, make_actor()),
        )
        deleted = client.delete(f"/threads/{thread_id}", headers=moderator)
        after = client.get(f"/threads/{thread['slug']}")

        # Assert
        assert pinned.json()["is_pinned"] is True
        assert locked.json()["is_locked"] is True
        assert comment.status_code == 403
        assert deleted.status_code == 204
        assert after.status_code == 404


class TestCommentAndVoteRoutes:
    """Comments and votes over HTTP."""

    def test_comment_lifecycle(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])
        author = auth_headers(jwt_service, make_actor())
        base = f"/threads/{thread['thread_id']}/comments"

        # Act
        created = client.post(base, json={"body": "First!"}, headers=author)
        comment_id = created.json()["comment"]["comment_id"]
        reply = client.post(
            base,
            json={"body": "Reply", "parent_comment_id": comment_id},
            headers=author,
        )
        edited = client.patch(
            f"{base}/{comment_id}", json={"body": "First, edited"}, headers=author
        )
        deleted = client.delete(f"{base}/{comment_id}", headers=author)
        detail = client.get(f"/threads/{thread['slug']}").json()

        # Assert
        assert created.status_code == 201
        assert created.json()["counter_synced"] is True
        assert reply.status_code == 201
        assert edited.json()["comment"]["is_edited"] is True
        assert deleted.status_code == 200
        assert deleted.json()["comment"]["body"] == "[deleted]"

        comments = detail["content"]["comments"]
        assert [c["comment_id"] for c in comments][0] == comment_id
        assert comments[0]["is_deleted"] is True
        assert comments[1]["parent_comment_id"] == comment_id
        assert detail["thread"]["reply_count"] == 1

    def test_empty_comment_is_422(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])

        # Act
        response = client.post(
            f"/threads/{thread['thread_id']}/comments",
            json={"body": ""},
            headers=auth_headers(jwt_service, make_actor()),
        )

        # Assert
        assert response.status_code == 422

    def test_vote_toggles(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])
        voter = auth_headers(jwt_service, make_actor())
        url = f"/threads/{thread['thread_id']}/upvote"

        # Act
        first = client.post(url, headers=voter).json()
        second = client.post(url, headers=voter).json()

        # Assert
        assert first == {"upvotes": 1, "has_upvoted": True}
        assert second == {"upvotes": 0, "has_upvoted": False}

    def test_vote_on_deleted_comment_is_404(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])
        author = auth_headers(jwt_service, make_actor())
        base = f"/threads/{thread['thread_id']}/comments"
        comment_id = client.post(base, json={"body": "Bye"}, headers=author).json()[
            "comment"
        ]["comment_id"]
        client.delete(f"{base}/{comment_id}", headers=author)

        # Act
        response = client.post(
            f"{base}/{comment_id}/upvote",
            headers=auth_headers(jwt_service, make_actor()),
        )

        # Assert
        assert response.status_code == 404


class TestCategoryRoutes:
    """Category registry over HTTP."""

    def test_only_admins_create_categories(self, client, jwt_service):
        # Act
        response = client.post(
            "/categories",
            json={"name": "Physics"},
            headers=auth_headers(jwt_service, make_actor(Role.MODERATOR)),
        )

        # Assert
        assert response.status_code == 403

    def test_duplicate_category_is_409(self, client, jwt_service):
        # Arrange
        create_category(client, jwt_service, name="Physics")

        # Act
        response = client.post(
            "/categories",
            json={"name": "Physics"},
            headers=auth_headers(jwt_service, make_actor(Role.ADMIN)),
        )

        # Assert
        assert response.status_code == 409

    def test_list_get_and_archive(self, client, jwt_service):
        # Arrange
        physics = create_category(client, jwt_service, name="Physics")
        create_category(client, jwt_service, name="Biology")
        admin = auth_headers(jwt_service, make_actor(Role.ADMIN))

        # Act
        archived = client.patch(
            f"/categories/{physics['category_id']}",
            json={"status": "archived"},
            headers=admin,
        )
        listing = client.get("/categories").json()
        found = client.get("/categories/physics")

        # Assert
        assert archived.json()["status"] == "archived"
        assert [c["name"] for c in listing["categories"]] == ["Biology"]
        assert found.status_code == 200
        assert found.json()["status"] == "archived"


class TestAdminRoutes:
    """Activity log and dashboard stats over HTTP."""

    def test_activity_log_requires_admin(self, client, jwt_service):
        # Act
        anonymous = client.get("/admin/activity")
        moderator = client.get(
            "/admin/activity",
            headers=auth_headers(jwt_service, make_actor(Role.MODERATOR)),
        )

        # Assert
        assert anonymous.status_code == 401
        assert moderator.status_code == 403

    def test_activity_log_page(self, client, jwt_service):
        # Act
        response = client.get(
            "/admin/activity",
            params={"action": "CREATE_THREAD", "page": 1, "limit": 10},
            headers=auth_headers(jwt_service, make_actor(Role.ADMIN)),
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["limit"] == 10
        assert all(e["action"] == "CREATE_THREAD" for e in body["entries"])

    def test_unknown_action_filter_is_422(self, client, jwt_service):
        # Act
        response = client.get(
            "/admin/activity",
            params={"action": "NOT_AN_ACTION"},
            headers=auth_headers(jwt_service, make_actor(Role.ADMIN)),
        )

        # Assert
        assert response.status_code == 422

    def test_dashboard_stats(self, client, jwt_service):
        # Arrange
        category = create_category(client, jwt_service)
        thread = create_thread(client, jwt_service, make_actor(), category["category_id"])
        reply = client.post(
            f"/threads/{thread['thread_id']}/comments",
            json={"body": "First reply"},
            headers=auth_headers(jwt_service, make_actor()),
        )
        assert reply.status_code == 201, reply.text

        # Act
        response = client.get(
            "/admin/stats", headers=auth_headers(jwt_service, make_actor(Role.ADMIN))
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["threads"] == {"total": 1, "total_replies": 1}
        assert isinstance(body["activity_last_24h"], dict)

    def test_dashboard_stats_forbidden_for_users(self, client, jwt_service):
        # Act
        response = client.get(
            "/admin/stats", headers=auth_headers(jwt_service, make_actor())
        )

        # Assert
        assert response.status_code == 403
