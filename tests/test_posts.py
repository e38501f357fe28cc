import asyncio
import time

import pytest

from devconnector_api.app.core.db import get_database


@pytest.fixture
def post(authorized_client):
    client, user = authorized_client
    resp = client.post("/api/posts", json={"text": "Hello world"}, headers=user["headers"])
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_post_snapshots_author(authorized_client, post):
    _, user = authorized_client

    assert post["text"] == "Hello world"
    assert post["user"] == user["id"]
    assert post["name"] == "Alice"
    assert post["avatar"] == user["avatar"]
    assert post["likes"] == []
    assert post["comments"] == []


def test_create_post_requires_text(authorized_client):
    client, user = authorized_client

    resp = client.post("/api/posts", json={"text": ""}, headers=user["headers"])

    assert resp.status_code == 400
    assert resp.json()["detail"][0]["msg"] == "Post content is required"


def test_list_posts_newest_first(authorized_client):
    client, user = authorized_client
    for text in ("first", "second", "third"):
        client.post("/api/posts", json={"text": text}, headers=user["headers"])
        time.sleep(0.01)

    resp = client.get("/api/posts", headers=user["headers"])

    assert resp.status_code == 200
    assert [p["text"] for p in resp.json()] == ["third", "second", "first"]


def test_get_post(authorized_client, post):
    client, user = authorized_client

    resp = client.get(f"/api/posts/{post['_id']}", headers=user["headers"])

    assert resp.status_code == 200
    assert resp.json()["_id"] == post["_id"]


@pytest.mark.parametrize("post_id", ["5f1d7f0c2b3c4d5e6f708192", "not-an-id"])
def test_get_missing_post(authorized_client, post_id):
    client, user = authorized_client

    resp = client.get(f"/api/posts/{post_id}", headers=user["headers"])

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post not found"


def test_delete_own_post(authorized_client, post):
    client, user = authorized_client

    resp = client.delete(f"/api/posts/{post['_id']}", headers=user["headers"])

    assert resp.status_code == 200
    assert resp.json() == {"msg": "Post removed"}
    assert client.get(f"/api/posts/{post['_id']}", headers=user["headers"]).status_code == 404


def test_delete_foreign_post_is_refused(authorized_client, make_user, post):
    client, user = authorized_client
    bob = make_user("Bob", "bob@example.com")

    resp = client.delete(f"/api/posts/{post['_id']}", headers=bob["headers"])

    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not authorised"
    assert client.get(f"/api/posts/{post['_id']}", headers=user["headers"]).status_code == 200


def test_like_twice_conflicts(authorized_client, post):
    client, user = authorized_client

    first = client.put(f"/api/posts/like/{post['_id']}", headers=user["headers"])
    second = client.put(f"/api/posts/like/{post['_id']}", headers=user["headers"])

    assert first.status_code == 200
    assert [like["user"] for like in first.json()] == [user["id"]]
    assert second.status_code == 400
    assert second.json()["detail"] == "Post already liked"
    likes = client.get(f"/api/posts/{post['_id']}", headers=user["headers"]).json()["likes"]
    assert len(likes) == 1


def test_likes_are_head_inserted(authorized_client, make_user, post):
    client, user = authorized_client
    bob = make_user("Bob", "bob@example.com")

    client.put(f"/api/posts/like/{post['_id']}", headers=user["headers"])
    resp = client.put(f"/api/posts/like/{post['_id']}", headers=bob["headers"])

    assert [like["user"] for like in resp.json()] == [bob["id"], user["id"]]


def test_unlike_without_like_conflicts(authorized_client, post):
    client, user = authorized_client

    resp = client.put(f"/api/posts/unlike/{post['_id']}", headers=user["headers"])

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Post has not yet been liked"
    likes = client.get(f"/api/posts/{post['_id']}", headers=user["headers"]).json()["likes"]
    assert likes == []


def test_unlike_removes_only_callers_like(authorized_client, make_user, post):
    client, user = authorized_client
    bob = make_user("Bob", "bob@example.com")
    client.put(f"/api/posts/like/{post['_id']}", headers=user["headers"])
    client.put(f"/api/posts/like/{post['_id']}", headers=bob["headers"])

    resp = client.put(f"/api/posts/unlike/{post['_id']}", headers=user["headers"])

    assert resp.status_code == 200
    assert [like["user"] for like in resp.json()] == [bob["id"]]


def test_like_missing_post(authorized_client):
    client, user = authorized_client

    resp = client.put("/api/posts/like/5f1d7f0c2b3c4d5e6f708192", headers=user["headers"])

    assert resp.status_code == 404


def test_add_comment(authorized_client, make_user, post):
    client, user = authorized_client
    bob = make_user("Bob", "bob@example.com")

    client.post(f"/api/posts/comment/{post['_id']}", json={"text": "first"}, headers=user["headers"])
    resp = client.post(f"/api/posts/comment/{post['_id']}", json={"text": "second"}, headers=bob["headers"])

    assert resp.status_code == 200
    comments = resp.json()
    assert [c["text"] for c in comments] == ["second", "first"]
    assert comments[0]["name"] == "Bob"
    assert comments[0]["user"] == bob["id"]


def test_add_comment_requires_text(authorized_client, post):
    client, user = authorized_client

    resp = client.post(f"/api/posts/comment/{post['_id']}", json={}, headers=user["headers"])

    assert resp.status_code == 400
    assert resp.json()["detail"][0]["param"] == "text"


def test_delete_comment_by_id(authorized_client, post):
    client, user = authorized_client
    client.post(f"/api/posts/comment/{post['_id']}", json={"text": "older"}, headers=user["headers"])
    comments = client.post(
        f"/api/posts/comment/{post['_id']}", json={"text": "newer"}, headers=user["headers"]
    ).json()
    older_id = comments[1]["_id"]

    resp = client.delete(f"/api/posts/comment/{post['_id']}/{older_id}", headers=user["headers"])

    assert resp.status_code == 200
    assert [c["text"] for c in resp.json()] == ["newer"]


def test_delete_foreign_comment_is_refused(authorized_client, make_user, post):
    client, user = authorized_client
    bob = make_user("Bob", "bob@example.com")
    comments = client.post(
        f"/api/posts/comment/{post['_id']}", json={"text": "mine"}, headers=user["headers"]
    ).json()

    resp = client.delete(f"/api/posts/comment/{post['_id']}/{comments[0]['_id']}", headers=bob["headers"])

    assert resp.status_code == 401
    assert len(client.get(f"/api/posts/{post['_id']}", headers=user["headers"]).json()["comments"]) == 1


def test_delete_missing_comment(authorized_client, post):
    client, user = authorized_client

    resp = client.delete(f"/api/posts/comment/{post['_id']}/5f1d7f0c2b3c4d5e6f708192", headers=user["headers"])

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Comment does not exist"


def test_author_snapshot_is_not_resynced(authorized_client, post):
    client, user = authorized_client

    asyncio.run(get_database().users.update_one({"name": "Alice"}, {"$set": {"name": "Alicia"}}))

    resp = client.get(f"/api/posts/{post['_id']}", headers=user["headers"])
    assert resp.json()["name"] == "Alice"
