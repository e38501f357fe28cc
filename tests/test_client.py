import json

import pytest
import requests

from devconnector_client import DevConnectorAPI, Store, actions


def make_response(status_code, body=None, reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = "http://testserver/api"
    response.encoding = "utf-8"
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


class FakeSession:
    """Stands in for ``requests.Session``; replies are queued per call."""

    def __init__(self, *replies):
        self.headers = {}
        self.replies = list(replies)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": dict(self.headers)})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def store():
    return Store()


def test_set_auth_token_installs_and_removes_header():
    session = FakeSession()
    api = DevConnectorAPI(session=session, token="abc")
    assert session.headers["x-auth-token"] == "abc"

    api.set_auth_token(None)
    assert "x-auth-token" not in session.headers


def test_default_base_url_matches_run_py_port():
    api = DevConnectorAPI(session=FakeSession())
    assert api.base_url == "http://localhost:5000/api"


def test_request_builds_url_and_body():
    session = FakeSession(make_response(200, {"_id": "p1"}))
    api = DevConnectorAPI("http://localhost:5000/api/", session=session)

    data, error = api.add_post({"text": "hi"})

    assert error is None
    assert data == {"_id": "p1"}
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["url"] == "http://localhost:5000/api/posts"
    assert session.calls[0]["json"] == {"text": "hi"}


def test_string_detail_becomes_message():
    session = FakeSession(make_response(400, {"detail": "Profile not found"}, reason="Bad Request"))
    api = DevConnectorAPI(session=session)

    data, error = api.get_profile_by_id("x")

    assert data is None
    assert error == {"status_code": 400, "message": "Profile not found", "errors": []}


def test_list_detail_becomes_field_errors():
    detail = [
        {"msg": "Status is required", "param": "status", "location": "body"},
        {"msg": "Skills are required", "param": "skills", "location": "body"},
    ]
    session = FakeSession(make_response(400, {"detail": detail}, reason="Bad Request"))
    api = DevConnectorAPI(session=session)

    _, error = api.create_profile({})

    assert error["errors"] == detail
    assert error["message"] == "Status is required; Skills are required"


def test_transport_error_has_no_status():
    session = FakeSession(requests.ConnectionError("refused"))
    api = DevConnectorAPI(session=session)

    data, error = api.get_posts()

    assert data is None
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_login_installs_token_and_loads_user(store):
    user = {"_id": "u1", "name": "Jane", "avatar": "//gravatar"}
    session = FakeSession(make_response(200, {"token": "tok"}), make_response(200, user))
    api = DevConnectorAPI(session=session)

    assert actions.login(api, store.dispatch, "jane@example.com", "secret123") is True

    auth = store.get_state()["auth"]
    assert auth["token"] == "tok"
    assert auth["is_authenticated"] is True
    assert auth["user"] == user
    assert session.calls[1]["headers"]["x-auth-token"] == "tok"


def test_failed_register_raises_one_alert_per_field(store):
    detail = [{"msg": "Name is required", "param": "name"}, {"msg": "Please include a valid email", "param": "email"}]
    session = FakeSession(make_response(400, {"detail": detail}, reason="Bad Request"))
    api = DevConnectorAPI(session=session)

    assert actions.register(api, store.dispatch, "", "bad", "secret123") is False

    state = store.get_state()
    assert [alert["msg"] for alert in state["alert"]] == ["Name is required", "Please include a valid email"]
    assert all(alert["alert_type"] == "danger" for alert in state["alert"])
    assert state["auth"]["is_authenticated"] is False


def test_profile_error_is_normalized(store):
    session = FakeSession(make_response(400, {"detail": "There is no profile associated with this user"}))
    api = DevConnectorAPI(session=session)

    assert actions.get_current_profile(api, store.dispatch) is False

    profile = store.get_state()["profile"]
    assert profile["error"] == {"msg": "There is no profile associated with this user", "status": 400}
    assert profile["profile"] is None
    assert profile["loading"] is False


def test_create_profile_alerts_success(store):
    session = FakeSession(make_response(200, {"_id": "p1", "status": "Developer"}))
    api = DevConnectorAPI(session=session)

    assert actions.create_profile(api, store.dispatch, {"status": "Developer", "skills": "py"}, edit=True)

    state = store.get_state()
    assert state["profile"]["profile"]["_id"] == "p1"
    assert state["alert"][-1]["msg"] == "Profile updated successfully"


def test_delete_account_requires_confirmation(store):
    session = FakeSession(make_response(200, {"msg": "User deleted"}))
    api = DevConnectorAPI(session=session, token="tok")

    assert actions.delete_account(api, store.dispatch) is False
    assert session.calls == []

    assert actions.delete_account(api, store.dispatch, confirmed=True) is True
    assert session.calls[0]["method"] == "DELETE"
    assert "x-auth-token" not in session.headers
    assert store.get_state()["auth"]["is_authenticated"] is False


def test_like_updates_only_that_post(store):
    store.dispatch({"type": actions.GET_POSTS, "payload": [{"_id": "p1", "likes": []}, {"_id": "p2", "likes": []}]})
    session = FakeSession(make_response(200, [{"_id": "l1", "user": "u1"}]))
    api = DevConnectorAPI(session=session)

    assert actions.add_like(api, store.dispatch, "p2") is True

    posts = store.get_state()["post"]["posts"]
    assert posts[0]["likes"] == []
    assert posts[1]["likes"] == [{"_id": "l1", "user": "u1"}]


def test_add_and_delete_post(store):
    store.dispatch({"type": actions.GET_POSTS, "payload": [{"_id": "old"}]})
    session = FakeSession(make_response(200, {"_id": "new"}), make_response(200, {"msg": "Post removed"}))
    api = DevConnectorAPI(session=session)

    actions.add_post(api, store.dispatch, {"text": "hi"})
    assert [p["_id"] for p in store.get_state()["post"]["posts"]] == ["new", "old"]

    actions.delete_post(api, store.dispatch, "old")
    assert [p["_id"] for p in store.get_state()["post"]["posts"]] == ["new"]


def test_remove_comment_from_open_post(store):
    store.dispatch({"type": actions.GET_POST, "payload": {"_id": "p1", "comments": [{"_id": "c1"}, {"_id": "c2"}]}})
    session = FakeSession(make_response(200, [{"_id": "c2"}]))
    api = DevConnectorAPI(session=session)

    assert actions.delete_comment(api, store.dispatch, "p1", "c1") is True

    assert store.get_state()["post"]["post"]["comments"] == [{"_id": "c2"}]


def test_store_subscribe_and_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(lambda: seen.append(len(store.get_state()["alert"])))

    alert_id = actions.set_alert(store.dispatch, "Hello")
    unsubscribe()
    actions.remove_alert(store.dispatch, alert_id)

    assert seen == [1]
    assert store.get_state()["alert"] == []


def test_reducers_ignore_unknown_actions(store):
    before = store.get_state()
    store.dispatch({"type": "SOMETHING_ELSE"})
    assert store.get_state() == before
