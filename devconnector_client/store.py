"""Reducers and a minimal store for the client state.

State only changes by dispatching an action through :class:`Store`;
each reducer is a pure function ``(state, action) -> new state`` that
returns its input unchanged for actions it does not handle.
"""

from typing import Any, Callable, Dict, List, Optional

from . import actions as a

Reducer = Callable[[Any, Dict[str, Any]], Any]


def alert_reducer(state: Optional[List[dict]] = None, action: Optional[dict] = None) -> List[dict]:
    state = [] if state is None else state
    action = action or {}
    if action.get("type") == a.SET_ALERT:
        return state + [action["payload"]]
    if action.get("type") == a.REMOVE_ALERT:
        return [alert for alert in state if alert["id"] != action["payload"]]
    return state


def _auth_initial() -> dict:
    return {"token": None, "is_authenticated": None, "loading": True, "user": None}


def auth_reducer(state: Optional[dict] = None, action: Optional[dict] = None) -> dict:
    state = _auth_initial() if state is None else state
    action = action or {}
    kind = action.get("type")
    if kind == a.USER_LOADED:
        return {**state, "is_authenticated": True, "loading": False, "user": action["payload"]}
    if kind in (a.REGISTER_SUCCESS, a.LOGIN_SUCCESS):
        return {**state, "token": action["payload"]["token"], "is_authenticated": True, "loading": False}
    if kind in (a.REGISTER_FAIL, a.AUTH_ERROR, a.LOGIN_FAIL, a.LOGOUT, a.ACCOUNT_DELETED):
        return {**state, "token": None, "is_authenticated": False, "loading": False, "user": None}
    return state


def _profile_initial() -> dict:
    return {"profile": None, "profiles": [], "repos": [], "loading": True, "error": {}}


def profile_reducer(state: Optional[dict] = None, action: Optional[dict] = None) -> dict:
    state = _profile_initial() if state is None else state
    action = action or {}
    kind = action.get("type")
    if kind in (a.GET_PROFILE, a.UPDATE_PROFILE):
        return {**state, "profile": action["payload"], "loading": False}
    if kind == a.GET_PROFILES:
        return {**state, "profiles": action["payload"], "loading": False}
    if kind == a.PROFILE_ERROR:
        # A failed lookup also clears the profile being viewed.
        return {**state, "error": action["payload"], "loading": False, "profile": None}
    if kind == a.CLEAR_PROFILE:
        return {**state, "profile": None, "repos": [], "loading": False}
    if kind == a.GET_REPOS:
        return {**state, "repos": action["payload"], "loading": False}
    return state


def _post_initial() -> dict:
    return {"posts": [], "post": None, "loading": True, "error": {}}


def post_reducer(state: Optional[dict] = None, action: Optional[dict] = None) -> dict:
    state = _post_initial() if state is None else state
    action = action or {}
    kind = action.get("type")
    payload = action.get("payload")
    if kind == a.GET_POSTS:
        return {**state, "posts": payload, "loading": False}
    if kind == a.GET_POST:
        return {**state, "post": payload, "loading": False}
    if kind == a.ADD_POST:
        return {**state, "posts": [payload] + state["posts"], "loading": False}
    if kind == a.DELETE_POST:
        return {**state, "posts": [p for p in state["posts"] if p["_id"] != payload], "loading": False}
    if kind == a.POST_ERROR:
        return {**state, "error": payload, "loading": False}
    if kind == a.UPDATE_LIKES:
        posts = [
            {**p, "likes": payload["likes"]} if p["_id"] == payload["id"] else p
            for p in state["posts"]
        ]
        return {**state, "posts": posts, "loading": False}
    if kind == a.ADD_COMMENT and state["post"] is not None:
        return {**state, "post": {**state["post"], "comments": payload}, "loading": False}
    if kind == a.REMOVE_COMMENT and state["post"] is not None:
        comments = [c for c in state["post"].get("comments", []) if c["_id"] != payload]
        return {**state, "post": {**state["post"], "comments": comments}, "loading": False}
    return state


def combine_reducers(**reducers: Reducer) -> Reducer:
    """Build a root reducer whose state is a dict keyed like ``reducers``."""

    def root(state: Optional[dict], action: dict) -> dict:
        state = state or {}
        return {key: reducer(state.get(key), action) for key, reducer in reducers.items()}

    return root


root_reducer = combine_reducers(
    alert=alert_reducer,
    auth=auth_reducer,
    profile=profile_reducer,
    post=post_reducer,
)


class Store:
    """Holds the state tree; the only way to change it is ``dispatch``."""

    def __init__(self, reducer: Reducer = root_reducer, initial_state: Any = None) -> None:
        self._reducer = reducer
        self._state = reducer(initial_state, {"type": "@@INIT"})
        self._listeners: List[Callable[[], None]] = []

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, action: Dict[str, Any]) -> Dict[str, Any]:
        self._state = self._reducer(self._state, action)
        for listener in list(self._listeners):
            listener()
        return action

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
