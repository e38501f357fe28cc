"""Action creators for the DevConnector client state.

Every function here takes a :class:`~devconnector_client.api.DevConnectorAPI`
and a ``dispatch`` callable, performs one API call and dispatches the
outcome as a plain action dictionary ``{"type": ..., "payload": ...}``.
Failures are normalised into one error payload shape,
``{"msg": <message>, "status": <HTTP status or None>}``, under the
domain's ``*_ERROR`` action.  Validation failures additionally raise
one ``danger`` alert per field.

The functions return ``True`` on success so that a caller can decide
whether to navigate away from a form.
"""

import uuid
from typing import Any, Callable, Dict, Optional

from .api import DevConnectorAPI

Dispatch = Callable[[Dict[str, Any]], Any]

# Alerts
SET_ALERT = "SET_ALERT"
REMOVE_ALERT = "REMOVE_ALERT"

# Auth
REGISTER_SUCCESS = "REGISTER_SUCCESS"
REGISTER_FAIL = "REGISTER_FAIL"
USER_LOADED = "USER_LOADED"
AUTH_ERROR = "AUTH_ERROR"
LOGIN_SUCCESS = "LOGIN_SUCCESS"
LOGIN_FAIL = "LOGIN_FAIL"
LOGOUT = "LOGOUT"

# Profiles
GET_PROFILE = "GET_PROFILE"
GET_PROFILES = "GET_PROFILES"
PROFILE_ERROR = "PROFILE_ERROR"
UPDATE_PROFILE = "UPDATE_PROFILE"
CLEAR_PROFILE = "CLEAR_PROFILE"
ACCOUNT_DELETED = "ACCOUNT_DELETED"
GET_REPOS = "GET_REPOS"

# Posts
GET_POSTS = "GET_POSTS"
GET_POST = "GET_POST"
POST_ERROR = "POST_ERROR"
UPDATE_LIKES = "UPDATE_LIKES"
DELETE_POST = "DELETE_POST"
ADD_POST = "ADD_POST"
ADD_COMMENT = "ADD_COMMENT"
REMOVE_COMMENT = "REMOVE_COMMENT"


def error_payload(error: Dict[str, Any]) -> Dict[str, Any]:
    return {"msg": error.get("message"), "status": error.get("status_code")}


def set_alert(dispatch: Dispatch, msg: str, alert_type: str = "success", alert_id: Optional[str] = None) -> str:
    """Dispatch an alert and return its id (used to remove it later)."""
    alert_id = alert_id or str(uuid.uuid4())
    dispatch({"type": SET_ALERT, "payload": {"id": alert_id, "msg": msg, "alert_type": alert_type}})
    return alert_id


def remove_alert(dispatch: Dispatch, alert_id: str) -> None:
    dispatch({"type": REMOVE_ALERT, "payload": alert_id})


def _alert_field_errors(dispatch: Dispatch, error: Dict[str, Any]) -> None:
    for field_error in error.get("errors") or []:
        set_alert(dispatch, field_error.get("msg", ""), "danger")


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------

def load_user(api: DevConnectorAPI, dispatch: Dispatch) -> bool:
    data, error = api.load_user()
    if error:
        dispatch({"type": AUTH_ERROR})
        return False
    dispatch({"type": USER_LOADED, "payload": data})
    return True


def register(api: DevConnectorAPI, dispatch: Dispatch, name: str, email: str, password: str) -> bool:
    """Register, install the token and load the new user."""
    data, error = api.register(name, email, password)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": REGISTER_FAIL})
        return False
    api.set_auth_token(data["token"])
    dispatch({"type": REGISTER_SUCCESS, "payload": data})
    load_user(api, dispatch)
    return True


def login(api: DevConnectorAPI, dispatch: Dispatch, email: str, password: str) -> bool:
    data, error = api.login(email, password)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": LOGIN_FAIL})
        return False
    dispatch({"type": LOGIN_SUCCESS, "payload": data})
    load_user(api, dispatch)
    return True


def logout(api: DevConnectorAPI, dispatch: Dispatch) -> None:
    api.set_auth_token(None)
    dispatch({"type": CLEAR_PROFILE})
    dispatch({"type": LOGOUT})


# ----------------------------------------------------------------------
# Profiles
# ----------------------------------------------------------------------

def get_current_profile(api: DevConnectorAPI, dispatch: Dispatch) -> bool:
    data, error = api.get_current_profile()
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_PROFILE, "payload": data})
    return True


def get_profiles(api: DevConnectorAPI, dispatch: Dispatch) -> bool:
    """Load every profile, clearing the currently viewed one first."""
    dispatch({"type": CLEAR_PROFILE})
    data, error = api.get_profiles()
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_PROFILES, "payload": data})
    return True


def get_profile_by_id(api: DevConnectorAPI, dispatch: Dispatch, user_id: str) -> bool:
    data, error = api.get_profile_by_id(user_id)
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_PROFILE, "payload": data})
    return True


def get_github_repos(api: DevConnectorAPI, dispatch: Dispatch, username: str) -> bool:
    data, error = api.get_github_repos(username)
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_REPOS, "payload": data})
    return True


def create_profile(api: DevConnectorAPI, dispatch: Dispatch, form_data: Dict[str, Any], edit: bool = False) -> bool:
    """Create or update the caller's profile."""
    data, error = api.create_profile(form_data)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_PROFILE, "payload": data})
    set_alert(dispatch, "Profile updated successfully" if edit else "Profile created successfully", "success")
    return True


def add_experience(api: DevConnectorAPI, dispatch: Dispatch, form_data: Dict[str, Any]) -> bool:
    data, error = api.add_experience(form_data)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_PROFILE, "payload": data})
    set_alert(dispatch, "Experience added successfully", "success")
    return True


def add_education(api: DevConnectorAPI, dispatch: Dispatch, form_data: Dict[str, Any]) -> bool:
    data, error = api.add_education(form_data)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_PROFILE, "payload": data})
    set_alert(dispatch, "Education added successfully", "success")
    return True


def delete_experience(api: DevConnectorAPI, dispatch: Dispatch, exp_id: str) -> bool:
    data, error = api.delete_experience(exp_id)
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_PROFILE, "payload": data})
    set_alert(dispatch, "Experience removed", "success")
    return True


def delete_education(api: DevConnectorAPI, dispatch: Dispatch, edu_id: str) -> bool:
    data, error = api.delete_education(edu_id)
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_PROFILE, "payload": data})
    set_alert(dispatch, "Education removed", "success")
    return True


def delete_account(api: DevConnectorAPI, dispatch: Dispatch, confirmed: bool = False) -> bool:
    """Delete the account, profile and posts.  Does nothing unless ``confirmed``."""
    if not confirmed:
        return False
    _, error = api.delete_account()
    if error:
        dispatch({"type": PROFILE_ERROR, "payload": error_payload(error)})
        return False
    api.set_auth_token(None)
    dispatch({"type": CLEAR_PROFILE})
    dispatch({"type": ACCOUNT_DELETED})
    set_alert(dispatch, "Your account has now been deleted", "success")
    return True


# ----------------------------------------------------------------------
# Posts
# ----------------------------------------------------------------------

def get_posts(api: DevConnectorAPI, dispatch: Dispatch) -> bool:
    data, error = api.get_posts()
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_POSTS, "payload": data})
    return True


def get_post(api: DevConnectorAPI, dispatch: Dispatch, post_id: str) -> bool:
    data, error = api.get_post(post_id)
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": GET_POST, "payload": data})
    return True


def add_post(api: DevConnectorAPI, dispatch: Dispatch, form_data: Dict[str, Any]) -> bool:
    data, error = api.add_post(form_data)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": ADD_POST, "payload": data})
    set_alert(dispatch, "Post Created", "success")
    return True


def delete_post(api: DevConnectorAPI, dispatch: Dispatch, post_id: str) -> bool:
    _, error = api.delete_post(post_id)
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": DELETE_POST, "payload": post_id})
    set_alert(dispatch, "Post Removed", "success")
    return True


def add_like(api: DevConnectorAPI, dispatch: Dispatch, post_id: str) -> bool:
    data, error = api.add_like(post_id)
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_LIKES, "payload": {"id": post_id, "likes": data}})
    return True


def remove_like(api: DevConnectorAPI, dispatch: Dispatch, post_id: str) -> bool:
    data, error = api.remove_like(post_id)
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": UPDATE_LIKES, "payload": {"id": post_id, "likes": data}})
    return True


def add_comment(api: DevConnectorAPI, dispatch: Dispatch, post_id: str, form_data: Dict[str, Any]) -> bool:
    data, error = api.add_comment(post_id, form_data)
    if error:
        _alert_field_errors(dispatch, error)
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": ADD_COMMENT, "payload": data})
    set_alert(dispatch, "Comment Added", "success")
    return True


def delete_comment(api: DevConnectorAPI, dispatch: Dispatch, post_id: str, comment_id: str) -> bool:
    _, error = api.delete_comment(post_id, comment_id)
    if error:
        dispatch({"type": POST_ERROR, "payload": error_payload(error)})
        return False
    dispatch({"type": REMOVE_COMMENT, "payload": comment_id})
    set_alert(dispatch, "Comment Removed", "success")
    return True
