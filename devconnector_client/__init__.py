"""
Python client for the DevConnector API.

``api`` wraps the REST endpoints, ``actions`` turns each call into
dispatched actions and ``store`` holds the resulting state::

    from devconnector_client import DevConnectorAPI, Store, actions

    api = DevConnectorAPI("http://localhost:5000/api")
    store = Store()
    actions.login(api, store.dispatch, "jane@example.com", "secret123")
    actions.get_current_profile(api, store.dispatch)
    store.get_state()["profile"]["profile"]
"""

from . import actions  # noqa: F401
from .api import DevConnectorAPI  # noqa: F401
from .store import Store  # noqa: F401
