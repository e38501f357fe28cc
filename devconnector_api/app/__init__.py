"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (users, profiles, posts) has a schema module,
a service module and a router in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
