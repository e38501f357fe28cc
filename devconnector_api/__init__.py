"""
Top-level package for the DevConnector API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``devconnector_api.app.main:app``.
"""

__all__ = []
