"""
Version 1 of the DevConnector REST API.

Mounted twice by ``main.create_app``: under ``/api/v1`` and under the
unversioned ``/api`` prefix that the web client calls.
"""
