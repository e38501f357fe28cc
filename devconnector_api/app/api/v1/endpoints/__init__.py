"""
Routers for users/auth, profiles and posts.

Handlers stay thin: they pull the caller's id from ``get_current_user``,
call one service classmethod and map service errors with
``api.v1.errors``.
"""
