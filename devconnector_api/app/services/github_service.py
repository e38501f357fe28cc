"""
GitHub repository lookup.

Profiles may name a GitHub account; the profile page shows that
account's five oldest-first repositories.  The request is proxied
through the API so the GitHub token stays on the server.
"""

import logging
from typing import Any

import requests
from starlette.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class GithubService:

    @classmethod
    async def get_repos(cls, username: str) -> Any:
        """Return the JSON body GitHub sends for ``username``'s repositories.

        Any non-200 answer becomes ``NotFoundError``.  Transport errors
        (``requests.RequestException``) propagate to the caller.
        """
        url = f"{settings.github_api_url}/users/{requests.utils.quote(username, safe='')}/repos"
        headers = {"user-agent": "devconnector-api"}
        if settings.github_token:
            headers["Authorization"] = f"token {settings.github_token}"
        logger.debug("Fetching GitHub repositories for %s", username)
        response = await run_in_threadpool(
            requests.get,
            url,
            params={"per_page": 5, "sort": "created:asc"},
            headers=headers,
            timeout=settings.github_timeout,
        )
        if response.status_code != 200:
            logger.warning("GitHub answered %s for user %s", response.status_code, username)
            raise NotFoundError("No Github profile found")
        return response.json()
