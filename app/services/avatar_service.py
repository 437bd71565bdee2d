"""
AvatarService - GitHub avatar lookup for leaderboard rows.

Best effort: any failure is logged and turns into an empty avatar, it
never stops a score update.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "leaderboard-bot"


class AvatarLookupError(Exception):
    """GitHub didn't give us a usable avatar."""
    pass


class AvatarService:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        headers = {"User-Agent": USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request_avatar(self, username: str) -> str:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport
        ) as client:
            response = await client.get(
                f"{self.base_url}/users/{username}",
                headers=self._headers()
            )

        if not response.is_success:
            raise AvatarLookupError(f"GitHub API {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise AvatarLookupError(f"Malformed response: {e}") from e

        if not isinstance(data, dict):
            raise AvatarLookupError("Malformed response: expected an object")

        avatar = data.get("avatar_url")
        if not isinstance(avatar, str) or not avatar:
            raise AvatarLookupError("Malformed response: no avatar_url")
        return avatar

    async def fetch_avatar(self, username: str) -> str:
        """
        Get the avatar URL for a GitHub user.

        Returns "" on non-2xx, network errors, timeouts or a malformed body.
        """
        try:
            return await self._request_avatar(username)
        except (httpx.HTTPError, AvatarLookupError) as e:
            logger.warning(f"⚠️ Could not fetch avatar for {username}: {e}")
            return ""
