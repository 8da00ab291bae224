"""
Google sign-in verification.

Checks Google credentials against the public tokeninfo endpoint. The web
client either sends an access token together with the profile it already
fetched (implicit flow) or a bare ID token.

Dependencies: httpx
System role: External identity verification for Google login and linking
"""

import logging
from dataclasses import dataclass

import httpx

from brainforge.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


@dataclass
class GoogleIdentity:
    """Verified Google account."""

    google_id: str
    email: str
    name: str | None = None
    picture: str | None = None


class GoogleTokenVerifier:
    """Verifies Google credentials through the tokeninfo endpoint."""

    def __init__(self, client_id: str | None = None, timeout: float = 10.0) -> None:
        """
        Initialize verifier.

        Args:
            client_id: OAuth client id ID tokens must be issued for
            timeout: HTTP timeout in seconds
        """
        self._client_id = client_id
        self._timeout = timeout

    async def _tokeninfo(self, params: dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(TOKENINFO_URL, params=params)

    async def verify(
        self,
        credential: str,
        user_info: dict | None = None,
    ) -> GoogleIdentity:
        """
        Verify a credential and return the Google identity behind it.

        Args:
            credential: Access token (with user_info) or ID token
            user_info: Profile from the implicit flow, keys sub/email/name/picture

        Returns:
            GoogleIdentity

        Raises:
            UnauthorizedError: Token rejected, email mismatch or wrong audience
        """
        if user_info and user_info.get("email"):
            return await self._verify_access_token(credential, user_info)
        return await self._verify_id_token(credential)

    async def _verify_access_token(self, access_token: str, user_info: dict) -> GoogleIdentity:
        try:
            response = await self._tokeninfo({"access_token": access_token})
        except httpx.HTTPError as e:
            logger.warning("Google tokeninfo request failed", extra={"error": str(e)})
            raise UnauthorizedError("Invalid Google access token")
        if response.status_code != 200:
            raise UnauthorizedError("Invalid Google access token")

        info = response.json()
        if info.get("email") != user_info["email"]:
            raise UnauthorizedError("Token email mismatch")

        return GoogleIdentity(
            google_id=user_info.get("sub") or info.get("sub") or "",
            email=user_info["email"],
            name=user_info.get("name"),
            picture=user_info.get("picture"),
        )

    async def _verify_id_token(self, id_token: str) -> GoogleIdentity:
        try:
            response = await self._tokeninfo({"id_token": id_token})
        except httpx.HTTPError as e:
            logger.warning("Google tokeninfo request failed", extra={"error": str(e)})
            raise UnauthorizedError("Invalid Google token")
        if response.status_code != 200:
            raise UnauthorizedError("Invalid Google token")

        payload = response.json()
        if self._client_id and payload.get("aud") != self._client_id:
            raise UnauthorizedError("Invalid Google token")
        if not payload.get("email") or not payload.get("sub"):
            raise UnauthorizedError("Invalid Google token")

        return GoogleIdentity(
            google_id=payload["sub"],
            email=payload["email"],
            name=payload.get("name"),
            picture=payload.get("picture"),
        )
