import logging
import os
from dataclasses import dataclass
from typing import Optional

import httpx


logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class IdentitySignInError(Exception):
    pass


@dataclass
class IdentitySession:
    id_token: str
    refresh_token: Optional[str]
    email: Optional[str]
    local_id: str


class IdentityToolkitClient:
    """Email/password sign-in against the Firebase Identity Toolkit REST API."""

    def __init__(self, api_key: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key or os.getenv("FIREBASE_API_KEY")
        self._transport = transport
        self.session: Optional[IdentitySession] = None

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        if not self.api_key:
            raise IdentitySignInError("FIREBASE_API_KEY is not set")

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                f"{IDENTITY_TOOLKIT_URL}/accounts:signInWithPassword",
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        payload = response.json()
        if response.is_error:
            message = (payload.get("error") or {}).get("message", "Sign-in failed")
            logger.warning("Identity sign-in rejected: %s", message)
            raise IdentitySignInError(message)

        self.session = IdentitySession(
            id_token=payload["idToken"],
            refresh_token=payload.get("refreshToken"),
            email=payload.get("email"),
            local_id=payload["localId"],
        )
        return self.session

    def sign_out(self) -> None:
        self.session = None
