import json
import logging
from dataclasses import dataclass
from typing import Optional

import anyio
import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions


logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """Raised when the identity provider rejects a token or a user operation."""


@dataclass
class IdentityClaims:
    uid: str
    email: Optional[str] = None


@dataclass
class IdentityUser:
    uid: str
    email: Optional[str] = None


def initialize_firebase_app(
    service_account_json: Optional[str] = None,
    service_account_path: Optional[str] = None,
) -> firebase_admin.App:
    """Returns the default Firebase app, initializing it once per process."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if service_account_json:
        info = json.loads(service_account_json)
        cred = credentials.Certificate(info)
        project_id = info.get("project_id")
    elif service_account_path:
        cred = credentials.Certificate(service_account_path)
        project_id = None
    else:
        raise ValueError(
            "FIREBASE_SERVICE_ACCOUNT or FIREBASE_SERVICE_ACCOUNT_PATH must be set to verify ID tokens"
        )

    options = {"projectId": project_id} if project_id else None
    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase Admin initialized")
    return app


class FirebaseIdentityProvider:
    """Verifies Firebase ID tokens and manages provider-side users."""

    def __init__(self, app: firebase_admin.App):
        self.app = app

    def _verify(self, token: str) -> IdentityClaims:
        try:
            decoded = firebase_auth.verify_id_token(token, app=self.app)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise IdentityError(str(exc)) from exc
        uid = decoded.get("uid")
        if not uid:
            raise IdentityError("Token carries no uid")
        return IdentityClaims(uid=uid, email=decoded.get("email"))

    def _create_or_get_user(self, email: str, password: str) -> IdentityUser:
        try:
            record = firebase_auth.create_user(email=email, password=password, app=self.app)
        except firebase_auth.EmailAlreadyExistsError:
            record = firebase_auth.get_user_by_email(email, app=self.app)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise IdentityError(str(exc)) from exc
        return IdentityUser(uid=record.uid, email=record.email)

    async def verify_token(self, token: str) -> IdentityClaims:
        return await anyio.to_thread.run_sync(self._verify, token)

    async def create_or_get_user(self, email: str, password: str) -> IdentityUser:
        return await anyio.to_thread.run_sync(self._create_or_get_user, email, password)
