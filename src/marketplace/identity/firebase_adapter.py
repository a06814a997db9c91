"""Firebase Authentication adapter.

Account management goes through the Firebase Admin SDK. The Admin SDK cannot
check a password, so ``authenticate`` calls the Identity Toolkit
``signInWithPassword`` endpoint when a web API key is configured; without one
it falls back to an email lookup only.
"""

import json

import firebase_admin
import requests
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from protean.exceptions import ValidationError

from marketplace.identity.port import IdentityAccount, IdentityProvider
from marketplace.shared.errors import AuthenticationError, DependencyError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
APP_NAME = "pasarku"


class FirebaseIdentityProvider(IdentityProvider):
    def __init__(self, service_account: str, web_api_key: str | None = None) -> None:
        try:
            self._app = firebase_admin.get_app(APP_NAME)
        except ValueError:
            cert = credentials.Certificate(json.loads(service_account))
            self._app = firebase_admin.initialize_app(cert, name=APP_NAME)
        self._web_api_key = web_api_key

    def create_account(self, email: str, password: str) -> IdentityAccount:
        try:
            record = auth.create_user(email=email, password=password, app=self._app)
        except auth.EmailAlreadyExistsError:
            raise ValidationError({"email": ["Email sudah terdaftar"]}) from None
        except ValueError as exc:
            raise ValidationError({"password": [str(exc)]}) from None
        except FirebaseError as exc:
            raise DependencyError("Layanan identitas tidak tersedia") from exc
        return IdentityAccount(id=record.uid, email=record.email)

    def get_account_by_email(self, email: str) -> IdentityAccount | None:
        try:
            record = auth.get_user_by_email(email, app=self._app)
        except auth.UserNotFoundError:
            return None
        except FirebaseError as exc:
            raise DependencyError("Layanan identitas tidak tersedia") from exc
        return IdentityAccount(id=record.uid, email=record.email)

    def get_account_by_id(self, account_id: str) -> IdentityAccount | None:
        try:
            record = auth.get_user(account_id, app=self._app)
        except (auth.UserNotFoundError, ValueError):
            return None
        except FirebaseError as exc:
            raise DependencyError("Layanan identitas tidak tersedia") from exc
        return IdentityAccount(id=record.uid, email=record.email)

    def authenticate(self, email: str, password: str) -> IdentityAccount:
        if not self._web_api_key:
            logger.warning("password_check_skipped", reason="FIREBASE_WEB_API_KEY not set")
            account = self.get_account_by_email(email)
            if account is None:
                raise AuthenticationError("Email atau password salah")
            return account

        try:
            response = requests.post(
                SIGN_IN_URL,
                params={"key": self._web_api_key},
                json={"email": email, "password": password, "returnSecureToken": False},
                timeout=10,
            )
        except requests.RequestException as exc:
            raise DependencyError("Layanan identitas tidak tersedia") from exc

        if response.status_code != 200:
            raise AuthenticationError("Email atau password salah")
        body = response.json()
        return IdentityAccount(id=body["localId"], email=body.get("email", email))
