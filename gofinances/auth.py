"""Google sign-in via the OAuth2 implicit flow.

The browser step happens outside this package: the user opens the
authorization URL and comes back with an access token, which is exchanged
here for the profile that scopes the user's storage keys.
"""
from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import asdict
from typing import Optional

from gofinances.core.models import User
from gofinances.storage import KeyValueStore, user_key

logger = logging.getLogger(__name__)

_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
_USERINFO_URL = "https://www.googleapis.com/oauth2/v1/userinfo"


class AuthError(ValueError):
    """Raised when sign-in cannot produce a user."""


def build_authorization_url(client_id: str, redirect_uri: str) -> str:
    if not client_id or not redirect_uri:
        raise AuthError("CLIENT_ID and REDIRECT_URI must be configured.")
    query = urllib.parse.urlencode(
        {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "token",
            "scope": "profile email",
        },
        quote_via=urllib.parse.quote,
    )
    return f"{_AUTH_URL}?{query}"


def fetch_user_info(access_token: str, timeout: float = 10.0) -> User:
    query = urllib.parse.urlencode({"alt": "json", "access_token": access_token})
    req = urllib.request.Request(f"{_USERINFO_URL}?{query}", method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            payload = json.loads(resp.read().decode("utf-8"))
    except (urllib.error.URLError, ValueError) as exc:
        raise AuthError(f"Could not fetch user info: {exc}") from exc

    if not isinstance(payload, dict) or not payload.get("id"):
        raise AuthError("User info response has no 'id'.")
    return User(
        id=str(payload["id"]),
        name=payload.get("given_name") or payload.get("name") or "",
        email=payload.get("email", ""),
        photo=payload.get("picture"),
    )


def sign_in(store: KeyValueStore, namespace: str, access_token: str) -> User:
    user = fetch_user_info(access_token)
    store.set(user_key(namespace), json.dumps(asdict(user), ensure_ascii=False))
    logger.info("Signed in user %s", user.id)
    return user


def load_user(store: KeyValueStore, namespace: str) -> Optional[User]:
    payload = store.get(user_key(namespace))
    if payload is None:
        return None
    try:
        data = json.loads(payload)
        return User(
            id=str(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            photo=data.get("photo"),
        )
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("Stored user is unreadable; treating as signed out: %s", exc)
        return None


def sign_out(store: KeyValueStore, namespace: str) -> None:
    store.remove(user_key(namespace))
