"""Identity capability: turn a third-party sign-in credential into a User.

``GoogleIdentityProvider`` handles the ID token that Google Identity Services
posts back after an interactive sign-in. Only the payload segment is read; the
signature is not verified here.
"""
import logging
from typing import Protocol

from jose import JWTError, jwt

from pantry.domain.User import User

logger = logging.getLogger(__name__)


class CredentialError(ValueError):
    """The credential could not be decoded into a user."""


class IdentityProvider(Protocol):
    client_id: str

    def decode_credential(self, credential: str) -> User:
        ...


class GoogleIdentityProvider:
    def __init__(self, client_id: str):
        self.client_id = client_id

    def decode_credential(self, credential: str) -> User:
        try:
            payload = jwt.get_unverified_claims(credential)
        except JWTError as e:
            raise CredentialError(f"Failed to decode credential: {e}") from e
        if not payload.get("sub") and not payload.get("email"):
            raise CredentialError("Credential carries neither subject nor email")
        return User(name=payload.get("name"), email=payload.get("email"), sub=payload.get("sub"))
