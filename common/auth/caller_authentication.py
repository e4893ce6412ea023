"""
Caller authentication

Resolves the caller of a request to a CallerIdentity {user_id, email}.
Two sources are supported:
- signed bearer token (Authorization: Bearer <token>), issued by issue_caller_token
- server-side session holding 'user_id' and 'email'
"""
import logging

from django.conf import settings
from django.core import signing
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, SessionAuthentication, get_authorization_header

from common.consts.http_const import AUTH_HEADER_PREFIX
from common.pojo.caller_identity import CallerIdentity

logger = logging.getLogger(__name__)

SESSION_USER_ID_KEY = "user_id"
SESSION_EMAIL_KEY = "email"


def issue_caller_token(user_id, email: str) -> str:
    """
    Issue a signed token for the given caller

    Args:
        user_id: User ID (UUID or its string form)
        email: Verified email of the user

    Returns:
        URL-safe signed token
    """
    caller = CallerIdentity.of(user_id, email)
    return signing.dumps(caller.to_dict(), salt=settings.CALLER_TOKEN_SALT, compress=True)


def load_caller_token(token: str) -> CallerIdentity:
    """
    Verify a token produced by issue_caller_token

    Raises:
        AuthenticationFailed: if the token is expired, tampered or malformed
    """
    try:
        payload = signing.loads(token, salt=settings.CALLER_TOKEN_SALT, max_age=settings.CALLER_TOKEN_MAX_AGE)
        return CallerIdentity.of(payload.get("user_id"), payload.get("email"))
    except signing.SignatureExpired:
        raise exceptions.AuthenticationFailed("Token expired")
    except (signing.BadSignature, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"[load_caller_token] Invalid token: {e}")
        raise exceptions.AuthenticationFailed("Invalid token")


class SignedTokenAuthentication(BaseAuthentication):
    """Bearer token authentication"""

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != AUTH_HEADER_PREFIX.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed("Invalid token header")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid token header")

        return load_caller_token(token), token

    def authenticate_header(self, request):
        return AUTH_HEADER_PREFIX


class SessionCallerAuthentication(SessionAuthentication):
    """Session authentication, the session is populated by the login collaborator"""

    def authenticate(self, request):
        session = getattr(request._request, "session", None)
        if session is None:
            return None

        user_id = session.get(SESSION_USER_ID_KEY)
        email = session.get(SESSION_EMAIL_KEY)
        if not user_id:
            return None

        try:
            caller = CallerIdentity.of(user_id, email)
        except ValueError as e:
            logger.warning(f"[SessionCallerAuthentication.authenticate] Invalid session identity: {e}")
            raise exceptions.AuthenticationFailed("Invalid session")

        self.enforce_csrf(request)
        return caller, None
