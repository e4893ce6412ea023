"""
单元测试：调用方认证

测试覆盖：
- 签名令牌签发与校验（篡改 / 过期 / 格式错误）
- Authorization 头解析
- 会话认证
"""
import uuid

from django.contrib.sessions.backends.signed_cookies import SessionStore
from django.test import SimpleTestCase, override_settings
from rest_framework import exceptions
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from common.auth.caller_authentication import (
    issue_caller_token,
    load_caller_token,
    SignedTokenAuthentication,
    SessionCallerAuthentication,
)
from common.pojo.caller_identity import CallerIdentity


class TestCallerToken(SimpleTestCase):
    """测试令牌签发与校验"""

    def test_issue_and_load(self):
        user_id = uuid.uuid4()
        caller = load_caller_token(issue_caller_token(user_id, " Me@Example.COM "))
        self.assertEqual(caller, CallerIdentity(user_id=user_id, email="me@example.com"))

    def test_tampered_token(self):
        token = issue_caller_token(uuid.uuid4(), "me@example.com")
        with self.assertRaises(exceptions.AuthenticationFailed):
            load_caller_token(token[:-2] + "xx")

    def test_other_salt(self):
        token = issue_caller_token(uuid.uuid4(), "me@example.com")
        with override_settings(CALLER_TOKEN_SALT="another-salt"):
            with self.assertRaises(exceptions.AuthenticationFailed):
                load_caller_token(token)

    def test_expired_token(self):
        token = issue_caller_token(uuid.uuid4(), "me@example.com")
        with override_settings(CALLER_TOKEN_MAX_AGE=-1):
            with self.assertRaises(exceptions.AuthenticationFailed) as ctx:
                load_caller_token(token)
        self.assertEqual(str(ctx.exception.detail), "Token expired")

    def test_invalid_identity(self):
        """测试 user_id 不是 UUID 时令牌无效"""
        with self.assertRaises(ValueError):
            issue_caller_token("not-a-uuid", "me@example.com")
        with self.assertRaises(ValueError):
            CallerIdentity.of(uuid.uuid4(), "  ")


class TestSignedTokenAuthentication(SimpleTestCase):
    """测试 Bearer 头解析"""

    def setUp(self):
        self.factory = APIRequestFactory()
        self.auth = SignedTokenAuthentication()

    def authenticate(self, header=None):
        extra = {"HTTP_AUTHORIZATION": header} if header is not None else {}
        return self.auth.authenticate(Request(self.factory.get("/api/mail/counts", **extra)))

    def test_no_header(self):
        self.assertIsNone(self.authenticate())
        self.assertIsNone(self.authenticate("Basic abc"))

    def test_valid_header(self):
        user_id = uuid.uuid4()
        token = issue_caller_token(user_id, "me@example.com")
        caller, auth = self.authenticate(f"Bearer {token}")
        self.assertEqual(caller.user_id, user_id)
        self.assertEqual(auth, token)

    def test_malformed_header(self):
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.authenticate("Bearer")
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.authenticate("Bearer a b")
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.authenticate("Bearer garbage")

    def test_authenticate_header(self):
        self.assertEqual(self.auth.authenticate_header(None), "Bearer")


class TestSessionCallerAuthentication(SimpleTestCase):
    """测试会话认证"""

    def setUp(self):
        self.factory = APIRequestFactory()
        self.auth = SessionCallerAuthentication()

    def request_with_session(self, **values):
        django_request = self.factory.get("/api/mail/counts")
        django_request.session = SessionStore()
        django_request.session.update(values)
        django_request._dont_enforce_csrf_checks = True
        return Request(django_request)

    def test_no_session(self):
        self.assertIsNone(self.auth.authenticate(Request(self.factory.get("/api/mail/counts"))))
        self.assertIsNone(self.auth.authenticate(self.request_with_session()))

    def test_session_identity(self):
        user_id = uuid.uuid4()
        caller, auth = self.auth.authenticate(self.request_with_session(user_id=str(user_id), email="Me@Example.com"))
        self.assertEqual(caller, CallerIdentity(user_id=user_id, email="me@example.com"))
        self.assertIsNone(auth)

    def test_invalid_session_identity(self):
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request_with_session(user_id="42", email="me@example.com"))
