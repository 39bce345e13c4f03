"""
VendorHub Backend — Password Hashing and Token Tests
======================================================
"""

import uuid

import jwt
import pytest

from vendorhub.exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError
from vendorhub.services.security import PasswordHasher, TokenService


class TestPasswordHasher:

    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash("hunter2")
        assert hashed != "hunter2"
        assert hashed.startswith("$2")

    def test_verify_roundtrip(self):
        hashed = self.hasher.hash("hunter2")
        assert self.hasher.verify("hunter2", hashed)
        assert not self.hasher.verify("hunter3", hashed)

    def test_hashes_are_salted(self):
        assert self.hasher.hash("same") != self.hasher.hash("same")

    def test_verify_garbage_hash(self):
        assert self.hasher.verify("hunter2", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_async_variants(self):
        hashed = await self.hasher.hash_async("hunter2")
        assert await self.hasher.verify_async("hunter2", hashed)


class TestTokenService:

    def test_issue_and_verify(self, token_service):
        vendor_id = uuid.uuid4()
        claims = token_service.verify(token_service.issue(vendor_id))

        assert claims.vendor_id == vendor_id
        assert (claims.expires_at - claims.issued_at).total_seconds() == 3600

    def test_expired(self, token_service):
        token = token_service.issue(uuid.uuid4(), expires_in=-10)
        with pytest.raises(TokenExpiredError):
            token_service.verify(token)

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_missing(self, token_service, token):
        with pytest.raises(TokenMissingError):
            token_service.verify(token)

    def test_garbage(self, token_service):
        with pytest.raises(TokenInvalidError):
            token_service.verify("not.a.token")

    def test_wrong_secret(self, token_service):
        other = TokenService(secret="someone-else")
        with pytest.raises(TokenInvalidError):
            token_service.verify(other.issue(uuid.uuid4()))

    def test_subject_must_be_vendor_id(self, token_service):
        token = token_service.issue("not-a-uuid")
        with pytest.raises(TokenInvalidError):
            token_service.verify(token)

    def test_missing_claims_rejected(self):
        token = jwt.encode({"sub": str(uuid.uuid4())}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            TokenService(secret="unit-test-secret").verify(token)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenService(secret="")
