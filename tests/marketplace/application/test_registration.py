"""Application tests for registration, login and profile lookup."""

import pytest
from marketplace.account.events import UserRegistered
from marketplace.account.registration import login, profile, register, resolve_subject
from marketplace.account.user import User
from marketplace.identity.account import Account
from marketplace.identity.tokens import issue_token
from marketplace.shared.errors import AuthenticationError, NotFoundError
from protean import current_domain
from protean.exceptions import ValidationError


def _register(email="budi@pasarku.id", password="rahasia123"):
    return register(email, password, "Budi", "Jl. Braga 5, Bandung", "081234567890")


class TestRegister:
    def test_creates_account_and_profile_with_same_id(self):
        user_id = _register()

        user = current_domain.repository_for(User).get(user_id)
        account = current_domain.repository_for(Account).get(user_id)
        assert user.email.address == "budi@pasarku.id"
        assert user.role == "user"
        assert account.email == "budi@pasarku.id"
        assert account.password_hash != "rahasia123"

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc:
            register("budi@pasarku.id", "rahasia123", "Budi", "", "0812")
        assert exc.value.messages["user"] == ["Email, password, nama, alamat, dan nomor telepon wajib"]

    def test_duplicate_email(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register(email="BUDI@pasarku.id")
        assert exc.value.messages["email"] == ["Email sudah terdaftar"]

    def test_malformed_email_creates_no_account(self):
        with pytest.raises(ValidationError):
            _register(email="budi-at-pasarku")
        assert current_domain.repository_for(Account)._dao.query.all().items == []

    def test_overlong_name_creates_no_account(self):
        with pytest.raises(ValidationError) as exc:
            register("budi@pasarku.id", "rahasia123", "x" * 101, "Jl. Braga 5, Bandung", "081234567890")
        assert "name" in exc.value.messages
        assert current_domain.repository_for(Account)._dao.query.all().items == []

    def test_corrected_retry_succeeds_after_rejected_profile(self):
        with pytest.raises(ValidationError):
            register("budi@pasarku.id", "rahasia123", "x" * 101, "Jl. Braga 5, Bandung", "081234567890")

        user_id = _register()
        assert profile(user_id).name == "Budi"

    def test_short_password(self):
        with pytest.raises(ValidationError):
            _register(password="123")

    def test_register_raises_user_registered(self):
        user = User.register("acc-1", "budi@pasarku.id", "Budi", "Jl. Braga 5", "081234567890")
        assert isinstance(user._events[-1], UserRegistered)
        assert user._events[-1].user_id == "acc-1"


class TestLogin:
    def test_returns_token_for_the_account(self):
        user_id = _register()
        token = login("budi@pasarku.id", "rahasia123")
        assert resolve_subject(token) == user_id

    def test_wrong_password(self):
        _register()
        with pytest.raises(AuthenticationError) as exc:
            login("budi@pasarku.id", "salah-sandi")
        assert exc.value.message == "Email atau password salah"

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError):
            login("nobody@pasarku.id", "rahasia123")

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc:
            login("budi@pasarku.id", "")
        assert exc.value.messages["credentials"] == ["Email dan password wajib"]

    def test_token_for_unknown_account_is_rejected(self):
        with pytest.raises(AuthenticationError):
            resolve_subject(issue_token("ghost-account"))


class TestProfile:
    def test_profile(self):
        user_id = _register()
        assert profile(user_id).name == "Budi"

    def test_missing_profile(self):
        with pytest.raises(NotFoundError) as exc:
            profile("ghost-account")
        assert exc.value.message == "Profil user tidak ditemukan"
