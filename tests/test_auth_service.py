import pytest

from portal.core.exceptions import AuthenticationRequired, StoreError
from portal.core.policy import Role
from portal.modules.auth.schemas import LoginRequest
from portal.modules.auth.service import AuthService


@pytest.fixture
def service(fake_supabase):
    return AuthService(fake_supabase)


def test_session_carries_profile_role(service, tokens):
    session = service.get_session(tokens["editor"])
    assert session.user_id == "editor-1"
    assert session.role is Role.EDITOR
    assert session.email == "editor-1@example.com"


def test_session_without_profile_has_no_role(service, tokens):
    session = service.get_session(tokens["no_profile"])
    assert session.role is None
    assert not session.has_profile


def test_unknown_profile_role_fails_closed(fake_supabase, service):
    token = fake_supabase.add_profile("odd-1", "owner")
    assert service.get_session(token).role is None


def test_invalid_token_requires_authentication(service, tokens):
    with pytest.raises(AuthenticationRequired):
        service.get_session("not-a-token")


def test_session_is_cached_until_sign_out(fake_supabase, service, tokens):
    first = service.get_session(tokens["admin"])
    second = service.get_session(tokens["admin"])
    assert first is second
    assert fake_supabase.auth.get_user_calls == 1

    assert service.sign_out(first) is True
    assert fake_supabase.auth.sign_out_calls == 1
    service.get_session(tokens["admin"])
    assert fake_supabase.auth.get_user_calls == 2


def test_profile_lookup_failure(fake_supabase, service, tokens):
    fake_supabase.fail_on.add(("profiles", "select"))
    with pytest.raises(StoreError):
        service.get_session(tokens["viewer"])


def test_login(service, tokens):
    response = service.login(LoginRequest(email="viewer-1@example.com", password="secret"))
    assert response.access_token == tokens["viewer"]
    assert response.user_id == "viewer-1"


def test_login_rejects_bad_password(service, tokens):
    with pytest.raises(AuthenticationRequired):
        service.login(LoginRequest(email="viewer-1@example.com", password="wrong"))
