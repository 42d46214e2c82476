import pytest

from signalmanager.auth import AuthManager


@pytest.mark.asyncio
async def test_token_method_accepts_matching_token():
    manager = AuthManager("token", {"alice": "token"})
    assert await manager.authenticate("alice", "token") is True


@pytest.mark.asyncio
async def test_token_method_rejects_wrong_token():
    manager = AuthManager("token", {"alice": "token"})
    assert await manager.authenticate("alice", "secret") is False


@pytest.mark.asyncio
async def test_unknown_client_rejected():
    manager = AuthManager("token", {"alice": "token"})
    assert await manager.authenticate("bob", "token") is False


@pytest.mark.asyncio
async def test_api_key_method_behaves_like_token():
    manager = AuthManager("api_key", {"alice": "placeholder"})
    assert await manager.authenticate("alice", "placeholder") is True
    assert await manager.authenticate("alice", "token") is False


@pytest.mark.asyncio
async def test_unknown_method_always_rejects():
    manager = AuthManager("oauth", {"alice": "token"})
    assert await manager.authenticate("alice", "token") is False


@pytest.mark.asyncio
async def test_development_tokens_when_none_configured():
    manager = AuthManager("token", {})
    assert await manager.authenticate("test_client_1", "test_token_1") is True
    assert await manager.authenticate("test_client_2", "test_token_2") is True
    assert await manager.authenticate("test_client_1", "test_token_2") is False


@pytest.mark.asyncio
async def test_configured_keys_replace_development_tokens():
    manager = AuthManager("token", {"alice": "token"})
    assert await manager.authenticate("test_client_1", "test_token_1") is False


@pytest.mark.asyncio
async def test_add_and_remove_token():
    manager = AuthManager("token", {"alice": "token"})
    await manager.add_valid_token("bob", "secret")
    assert await manager.authenticate("bob", "secret") is True
    await manager.remove_token("bob")
    assert await manager.authenticate("bob", "secret") is False


@pytest.mark.asyncio
async def test_remove_missing_token_is_harmless():
    manager = AuthManager("token", {"alice": "token"})
    await manager.remove_token("nobody")
    assert await manager.authenticate("alice", "token") is True


@pytest.mark.asyncio
async def test_validate_session_depends_on_known_client():
    manager = AuthManager("token", {"alice": "token"})
    assert await manager.validate_session("alice", "any-session") is True
    assert await manager.validate_session("bob", "any-session") is False


def test_auth_method_reported():
    assert AuthManager("api_key", {"alice": "token"}).auth_method == "api_key"
    assert AuthManager().auth_method == "token"