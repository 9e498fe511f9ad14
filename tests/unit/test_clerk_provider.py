from unittest.mock import MagicMock, patch

import pytest

from tripsync.auth.clerk_provider import ClerkAuthProvider
from tripsync.auth.interface import AuthUser
from tripsync.errors import AuthenticationError, ErrorCode


def _address(address_id, email):
    address = MagicMock(email_address=email)
    address.id = address_id
    return address


@pytest.fixture
def mock_clerk_user():
    user = MagicMock()
    user.id = "user_123"
    user.first_name = "Jane"
    user.last_name = "Doe"
    user.username = "janedoe"
    user.image_url = "https://img.example.com/jane.png"
    user.primary_email_address_id = "idn_2"
    user.email_addresses = [_address("idn_1", "old@example.com"), _address("idn_2", "Jane@Example.com")]
    return user


@pytest.fixture
def clerk_client(mock_clerk_user):
    with patch("tripsync.auth.clerk_provider.Clerk") as mock_clerk_class:
        mock_client = MagicMock()
        mock_client.users.get.return_value = mock_clerk_user
        mock_clerk_class.return_value = mock_client
        yield mock_client


@pytest.mark.asyncio
async def test_verify_token_looks_up_user(clerk_client):
    with patch("tripsync.auth.clerk_provider.authenticate_request") as mock_authenticate:
        mock_authenticate.return_value = MagicMock(is_signed_in=True, payload={"sub": "user_123"})
        provider = ClerkAuthProvider(secret_key="sk_test_mock")

        result = await provider.verify_token("session_token")

    assert isinstance(result, AuthUser)
    assert result.user_id == "user_123"
    assert result.email == "jane@example.com"
    assert result.name == "Jane Doe"
    assert result.avatar_url == "https://img.example.com/jane.png"
    clerk_client.users.get.assert_called_once_with(user_id="user_123")
    request = mock_authenticate.call_args.args[0]
    assert request.headers == {"Authorization": "Bearer session_token"}


@pytest.mark.asyncio
async def test_verify_token_uses_email_claim_without_lookup(clerk_client):
    claims = {"sub": "user_9", "email": "Pat@Example.com", "name": "Pat", "image_url": None}
    with patch("tripsync.auth.clerk_provider.authenticate_request") as mock_authenticate:
        mock_authenticate.return_value = MagicMock(is_signed_in=True, payload=claims)
        provider = ClerkAuthProvider(secret_key="sk_test_mock")

        result = await provider.verify_token("session_token")

    assert result == AuthUser(user_id="user_9", email="pat@example.com", name="Pat")
    clerk_client.users.get.assert_not_called()


@pytest.mark.asyncio
async def test_verify_token_signed_out(clerk_client):
    with patch("tripsync.auth.clerk_provider.authenticate_request") as mock_authenticate:
        mock_authenticate.return_value = MagicMock(is_signed_in=False, payload=None, message="token-expired")
        provider = ClerkAuthProvider(secret_key="sk_test_mock")

        with pytest.raises(AuthenticationError, match="token-expired") as exc_info:
            await provider.verify_token("expired_token")

    assert exc_info.value.code == ErrorCode.INVALID_TOKEN


@pytest.mark.asyncio
async def test_verify_token_without_subject(clerk_client):
    with patch("tripsync.auth.clerk_provider.authenticate_request") as mock_authenticate:
        mock_authenticate.return_value = MagicMock(is_signed_in=True, payload={"azp": "app"}, message=None)
        provider = ClerkAuthProvider(secret_key="sk_test_mock")

        with pytest.raises(AuthenticationError, match="unknown"):
            await provider.verify_token("token")


@pytest.mark.asyncio
async def test_verify_token_invalid(clerk_client):
    with patch("tripsync.auth.clerk_provider.authenticate_request", side_effect=Exception("malformed")):
        provider = ClerkAuthProvider(secret_key="sk_test_mock")

        with pytest.raises(AuthenticationError, match="Token verification failed: malformed") as exc_info:
            await provider.verify_token("invalid_token")

    assert exc_info.value.status_code == 401


def test_authorized_parties_are_passed_to_clerk():
    with (
        patch("tripsync.auth.clerk_provider.Clerk"),
        patch("tripsync.auth.clerk_provider.AuthenticateRequestOptions") as mock_options,
    ):
        ClerkAuthProvider(secret_key="sk_test_mock", authorized_parties=["https://trips.example.com"])

    mock_options.assert_called_once_with(secret_key="sk_test_mock", authorized_parties=["https://trips.example.com"])


@pytest.mark.asyncio
async def test_get_user_falls_back_to_first_email(clerk_client, mock_clerk_user):
    mock_clerk_user.primary_email_address_id = None

    result = await ClerkAuthProvider(secret_key="sk_test_mock").get_user("user_123")

    assert result.email == "old@example.com"


@pytest.mark.asyncio
async def test_get_user_no_email(clerk_client, mock_clerk_user):
    mock_clerk_user.email_addresses = []

    result = await ClerkAuthProvider(secret_key="sk_test_mock").get_user("user_123")

    assert result.email == ""


@pytest.mark.asyncio
async def test_get_user_no_name(clerk_client, mock_clerk_user):
    mock_clerk_user.first_name = None
    mock_clerk_user.last_name = None

    result = await ClerkAuthProvider(secret_key="sk_test_mock").get_user("user_123")

    assert result.name == "janedoe"


@pytest.mark.asyncio
async def test_get_user_api_error(clerk_client):
    clerk_client.users.get.side_effect = Exception("API error")

    with pytest.raises(AuthenticationError, match="Failed to fetch user"):
        await ClerkAuthProvider(secret_key="sk_test_mock").get_user("user_123")
