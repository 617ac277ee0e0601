"""
Sentinel - Test Fixtures
========================

Shared fixtures for all tests.
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep test log files out of the working tree; must happen before the
# logger module is imported
os.environ.setdefault("SENTINEL_LOG_DIR", tempfile.mkdtemp(prefix="sentinel-logs-"))

from fastapi.testclient import TestClient  # noqa: E402
from nacl.signing import SigningKey  # noqa: E402

from sentinel.api.app import create_app  # noqa: E402
from sentinel.core.config import Config  # noqa: E402
from sentinel.discord.models import Interaction  # noqa: E402
from sentinel.discord.rest import DiscordRestClient  # noqa: E402


MODERATOR_ID = "111222333"
TARGET_ID = "123456789"
GUILD_ID = "987654321"
CHANNEL_ID = "555666777"
AUDIT_CHANNEL_ID = 444555666
ALL_PERMISSIONS = str((1 << 41) - 1)


# =============================================================================
# Keys & Signing
# =============================================================================

@pytest.fixture
def signing_key():
    """Fresh Ed25519 key pair standing in for Discord's."""
    return SigningKey.generate()


@pytest.fixture
def public_key_hex(signing_key):
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def sign(signing_key):
    """Return a helper producing (signature_hex, timestamp) for a body."""

    def _sign(body, timestamp="1700000000"):
        if isinstance(body, str):
            body = body.encode("utf-8")
        signed = signing_key.sign(timestamp.encode("utf-8") + body)
        return signed.signature.hex(), timestamp

    return _sign


# =============================================================================
# Config & Services
# =============================================================================

@pytest.fixture
def config(public_key_hex):
    return Config(
        discord_public_key=public_key_hex,
        discord_bot_token="test-bot-token",
        discord_application_id="42",
        setup_token="setup-secret",
        audit_channel_id=AUDIT_CHANNEL_ID,
    )


@pytest.fixture
def mock_rest():
    """REST client double; every coroutine method is an AsyncMock."""
    rest = AsyncMock(spec=DiscordRestClient)
    rest.send_direct_message.return_value = {"id": "dm-message"}
    rest.create_message.return_value = {"id": "audit-message"}
    rest.get_channel_messages.return_value = []
    rest.bulk_overwrite_global_commands.side_effect = lambda app_id, commands: commands
    return rest


@pytest.fixture
def app(config, mock_rest):
    return create_app(config, rest=mock_rest)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Interaction Builders
# =============================================================================

def _command_payload(
    name,
    options=None,
    *,
    guild_id=GUILD_ID,
    channel_id=CHANNEL_ID,
    moderator_id=MODERATOR_ID,
    permissions=ALL_PERMISSIONS,
):
    """Raw application-command payload as Discord would send it."""
    payload = {
        "id": "interaction-1",
        "application_id": "42",
        "type": 2,
        "token": "interaction-token",
        "data": {
            "id": "command-1",
            "name": name,
            "options": [{"name": k, "value": v} for k, v in (options or {}).items()],
        },
    }
    if guild_id:
        payload["guild_id"] = guild_id
    if channel_id:
        payload["channel_id"] = channel_id
    if moderator_id:
        payload["member"] = {
            "user": {"id": moderator_id, "username": "moduser"},
            "permissions": permissions,
        }
    return payload


@pytest.fixture
def command_payload():
    """Builder for raw command payloads."""
    return _command_payload


@pytest.fixture
def make_interaction():
    """Builder for parsed Interaction models."""

    def _make(name, options=None, **kwargs):
        return Interaction.model_validate(_command_payload(name, options, **kwargs))

    return _make


@pytest.fixture
def encode():
    """Compact JSON encoder for request bodies."""

    def _encode(payload):
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")

    return _encode
