"""
Sentinel - Request Signature Verification
=========================================

Ed25519 verification of inbound Discord interaction requests.

Discord signs `timestamp + raw_body` with the application's private key
and sends the hex signature in X-Signature-Ed25519. The body must be
verified exactly as received, before any JSON parsing.
"""

from typing import Union

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import VerifyKey


def verify_request(
    raw_body: Union[bytes, str],
    signature: str,
    timestamp: str,
    public_key: str,
) -> bool:
    """
    Check that `signature` signs `timestamp + raw_body` under `public_key`.

    Never raises: malformed hex, wrong key length or an empty argument
    count as a failed verification.

    Args:
        raw_body: Request body exactly as received.
        signature: Hex signature from the request headers.
        timestamp: Timestamp header value.
        public_key: Hex application public key.

    Returns:
        True only for a valid signature.
    """
    if not signature or not timestamp or not public_key:
        return False

    body = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode("utf-8") + body, bytes.fromhex(signature))
        return True
    except BadSignatureError:
        return False
    except (CryptoError, ValueError, TypeError):
        # Malformed hex or wrong key/signature length
        return False


__all__ = ["verify_request"]
