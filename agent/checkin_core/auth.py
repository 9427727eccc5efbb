"""
Login handshake: challenge → sign → verify → read userId from the token.

Each step either yields what the next one needs or raises; a Session is
only built once every step succeeded.
"""

import base64
import binascii
import json

from .config import log
from .exceptions import AuthMessageError, AuthVerifyError, TokenDecodeError
from .models import Challenge, Session
from .wallet import Wallet, mask_address


def decode_user_id(access_token):
    """Read the ``userId`` claim from a JWT payload without verifying it.

    Intentional: the token was issued moments ago by the service over TLS,
    and the claim only tells us our own id for the URL path. The server still
    checks the token on every authenticated call.
    """
    try:
        payload_part = access_token.split(".")[1]
        padded = payload_part + "=" * (-len(payload_part) % 4)
        claims = json.loads(base64.urlsafe_b64decode(padded).decode("utf-8"))
    except (AttributeError, IndexError, binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise TokenDecodeError(f"Failed to decode userId from access token: {e}") from e

    user_id = claims.get("userId") if isinstance(claims, dict) else None
    if isinstance(user_id, bool) or not isinstance(user_id, (str, int)) or not user_id:
        raise TokenDecodeError("Failed to decode userId from access token: claim missing or invalid")
    return str(user_id)


def fetch_challenge(api, address):
    data = api.get_auth_message(address)
    message, nonce = data.get("message"), data.get("nonce")
    if not message or not nonce:
        raise AuthMessageError("Failed to fetch auth message/nonce.")
    return Challenge(message=message, nonce=nonce)


def login(private_key, api, wallet_factory=Wallet):
    """Build a Session for one private key. Raises on the first failed step."""
    wallet = wallet_factory(private_key)
    address = wallet.address

    challenge = fetch_challenge(api, address)
    signature = wallet.sign_message(challenge.message)

    verified = api.verify(address, signature, challenge.message, challenge.nonce)
    access_token = verified.get("accessToken")
    refresh_token = verified.get("refreshToken")
    if not access_token or not refresh_token:
        raise AuthVerifyError("Login failed: missing tokens.")

    user_id = decode_user_id(access_token)
    log.info("Login OK | %s | user=%s", mask_address(address), user_id)
    return Session(
        identity=address,
        access_token=access_token,
        refresh_token=refresh_token,
        user_id=user_id,
    )
