"""
Signer adapter around eth_account: address derivation + personal_sign.

The private key stays inside the LocalAccount object; nothing here logs it.
"""

from eth_account import Account
from eth_account.messages import encode_defunct

from .exceptions import InvalidCredentialError


class Wallet:
    """EVM signer for one private key."""

    def __init__(self, private_key):
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # Exception text from eth_account may echo the key material.
            raise InvalidCredentialError(f"Invalid private key ({type(e).__name__})") from None

    @property
    def address(self) -> str:
        """Checksummed public address."""
        return self._account.address

    def sign_message(self, message: str) -> str:
        """EIP-191 signature over a text message, 0x-prefixed hex."""
        signed = self._account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()


def mask_address(address) -> str:
    """0x1234…abcd form used in logs and console output."""
    address = str(address or "")
    if len(address) <= 10:
        return address
    return f"{address[:6]}…{address[-4:]}"
