"""
Exception hierarchy. Everything raised on purpose derives from CheckinError.
"""


class CheckinError(Exception):
    """Base class for all agent errors."""


# ─── HTTP ────────────────────────────────────────────────────────

class HttpError(CheckinError):
    """A request that failed on its final attempt.

    ``status`` is the HTTP status code, or None when no response arrived.
    ``body`` is the response text truncated for diagnostics.
    """

    def __init__(self, message, status=None, body=""):
        super().__init__(message)
        self.status = status
        self.body = body


class TransportError(HttpError):
    """Connection failure or timeout."""


class HttpStatusError(HttpError):
    """Response status outside the 2xx range."""


class ResponseFormatError(HttpError):
    """Successful response whose non-empty body is not JSON."""


# ─── Auth ────────────────────────────────────────────────────────

class AuthError(CheckinError):
    pass


class AuthMessageError(AuthError):
    """Challenge response lacks message or nonce."""


class AuthVerifyError(AuthError):
    """Verify response lacks the access or refresh token."""


class TokenDecodeError(AuthError):
    """userId could not be read from the access token."""


class InvalidCredentialError(CheckinError):
    """Private key rejected by the signer."""


# ─── Process ─────────────────────────────────────────────────────

class ScheduleStateError(CheckinError):
    """start/stop requested in a state that does not allow it."""


class NoCredentialsError(CheckinError):
    """No private keys configured."""
