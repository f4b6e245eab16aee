from starlette import status

MSG_MISSING_SIGNATURE = "Missing required header for HMAC verification"
MSG_FAILED_HMAC = "HMAC verification failed"


# ───────────────────────── Base ─────────────────────────
class SignatureError(Exception):
    """Base class for signature gate errors. Messages never carry computed values."""
    code: str = "signature_error"
    status_code: int = status.HTTP_403_FORBIDDEN
    message: str = "Signature error"

    def __init__(self, message: str = "") -> None:
        if message:
            self.message = message
        super().__init__(self.message)


# ───────────────────────── Error kinds ─────────────────────────
class TransportReadError(SignatureError):
    """The request body could not be read in full."""
    code = "transport_read_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Request body could not be read"


class MissingSignatureError(SignatureError):
    code = "missing_signature"
    status_code = status.HTTP_403_FORBIDDEN
    message = MSG_MISSING_SIGNATURE


class VerificationMismatchError(SignatureError):
    code = "verification_failed"
    status_code = status.HTTP_403_FORBIDDEN
    message = MSG_FAILED_HMAC
