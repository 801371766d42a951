"""
Domain exceptions raised by token codecs and infrastructure adapters.

Use cases catch these at their boundary and turn them into Result errors
with generic messages, so none of them reach an HTTP client directly.
"""


class AuthError(Exception):
    """Base class for authentication subsystem failures"""

    code = "AUTH_ERROR"


class InvalidSession(AuthError):
    """Session token has a bad signature, malformed payload, or has expired"""

    code = "INVALID_SESSION"


class InvalidResetToken(AuthError):
    """Reset token has a bad signature, malformed payload, or has expired"""

    code = "INVALID_RESET_TOKEN"


class EmailDeliveryFailed(AuthError):
    """Notification transport could not deliver a message"""

    code = "EMAIL_DELIVERY_FAILED"


class InsecureConfiguration(AuthError):
    """Refusing to start with a configuration that is unsafe in production"""

    code = "INSECURE_CONFIGURATION"
