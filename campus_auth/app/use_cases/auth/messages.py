"""User-facing messages shared by the auth use cases"""

LOGIN_PATH = "/login"

INVALID_CREDENTIALS = "Invalid credentials"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters long"
PASSWORD_TOO_LONG = "Password must be at most {max_bytes} bytes long"
EMAIL_TAKEN = "Email already registered"

RESET_LINK_SENT = "If the email is registered, you will receive a reset link."
RESET_EMAIL_FAILED = "Failed to send reset email. Please try again later."
RESET_EMAIL_SUBJECT = "Reset Your Password"
RESET_EMAIL_BODY = (
    '<p>Click <a href="{link}">here</a> to reset your password. '
    "This link will expire in 1 hour.</p>"
)
INVALID_RESET_TOKEN = "Invalid or expired token."
RESET_SUCCESSFUL = "Password reset successful."
