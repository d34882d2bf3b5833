from libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8
# bcrypt only digests the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password(password: str) -> Result[None]:
    """
    Validate password complexity.

    Args:
        password: Password to validate

    Returns:
        Result with None if valid, or VALIDATION_ERROR
    """
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            )
        )
    return Return.ok(None)
