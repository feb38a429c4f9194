import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# lowercase, uppercase, digit and special character; only the listed characters
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")

# bcrypt ignores input past 72 bytes
MAX_PASSWORD_BYTES = 72

PASSWORD_REQUIREMENTS = (
    "Password must be at least 8 characters long and contain at least one uppercase letter, "
    "one lowercase letter, one number, and one special character (@$!%*?&)"
)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_password(password: str) -> bool:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    return bool(PASSWORD_PATTERN.match(password))
