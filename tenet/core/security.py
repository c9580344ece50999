"""Password hashing and verification."""
from passlib.context import CryptContext
from passlib.exc import MissingBackendError

from tenet.core.enums import EncryptionMode
from tenet.core.exceptions import PasswordHashingError


# Library default Argon2 cost parameters, fresh 32-byte salt per hash
pwd_context = CryptContext(
    schemes=[EncryptionMode.ARGON2.scheme],
    deprecated="auto",
    argon2__salt_size=32,
)


def hash_password(password: str) -> str:
    """Hash a plain password into a self-describing encoded string."""
    if not isinstance(password, str):
        raise PasswordHashingError("Password must be a string")
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError, MissingBackendError) as e:
        raise PasswordHashingError(f"Failed to hash password: {e}") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash.

    A wrong password returns False. A stored value that is not a valid
    encoded hash raises PasswordHashingError.
    """
    if not hashed_password:
        raise PasswordHashingError("Stored password hash is empty")
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError, MissingBackendError) as e:
        raise PasswordHashingError(f"Stored password hash is malformed: {e}") from e


def is_password_hash(value: str) -> bool:
    """Return True when ``value`` is an encoded hash this context understands."""
    if not value:
        return False
    try:
        return pwd_context.identify(value) is not None
    except (ValueError, TypeError):
        return False
