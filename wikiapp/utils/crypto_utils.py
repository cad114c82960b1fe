"""
Password hashing and random secrets for the wiki's user store.

Passwords are kept as bcrypt hashes. Generated passwords (password resets,
imported ScrewTurn users, the first administrator) always contain an upper
case letter, a lower case letter, a digit and a symbol.
"""
import logging
import secrets
import string
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

password_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_SYMBOLS = "!@#$%^&*()"
PASSWORD_CHARACTER_CLASSES = (string.ascii_uppercase, string.ascii_lowercase, string.digits, PASSWORD_SYMBOLS)

_random = secrets.SystemRandom()

def hash_password(password: str) -> str:
    return password_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    """空哈希或无法识别的哈希都视为密码不匹配"""
    if not password_hash:
        return False
    try:
        return password_context.verify(password, password_hash)
    except ValueError as e:
        logger.warning(f"无法识别的密码哈希: {e}")
        return False

def generate_random_password(length: int = 16) -> str:
    """每类字符至少一个，其余随机，最后打乱顺序"""
    length = max(length, len(PASSWORD_CHARACTER_CLASSES))
    all_characters = "".join(PASSWORD_CHARACTER_CLASSES)

    characters = [secrets.choice(chars) for chars in PASSWORD_CHARACTER_CLASSES]
    characters += [secrets.choice(all_characters) for _ in range(length - len(characters))]
    _random.shuffle(characters)
    return "".join(characters)

def generate_session_id() -> str:
    return secrets.token_urlsafe(32)
