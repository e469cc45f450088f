from passlib.context import CryptContext

pwd_context = CryptContext(schemes=['bcrypt'], deprecated='auto')

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


def _clip(password: str) -> str:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    return pwd_context.hash(_clip(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_clip(plain_password), hashed_password)
