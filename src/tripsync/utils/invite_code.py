import re
import secrets

INVITE_CODE_LENGTH = 12
_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"
_INVITE_CODE_RE = re.compile(r"^[A-Za-z0-9_-]{12}$")


def generate_invite_code() -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def is_valid_invite_code(code: str | None) -> bool:
    return bool(code) and _INVITE_CODE_RE.fullmatch(code) is not None
