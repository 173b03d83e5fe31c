"""
Demo login check.

Accepts one configured username/password pair. This gates the demo UI only
and is not an authentication scheme.
"""

import hmac
from typing import Callable


def credentials_verifier(username: str, password: str) -> Callable[[str, str], bool]:
    """Build a verifier that accepts exactly one username/password pair."""

    def verify(candidate_user: str, candidate_password: str) -> bool:
        user_ok = hmac.compare_digest(candidate_user.encode(), username.encode())
        password_ok = hmac.compare_digest(candidate_password.encode(), password.encode())
        return user_ok and password_ok

    return verify
