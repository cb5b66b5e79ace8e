"""One-time numeric codes for email verification and password reset."""

import secrets
from typing import Any

from src.models.user import User

CODE_MIN = 100000
CODE_MAX = 999999


class VerificationCodes:
    """Issues and checks six-digit verification codes.

    The same stored code serves both email verification and password reset.
    Codes never expire; they stay valid until consumed or replaced.
    """

    def issue_code(self) -> int:
        """Return a code drawn uniformly from [100000, 999999]."""
        return CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1)

    def check_code(self, user: User | None, submitted: Any) -> bool:
        """True iff the user has a pending code equal to ``submitted`` as an integer."""
        if user is None or user.verification_code is None:
            return False
        try:
            code = int(submitted)
        except (TypeError, ValueError):
            return False
        return code == user.verification_code
