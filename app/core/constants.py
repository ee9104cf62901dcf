"""
Claim names carried in gateway JWT tokens, and the built-in role names.
"""
from typing import Tuple


class ClaimConstants:
    USER_ID = "USER_ID"

    FULL_NAME = "FULL_NAME"

    USER_NAME = "USER_NAME"

    ROLE = "ROLE"

    @classmethod
    def all(cls) -> Tuple[str, ...]:
        return (cls.USER_ID, cls.FULL_NAME, cls.USER_NAME, cls.ROLE)


class Roles:
    ADMIN = "Admin"

    USER = "User"
