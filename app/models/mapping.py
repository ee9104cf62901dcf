"""
Mapping profile: converts ORM entities and storage records into API models.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

from core.constants import ClaimConstants
from models.db_models import User
from models.files import StoredFileInfo
from models.users import UserProfile


def user_to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


def user_to_claims(user: User) -> Dict[str, str]:
    """Claims embedded in an access token for this user."""
    return {
        ClaimConstants.USER_ID: user.id,
        ClaimConstants.FULL_NAME: user.full_name,
        ClaimConstants.USER_NAME: user.username,
        ClaimConstants.ROLE: user.role,
    }


def file_to_info(path: Path, url_prefix: str) -> StoredFileInfo:
    stat = path.stat()
    return StoredFileInfo(
        name=path.name,
        size=stat.st_size,
        url=f"{url_prefix.rstrip('/')}/{path.name}",
        modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )
