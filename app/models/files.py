"""
Stored file models for the gateway API.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel


class StoredFileInfo(BaseModel):
    name: str
    size: int
    url: str
    modified_at: datetime


class StoredFileList(BaseModel):
    total: int
    files: List[StoredFileInfo]
