"""
Filesystem repository for files served under the protected files path.
"""
import logging
import re
import shutil
from pathlib import Path
from typing import BinaryIO, List, Optional
from uuid import uuid4

from core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: Optional[str]) -> str:
    """Reduce a client-supplied name to a safe basename."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not name:
        raise BadRequestError("A file name is required")
    return name[:200]


class FileStorageRepository:
    """Stores files flat in a single directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, name: str) -> Path:
        path = (self.root / name).resolve()
        if path.parent != self.root.resolve():
            raise BadRequestError(f"Invalid file name '{name}'")
        return path

    def save(self, filename: Optional[str], stream: BinaryIO) -> Path:
        """Write the stream to a new file; a clashing name gets a unique prefix."""
        self.ensure_root()
        name = sanitize_filename(filename)
        path = self._resolve(name)
        if path.exists():
            path = self._resolve(f"{uuid4().hex[:8]}_{name}")

        with open(path, "wb") as target:
            shutil.copyfileobj(stream, target)
        logger.info(f"Stored file {path.name} ({path.stat().st_size} bytes)")
        return path

    def list_files(self) -> List[Path]:
        if not self.root.is_dir():
            return []
        return sorted(p for p in self.root.iterdir() if p.is_file() and not p.name.startswith("."))

    def delete(self, name: str) -> None:
        path = self._resolve(name)
        if not path.is_file():
            raise NotFoundError(f"File '{name}' not found")
        path.unlink()
        logger.info(f"Deleted file {name}")
