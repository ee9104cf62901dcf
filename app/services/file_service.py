"""
File service: uploads and listings for the protected files area.
"""
from typing import BinaryIO, Optional

from models.files import StoredFileInfo, StoredFileList
from models.mapping import file_to_info
from repositories.file_storage import FileStorageRepository


class FileService:
    def __init__(self, url_prefix: str):
        self.url_prefix = url_prefix

    def upload(self, storage: FileStorageRepository, filename: Optional[str], stream: BinaryIO) -> StoredFileInfo:
        path = storage.save(filename, stream)
        return file_to_info(path, self.url_prefix)

    def list_files(self, storage: FileStorageRepository) -> StoredFileList:
        files = [file_to_info(path, self.url_prefix) for path in storage.list_files()]
        return StoredFileList(total=len(files), files=files)

    def delete(self, storage: FileStorageRepository, name: str) -> None:
        storage.delete(name)
