"""
File endpoints: uploads into the protected files area.

Stored files are then served as static files under the files path.
"""
from fastapi import APIRouter, Depends, File, UploadFile, status

from api.deps import get_current_user, get_file_service, get_file_storage, require_roles
from core.constants import Roles
from middlewares.authentication import GatewayUser
from models.files import StoredFileInfo, StoredFileList
from repositories.file_storage import FileStorageRepository
from services.file_service import FileService

router = APIRouter()


@router.post("", response_model=StoredFileInfo, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    storage: FileStorageRepository = Depends(get_file_storage),
    file_service: FileService = Depends(get_file_service),
    _: GatewayUser = Depends(get_current_user)
):
    return file_service.upload(storage, file.filename, file.file)


@router.get("", response_model=StoredFileList)
def list_files(
    storage: FileStorageRepository = Depends(get_file_storage),
    file_service: FileService = Depends(get_file_service),
    _: GatewayUser = Depends(get_current_user)
):
    return file_service.list_files(storage)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    name: str,
    storage: FileStorageRepository = Depends(get_file_storage),
    file_service: FileService = Depends(get_file_service),
    _: GatewayUser = Depends(require_roles(Roles.ADMIN))
):
    file_service.delete(storage, name)
