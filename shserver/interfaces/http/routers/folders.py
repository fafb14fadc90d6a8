"""Folder and tree endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from shserver.interfaces.http.deps import get_catalog_service, get_folder_service, get_provenance
from shserver.modules.audit.models import Provenance
from shserver.modules.catalog.service import CatalogService
from shserver.modules.folders import FolderNotFoundError
from shserver.modules.folders.service import FolderService
from shserver.modules.scripts import InvalidPathError
from shserver.schemas import FolderCreate, FolderResponse

router = APIRouter()


@router.get("/tree", summary="Folder/script tree")
async def get_tree(service: CatalogService = Depends(get_catalog_service)):
    tree = await service.tree()
    return tree.to_dict()


@router.get("/folders", response_model=List[FolderResponse], summary="List folders")
async def list_folders(service: FolderService = Depends(get_folder_service)):
    return [FolderResponse.model_validate(folder) for folder in await service.list_folders()]


@router.post("/folders", response_model=FolderResponse, status_code=status.HTTP_201_CREATED, summary="Create folder")
async def create_folder(
    payload: FolderCreate,
    service: FolderService = Depends(get_folder_service),
    provenance: Provenance = Depends(get_provenance),
):
    try:
        folder = await service.create_folder(payload.path, provenance)
    except InvalidPathError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return FolderResponse.model_validate(folder)


@router.delete("/folders/{folder_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete folder")
async def delete_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
    provenance: Provenance = Depends(get_provenance),
):
    try:
        await service.delete_folder(folder_id, provenance)
    except FolderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
