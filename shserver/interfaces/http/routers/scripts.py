"""Administrative script endpoints used by the editor UI."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from shserver.core.crypto import PasswordTooLongError
from shserver.interfaces.http.deps import get_provenance, get_script_service
from shserver.modules.audit.models import Provenance
from shserver.modules.scripts import (
    InvalidPathError,
    ScriptAlreadyExistsError,
    ScriptCreateInput,
    ScriptNotFoundError,
    ScriptUpdateInput,
)
from shserver.modules.scripts.service import ScriptService
from shserver.schemas import ScriptCreate, ScriptResponse, ScriptUpdate, ScriptVersionResponse

router = APIRouter()


def _to_schema(script) -> ScriptResponse:
    return ScriptResponse.model_validate(script)


@router.get("/scripts", response_model=List[ScriptResponse], summary="List scripts")
async def list_scripts(service: ScriptService = Depends(get_script_service)):
    return [_to_schema(script) for script in await service.list_scripts()]


@router.post("/scripts", response_model=ScriptResponse, status_code=status.HTTP_201_CREATED, summary="Create script")
async def create_script(
    payload: ScriptCreate,
    service: ScriptService = Depends(get_script_service),
    provenance: Provenance = Depends(get_provenance),
):
    try:
        script = await service.create_script(
            ScriptCreateInput(
                path=payload.path,
                content=payload.content,
                description=payload.description,
                tags=payload.tags,
                locked=payload.locked,
                password=payload.password,
                danger_level=payload.danger_level,
                requires=payload.requires,
                examples=payload.examples,
            ),
            provenance,
        )
    except (InvalidPathError, PasswordTooLongError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScriptAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Script with this path already exists"
        ) from exc
    return _to_schema(script)


@router.get("/scripts/{script_id}", response_model=ScriptResponse, summary="Get script")
async def get_script(script_id: str, service: ScriptService = Depends(get_script_service)):
    script = await service.get_script(script_id)
    if script is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found")
    return _to_schema(script)


@router.put("/scripts/{script_id}", response_model=ScriptResponse, summary="Replace script")
async def update_script(
    script_id: str,
    payload: ScriptUpdate,
    service: ScriptService = Depends(get_script_service),
    provenance: Provenance = Depends(get_provenance),
):
    try:
        script = await service.update_script(
            script_id,
            ScriptUpdateInput(
                path=payload.path,
                content=payload.content,
                description=payload.description,
                tags=payload.tags,
                locked=payload.locked,
                password=payload.password,
                danger_level=payload.danger_level,
                requires=payload.requires,
                examples=payload.examples,
            ),
            provenance,
        )
    except (InvalidPathError, PasswordTooLongError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScriptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found") from exc
    except ScriptAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Script with this path already exists"
        ) from exc
    return _to_schema(script)


@router.delete("/scripts/{script_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete script")
async def delete_script(
    script_id: str,
    service: ScriptService = Depends(get_script_service),
    provenance: Provenance = Depends(get_provenance),
):
    try:
        await service.delete_script(script_id, provenance)
    except ScriptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/scripts/{script_id}/versions",
    response_model=List[ScriptVersionResponse],
    summary="List content versions, newest first",
)
async def list_versions(script_id: str, service: ScriptService = Depends(get_script_service)):
    try:
        versions = await service.list_versions(script_id)
    except ScriptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found") from exc
    return [ScriptVersionResponse.model_validate(version) for version in versions]


@router.get("/search", response_model=List[ScriptResponse], summary="Search scripts")
async def search_scripts(
    q: str = Query(..., min_length=1),
    service: ScriptService = Depends(get_script_service),
):
    return [_to_schema(script) for script in await service.search(q)]
