from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from crew_dashboard.models.schemas import File, FileCreate, FileDownloadResponse
from crew_dashboard.services.storage import MemStorage, get_storage

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/files", response_model=list[File])
async def list_files(storage: MemStorage = Depends(get_storage)) -> list[File]:
    return storage.get_files()


@router.get("/files/{file_id}", response_model=File)
async def get_file(file_id: str, storage: MemStorage = Depends(get_storage)) -> File:
    file = storage.get_file(file_id)
    if file is None:
        raise HTTPException(status_code=404, detail="File not found")
    return file


@router.post("/files", response_model=File, status_code=201)
async def create_file(payload: FileCreate, storage: MemStorage = Depends(get_storage)) -> File:
    return storage.create_file(payload)


@router.delete("/files/{file_id}", status_code=204)
async def delete_file(file_id: str, storage: MemStorage = Depends(get_storage)) -> Response:
    if not storage.delete_file(file_id):
        raise HTTPException(status_code=404, detail="File not found")
    return Response(status_code=204)


@router.post("/files/{file_id}/download", response_model=FileDownloadResponse)
async def download_file(file_id: str, storage: MemStorage = Depends(get_storage)) -> FileDownloadResponse:
    file = storage.get_file(file_id)
    if file is None:
        raise HTTPException(status_code=404, detail="File not found")

    updated = storage.update_file(file_id, {"downloads": file.downloads + 1})
    return FileDownloadResponse(message="Download initiated", file=updated or file)
