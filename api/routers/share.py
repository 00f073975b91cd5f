"""Share link endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response

from api.dependencies import call_backend, get_backend
from backend.manager import BackendManager
from models import SharedContent, ShareCreate, ShareLink

router = APIRouter()


@router.get("", response_model=List[SharedContent])
async def list_shared(manager: BackendManager = Depends(get_backend)):
    return await call_backend(manager.shares.list_shared)


@router.post("", response_model=ShareLink, status_code=201)
async def create_share(req: ShareCreate, manager: BackendManager = Depends(get_backend)):
    return await call_backend(manager.shares.create_share, req)


@router.get("/{share_id}", response_model=SharedContent)
async def get_shared(share_id: str, manager: BackendManager = Depends(get_backend)):
    """Public view of a shared round, goal or stats snapshot."""
    return await call_backend(manager.shares.get_shared, share_id)


@router.delete("/{share_id}", status_code=204)
async def delete_share(share_id: str, manager: BackendManager = Depends(get_backend)):
    await call_backend(manager.shares.delete_share, share_id)
    return Response(status_code=204)
