from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.schemas import CollectionResponse, DocumentResponse, DocumentWrite, DocumentWriteResponse
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()

COLLECTIONS = {"entries", "months"}


def _collection_path(uid: str, collection: str, user_id: str) -> str:
    if uid != user_id:
        raise HTTPException(status_code=403, detail="Documents belong to another user")
    if collection not in COLLECTIONS:
        raise HTTPException(status_code=404, detail="Unknown collection")
    return f"users/{uid}/{collection}"


@router.get("/v1/users/{uid}/{collection}", response_model=CollectionResponse)
async def list_documents(
    uid: str,
    collection: str,
    order_by: str | None = Query(default=None),
    user_id: str = Depends(require_user_id),
):
    items = await repositories.list_collection(_collection_path(uid, collection, user_id), order_by)
    return {"items": items}


@router.get("/v1/users/{uid}/{collection}/{doc_id}", response_model=DocumentResponse)
async def get_document(uid: str, collection: str, doc_id: str, user_id: str = Depends(require_user_id)):
    path = f"{_collection_path(uid, collection, user_id)}/{doc_id}"
    data = await repositories.get_document(path)
    return {"path": path, "exists": data is not None, "data": data}


@router.put("/v1/users/{uid}/{collection}/{doc_id}", response_model=DocumentWriteResponse)
async def put_document(
    uid: str,
    collection: str,
    doc_id: str,
    body: DocumentWrite,
    user_id: str = Depends(require_user_id),
):
    path = f"{_collection_path(uid, collection, user_id)}/{doc_id}"
    data = await repositories.write_document(path, body.data, merge=body.merge)
    logger.info("Wrote %s (merge=%s)", path, body.merge)
    return {"ok": True, "path": path, "data": data}
