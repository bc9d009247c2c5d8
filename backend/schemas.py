from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DocumentWrite(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)
    merge: bool = True


class DocumentResponse(BaseModel):
    path: str
    exists: bool
    data: Optional[Dict[str, Any]] = None


class DocumentWriteResponse(BaseModel):
    ok: bool
    path: str
    data: Dict[str, Any]


class CollectionResponse(BaseModel):
    items: List[Dict[str, Any]]
