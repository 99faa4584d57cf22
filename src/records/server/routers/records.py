from __future__ import annotations

from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from ...schemas import (
    DeletedRecordEnvelope,
    DeletedRecordOut,
    RecordEnvelope,
    RecordListEnvelope,
    RecordOut,
    RecordPayload,
)
from ..repositories import ListQuery, Repository, get_repository
from ..utils import decode_token, pagination_headers

router = APIRouter(
    prefix="/v1/buckets/{bucket_id}/collections/{collection_id}/records",
    tags=["records"],
)

_NOT_FOUND = "Record not found"


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _paginate_by(request: Request) -> Optional[int]:
    return request.app.state.settings.paginate_by


def _parse_sort(raw: Optional[str]) -> Tuple[str, ...]:
    fields = tuple(f.strip() for f in (raw or "").split(",") if f.strip())
    return fields or ("-last_modified",)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=RecordListEnvelope,
    summary="List Records",
    description=(
        "List records of a collection.\n\n"
        "Query parameters:\n"
        "- _sort: comma-separated fields, '-' prefix for descending (default -last_modified)\n"
        "- _limit: maximum number of records per page (>=1)\n"
        "- _token: opaque cursor taken from a previous Next-Page header\n\n"
        "Headers: Total-Records, and Next-Page when more records remain."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"description": "Invalid sort field or pagination token"},
    },
)
def list_records(
    request: Request,
    response: Response,
    bucket_id: str,
    collection_id: str,
    sort: Optional[str] = Query(None, alias="_sort", description="Sort fields"),
    limit: Optional[int] = Query(None, alias="_limit", ge=1, description="Page size"),
    token: Optional[str] = Query(None, alias="_token", description="Pagination cursor"),
    repo: Repository = Depends(_get_repo),
) -> RecordListEnvelope:
    """
    List records with sorting and cursor pagination.
    """
    paginate_by = _paginate_by(request)
    if paginate_by is not None:
        limit = paginate_by if limit is None else min(limit, paginate_by)

    try:
        offset = decode_token(token) if token else 0
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    query = ListQuery(sort=_parse_sort(sort), limit=limit, offset=offset)
    try:
        items, total = repo.list((bucket_id, collection_id), query)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    response.headers.update(pagination_headers(request.url, total, offset, len(items)))
    data: List[RecordOut] = [RecordOut(**it) for it in items]
    return RecordListEnvelope(data=data)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=RecordEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Record",
    responses={201: {"description": "Record created successfully"}},
)
def create_record(
    bucket_id: str,
    collection_id: str,
    payload: RecordPayload,
    repo: Repository = Depends(_get_repo),
) -> RecordEnvelope:
    """
    Create a new record and return it with its server-assigned id.
    """
    created = repo.create((bucket_id, collection_id), payload.data)
    return RecordEnvelope(data=RecordOut(**created))


# PUBLIC_INTERFACE
@router.get(
    "/{record_id}",
    response_model=RecordEnvelope,
    summary="Get Record",
    responses={200: {"description": "Record found"}, 404: {"description": "Record not found"}},
)
def get_record(
    bucket_id: str,
    collection_id: str,
    record_id: str,
    repo: Repository = Depends(_get_repo),
) -> RecordEnvelope:
    item = repo.get((bucket_id, collection_id), record_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return RecordEnvelope(data=RecordOut(**item))


# PUBLIC_INTERFACE
@router.patch(
    "/{record_id}",
    response_model=RecordEnvelope,
    summary="Update Record",
    description="Partially update fields of a record. Fields set to null are removed.",
    responses={200: {"description": "Record updated"}, 404: {"description": "Record not found"}},
)
def patch_record(
    bucket_id: str,
    collection_id: str,
    record_id: str,
    payload: RecordPayload,
    repo: Repository = Depends(_get_repo),
) -> RecordEnvelope:
    updated = repo.update((bucket_id, collection_id), record_id, payload.data)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return RecordEnvelope(data=RecordOut(**updated))


# PUBLIC_INTERFACE
@router.delete(
    "/{record_id}",
    response_model=DeletedRecordEnvelope,
    summary="Delete Record",
    responses={200: {"description": "Record deleted"}, 404: {"description": "Record not found"}},
)
def delete_record(
    bucket_id: str,
    collection_id: str,
    record_id: str,
    repo: Repository = Depends(_get_repo),
) -> DeletedRecordEnvelope:
    """
    Delete a record and return its tombstone.
    """
    tombstone = repo.delete((bucket_id, collection_id), record_id)
    if not tombstone:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return DeletedRecordEnvelope(data=DeletedRecordOut(**tombstone))
