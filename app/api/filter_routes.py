from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from app.schemas.filters import FilterCompileRequest, FilterCompileResponse
from app.services.exceptions import ServiceError
from app.services.filter_assembler import assemble
from app.services.filter_params import selection_from_query_params

router = APIRouter(prefix="/filters", tags=["filters"])


def _raise_service_error(exc: ServiceError):
    detail = str(exc) or exc.__class__.__name__
    raise HTTPException(status_code=exc.status_code, detail=detail)


def _response(entity_type: str, compiled: dict) -> FilterCompileResponse:
    return FilterCompileResponse(entityType=entity_type, filter=compiled, fields=sorted(compiled))


@router.post("/{entity_type}/compile", response_model=FilterCompileResponse)
def compile_filters(entity_type: str, req: FilterCompileRequest):
    try:
        return _response(entity_type, assemble(entity_type, req.filters))
    except ServiceError as exc:
        _raise_service_error(exc)


@router.get("/{entity_type}", response_model=FilterCompileResponse)
def compile_filters_from_query(entity_type: str, request: Request):
    """与前端地址栏一致的查询串形式，如 ?rating_min=20&tagIds=1,2。"""
    try:
        selection = selection_from_query_params(entity_type, request.query_params)
        return _response(entity_type, assemble(entity_type, selection))
    except ServiceError as exc:
        _raise_service_error(exc)
