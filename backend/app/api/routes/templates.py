from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from app.api.deps import get_current_user_id, get_template_service
from app.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.core.result import Result
from app.core.validate import MAX_ID
from app.db.paging import Pageable
from app.schemas.page import PageOut
from app.schemas.template import TemplateCreateIn, TemplateOut, TemplateUpdateIn
from app.services.template_service import TemplateService

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("/owner/{owner_id}", response_model=Result)
def list_templates(
    owner_id: int,
    page: int = Query(0, ge=0, le=MAX_ID),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    pageable = Pageable(page=page, size=min(size, MAX_PAGE_SIZE))
    result = service.list_templates(
        user_id, owner_id, pageable, keyword=keyword, category=category, tag=tag
    )
    return Result.ok(PageOut[TemplateOut].from_page(result, TemplateOut.model_validate))


@router.get("/{template_id}", response_model=Result)
def get_template(
    template_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    template = service.get_template(user_id, template_id)
    return Result.ok(TemplateOut.model_validate(template) if template is not None else None)


@router.post("", response_model=Result)
def create_template(
    payload: Optional[TemplateCreateIn] = Body(None),
    user_id: int = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    service.create_template(user_id, payload)
    return Result.ok()


@router.delete("/{template_id}", response_model=Result)
def delete_template(
    template_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    service.delete_template(user_id, template_id)
    return Result.ok()


@router.put("/{template_id}", response_model=Result)
def update_template(
    template_id: int,
    payload: Optional[TemplateUpdateIn] = Body(None),
    user_id: int = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    service.update_template(user_id, payload, path_id=template_id)
    return Result.ok()
