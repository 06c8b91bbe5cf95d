"""Owner-scoped template operations.

Every operation takes the authenticated user id as an argument; nothing here
reads the request. Validation and ownership checks run before any write, so a
rejected call never touches storage. Failures are raised as ``ResultError``.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from app.core.result import ResultCode, ResultError
from app.core.validate import id_invalid, is_blank, is_not_blank
from app.db.paging import Page, Pageable
from app.db.query import Contains, QuerySpec
from app.models.template import Template
from app.repositories.template_repository import TemplateRepository
from app.schemas.template import TemplateCreateIn, TemplateUpdateIn

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_filter_spec(
    owner_id: int,
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    tag: Optional[str] = None,
) -> QuerySpec:
    spec = QuerySpec().eq("is_deleted", False).eq("owner_id", owner_id)
    if is_not_blank(keyword):
        spec.any_of(Contains("name", keyword), Contains("description", keyword))
    if is_not_blank(category):
        spec.eq("category", category)
    if is_not_blank(tag):
        spec.contains("tags", tag)
    return spec.order_by("sort_code")


def has_filters(keyword: Optional[str], category: Optional[str], tag: Optional[str]) -> bool:
    return is_not_blank(keyword) or is_not_blank(category) or is_not_blank(tag)


class TemplateService:
    def __init__(self, repo: TemplateRepository):
        self.repo = repo

    def list_templates(
        self,
        user_id: int,
        owner_id: int,
        pageable: Pageable,
        keyword: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Page:
        if id_invalid(owner_id):
            raise ResultError(ResultCode.PARAMS_ERROR)
        if owner_id != user_id:
            logger.warning("user %s denied listing templates of owner %s", user_id, owner_id)
            raise ResultError(ResultCode.FORBIDDEN)
        if has_filters(keyword, category, tag):
            return self.repo.find_all(build_filter_spec(owner_id, keyword, category, tag), pageable)
        return self.repo.find_by_owner_id_and_is_deleted_is_false_order_by_sort_code_asc(owner_id, pageable)

    def get_template(self, user_id: int, template_id: int) -> Optional[Template]:
        if id_invalid(template_id):
            raise ResultError(ResultCode.PARAMS_ERROR)
        template = self.repo.find_one(template_id)
        # a missing record is passed through; ownership only applies to what exists
        if template is not None and template.owner_id != user_id:
            logger.warning("user %s denied template %s", user_id, template_id)
            raise ResultError(ResultCode.FORBIDDEN)
        return template

    def create_template(self, user_id: int, payload: Optional[TemplateCreateIn]) -> Template:
        if payload is None or id_invalid(payload.owner_id) or is_blank(payload.name):
            raise ResultError(ResultCode.PARAMS_ERROR)
        if payload.owner_id != user_id:
            logger.warning("user %s denied creating template for owner %s", user_id, payload.owner_id)
            raise ResultError(ResultCode.FORBIDDEN)
        template = Template(
            owner_id=payload.owner_id,
            name=payload.name,
            description=payload.description,
            category=payload.category,
            tags=payload.tags,
            sort_code=payload.sort_code if payload.sort_code is not None else 0,
            is_deleted=False,
            visit_count=0,
            likings=0,
            created_at=_now(),
        )
        self.repo.save(template)
        logger.info("template %s created for owner %s", template.id, template.owner_id)
        return template

    def delete_template(self, user_id: int, template_id: int) -> Template:
        if id_invalid(template_id):
            raise ResultError(ResultCode.PARAMS_ERROR)
        template = self.repo.find_one(template_id)
        if template is None:
            raise ResultError(ResultCode.DATA_NOT_FOUND)
        if template.owner_id != user_id:
            logger.warning("user %s denied deleting template %s", user_id, template_id)
            raise ResultError(ResultCode.FORBIDDEN)
        template.is_deleted = True
        template.updated_at = _now()
        self.repo.save(template)
        logger.info("template %s soft-deleted by owner %s", template_id, user_id)
        return template

    def update_template(
        self, user_id: int, payload: Optional[TemplateUpdateIn], path_id: Optional[int] = None
    ) -> Template:
        if payload is None or id_invalid(payload.id) or is_blank(payload.name):
            raise ResultError(ResultCode.PARAMS_ERROR)
        if path_id is not None and path_id != payload.id:
            raise ResultError(ResultCode.PARAMS_ERROR, "Path id does not match payload id")
        template = self.repo.find_one(payload.id)
        if template is None:
            raise ResultError(ResultCode.DATA_NOT_FOUND)
        if template.owner_id != user_id:
            logger.warning("user %s denied updating template %s", user_id, payload.id)
            raise ResultError(ResultCode.FORBIDDEN)
        changed = payload.to_patch().apply_to(template)
        template.updated_at = _now()
        self.repo.save(template)
        logger.info("template %s updated by owner %s: %s", template.id, user_id, ", ".join(changed))
        return template
