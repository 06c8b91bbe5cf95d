from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.db.paging import Page, Pageable
from app.db.query import QuerySpec
from app.models.template import Template


class TemplateRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_one(self, template_id: int) -> Optional[Template]:
        return self.db.get(Template, template_id)

    def find_all(self, spec: QuerySpec, pageable: Pageable) -> Page:
        total = self.db.execute(spec.compile_count(Template)).scalar_one()
        stmt = (
            spec.compile(Template)
            .order_by(Template.id.asc())
            .offset(pageable.offset)
            .limit(pageable.size)
        )
        rows = list(self.db.execute(stmt).scalars().all())
        return Page(content=rows, total_elements=total, number=pageable.page, size=pageable.size)

    def find_by_owner_id_and_is_deleted_is_false_order_by_sort_code_asc(
        self, owner_id: int, pageable: Pageable
    ) -> Page:
        base = select(Template).where(Template.owner_id == owner_id, Template.is_deleted == False)  # noqa: E712
        total = self.db.execute(
            select(func.count()).select_from(base.subquery())
        ).scalar_one()
        rows = list(
            self.db.execute(
                base.order_by(Template.sort_code.asc(), Template.id.asc())
                .offset(pageable.offset)
                .limit(pageable.size)
            ).scalars().all()
        )
        return Page(content=rows, total_elements=total, number=pageable.page, size=pageable.size)

    def save(self, template: Template) -> Template:
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return template
