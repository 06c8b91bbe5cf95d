from pydantic import BaseModel, Field, StrictInt
from typing import Optional
from datetime import datetime

from app.core.validate import MAX_ID


class TemplateCreateIn(BaseModel):
    # owner_id and name are checked by the service so that bad values come
    # back as PARAMS_ERROR rather than a schema failure
    owner_id: Optional[StrictInt] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    sort_code: Optional[int] = Field(None, ge=-MAX_ID - 1, le=MAX_ID)


class TemplateUpdateIn(BaseModel):
    id: Optional[StrictInt] = None
    owner_id: Optional[StrictInt] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    sort_code: Optional[int] = Field(None, ge=-MAX_ID - 1, le=MAX_ID)

    def to_patch(self) -> "TemplatePatch":
        return TemplatePatch(
            name=self.name,
            description=self.description,
            category=self.category,
            tags=self.tags,
            sort_code=self.sort_code,
        )


class TemplatePatch(BaseModel):
    """Fields an update may overwrite. ``None`` means leave unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    sort_code: Optional[int] = Field(None, ge=-MAX_ID - 1, le=MAX_ID)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)

    def apply_to(self, template) -> list:
        changed = []
        for field, value in self.changes().items():
            setattr(template, field, value)
            changed.append(field)
        return changed


class TemplateOut(BaseModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    sort_code: int
    is_deleted: bool
    visit_count: int
    likings: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

