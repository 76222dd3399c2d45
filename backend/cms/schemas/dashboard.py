"""Dashboard editor request schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PageCreate(BaseModel):
    name: str = ""
    slug: str = ""
    title: str = ""
    status: Literal["draft", "published"] = "draft"


class PageUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    slug: str | None = None
    title: str | None = None
    status: Literal["draft", "published"] | None = None


class SectionMove(BaseModel):
    fromIndex: int = Field(..., ge=0)
    toIndex: int = Field(..., ge=0)


class MenuCreate(BaseModel):
    name: str = ""


class MenuItemCreate(BaseModel):
    label: str = ""
    url: str = ""
    parentId: str | None = None


class MenuItemUpdate(BaseModel):
    label: str | None = None
    url: str | None = None


class MakeSubmenu(BaseModel):
    parentId: str = Field(..., min_length=1)


class ReorderItem(BaseModel):
    targetId: str = Field(..., min_length=1)
    position: Literal["before", "after"] = "before"
