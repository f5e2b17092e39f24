from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.ids import OBJECT_ID_PATTERN


class PostCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    category: str | None = Field(default=None, pattern=OBJECT_ID_PATTERN)
    slug: str | None = Field(default=None, min_length=1, max_length=250)


class PostUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, pattern=OBJECT_ID_PATTERN)
    slug: str | None = Field(default=None, min_length=1, max_length=250)


class PostPublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    content: str
    author: str
    category: str | None = None
    slug: str
    createdAt: str
    updatedAt: str


class MessageResponse(BaseModel):
    message: str
