from typing import Optional

from pydantic import BaseModel, Field, model_validator


class NoteCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=50_000)


class NoteUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1, max_length=50_000)

    @model_validator(mode="after")
    def _not_empty(self) -> "NoteUpdate":
        if self.title is None and self.content is None:
            raise ValueError("Nothing to update.")
        return self
