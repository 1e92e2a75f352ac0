from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, field_validator
from typing import Optional

class TaskCreate(BaseModel):
    # field order is validation order: title is reported before user_id
    title: str
    user_id: StrictInt

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError("title is required")
        return v.strip()

    @field_validator("user_id")
    @classmethod
    def user_id_not_zero(cls, v):
        if v == 0:
            raise ValueError("user_id is required")
        return v


class TaskUpdate(BaseModel):
    """Partial update body.

    Both fields are optional. Presence is read from ``model_fields_set`` so an
    omitted ``done`` is never confused with ``"done": false``.
    """

    title: Optional[str] = None
    done: Optional[StrictBool] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        if v is None:
            raise ValueError("title cannot be null")
        if not v.strip():
            raise ValueError("title cannot be empty")
        return v.strip()

    @field_validator("done")
    @classmethod
    def done_not_null(cls, v):
        if v is None:
            raise ValueError("done cannot be null")
        return v

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    done: bool


class ErrorOut(BaseModel):
    error: str
