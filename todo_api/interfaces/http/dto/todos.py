from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from todo_api.domain.todos.entities import Todo


class TodoContentRequestDTO(BaseModel):
    content: str = Field(min_length=1)


class TodoDTO(BaseModel):
    id: int
    user_id: int = Field(serialization_alias="userId")
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_entity(cls, todo: Todo) -> TodoDTO:
        return cls(
            id=todo.id,
            user_id=todo.user_id,
            content=todo.content,
            created_at=todo.created_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
