from __future__ import annotations

from pydantic import BaseModel, Field


class CredentialsRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=256)


class AccessTokenDTO(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")


class MessageDTO(BaseModel):
    message: str
