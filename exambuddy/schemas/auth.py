"""Pydantic schemas for auth and user preferences."""
from pydantic import BaseModel, ConfigDict

from exambuddy.schemas.base import CamelSchema


class CredentialsSchema(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOutSchema(BaseModel):
    id: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class TokenOutSchema(BaseModel):
    token: str
    user: UserOutSchema


class MeOutSchema(CamelSchema):
    id: str
    email: str
    current_subject: str


class PreferenceSchema(CamelSchema):
    current_subject: str | None = None
