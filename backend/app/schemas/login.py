import json
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Status = Literal["pending", "approved", "rejected"]
Outcome = Literal["approved", "rejected"]


class LoginRequest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: Optional[str] = None
    password: Optional[str] = None
    ip_address: Optional[str] = None
    status: Status
    created_at: datetime
    updated_at: datetime


class LoginAttempt(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: Optional[str] = None
    ip_address: Optional[str] = None
    status: Outcome
    created_at: datetime


class LoginStats(BaseModel):
    total: int = 0
    approved: int = 0
    rejected: int = 0
    pending: int = 0
    today: int = 0


class LoginRequestCreate(BaseModel):
    # wire names follow the browser client: camelCase ipAddress
    model_config = ConfigDict(populate_by_name=True)

    # stored as submitted: missing fields stay null, non-strings become their JSON text
    username: Optional[str] = None
    password: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, alias="ipAddress")

    @field_validator("username", "password", "ip_address", mode="before")
    @classmethod
    def as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)
