from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    felhasznalonev: str = Field(min_length=1)
    jelszo: str = Field(min_length=1)


class AdminResponse(BaseModel):
    id: str
    felhasznalonev: str
    letrehozva: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminSummary(BaseModel):
    id: str
    felhasznalonev: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    admin: AdminResponse


class VerifyResponse(BaseModel):
    valid: bool = True
    admin: AdminSummary


class MessageResponse(BaseModel):
    message: str
