from datetime import datetime
from typing import Annotated, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StrictInt, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class OrderItemCreate(BaseModel):
    termek_nev: NonEmptyStr
    termek_ar: PositiveInt
    mennyiseg: PositiveInt
    tej: NonEmptyStr
    cukor: NonEmptyStr


class ShippingDetails(BaseModel):
    vevo_nev: NonEmptyStr
    telefon: NonEmptyStr
    email: NonEmptyStr
    iranyitoszam: NonEmptyStr
    telepules: NonEmptyStr
    utca_hazszam: NonEmptyStr

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        # Only the format is checked; the address is kept exactly as the customer typed it
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"value is not a valid email address: {exc}") from exc
        return value


class OrderCreate(ShippingDetails):
    items: List[OrderItemCreate] = Field(min_length=1)


class OrderItemResponse(BaseModel):
    id: str
    rendeles_id: str
    termek_nev: str
    termek_ar: int
    mennyiseg: int
    tej: str
    cukor: str

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: str
    vevo_nev: str
    telefon: str
    email: str
    iranyitoszam: str
    telepules: str
    utca_hazszam: str
    megrendelve: datetime
    postazva: int
    postazva_datum: Optional[datetime] = None
    items: List[OrderItemResponse] = []

    model_config = ConfigDict(from_attributes=True)


class ShipUpdate(BaseModel):
    # StrictInt: true/false, "1" and 1.0 are rejected
    postazva: StrictInt


class ShipResponse(BaseModel):
    id: str
    postazva: int
    postazva_datum: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
