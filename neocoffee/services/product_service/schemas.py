from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ProductCreate(BaseModel):
    nev: NonEmptyStr
    ar: PositiveInt
    kep_url: Optional[str] = None


class ProductUpdate(BaseModel):
    # Omitted fields keep their stored value; kep_url=null clears the image
    nev: Optional[NonEmptyStr] = None
    ar: Optional[PositiveInt] = None
    kep_url: Optional[str] = None


class ProductResponse(BaseModel):
    id: str
    nev: str
    ar: int
    kep_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
