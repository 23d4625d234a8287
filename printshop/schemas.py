"""Shared Pydantic schemas used across domains"""

from datetime import datetime
from typing import Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    """Read from ORM attributes, serialize camelCase"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class UserSummary(ResponseModel):
    id: int
    name: Optional[str] = None
    email: str


class AddressResponse(ResponseModel):
    id: int
    office_id: Optional[int] = None
    name: Optional[str] = None
    line1: str
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    city: str
    state: str
    zipcode: str
    country: Optional[str] = None
    telephone_number: Optional[str] = None
    address_type: Optional[str] = None
    deleted: bool = False


class ArtworkResponse(ResponseModel):
    id: int
    file_url: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class ArtworkInput(BaseModel):
    fileUrl: str
    description: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
