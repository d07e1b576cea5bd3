from pydantic import BaseModel, ConfigDict
from typing import Optional


class ResourceBase(BaseModel):
    name: str
    type: str
    status: str = "Available"


class ResourceCreate(ResourceBase):
    id: str


class ResourceUpdate(ResourceBase):
    pass


class ResourceCheckout(BaseModel):
    student_id: str


class ResourceResponse(ResourceBase):
    id: str
    checked_out_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
