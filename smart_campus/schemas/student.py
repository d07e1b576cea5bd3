from pydantic import BaseModel, ConfigDict
from typing import List


class StudentBase(BaseModel):
    name: str
    degree: str
    email: str


class StudentCreate(StudentBase):
    id: str


class StudentUpdate(StudentBase):
    pass


class StudentResponse(StudentBase):
    id: str

    model_config = ConfigDict(from_attributes=True)


class StudentDetailResponse(StudentResponse):
    checked_out: List[str] = []
