from pydantic import BaseModel, ConfigDict


class ClassroomBase(BaseModel):
    room_number: str
    type: str
    capacity: int


class ClassroomCreate(ClassroomBase):
    pass


class ClassroomResponse(ClassroomBase):
    booking_count: int = 0

    model_config = ConfigDict(from_attributes=True)
