from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional
from smart_campus.utils.interval import format_time


class BookingBase(BaseModel):
    course: str
    start_time: str
    end_time: str


class BookingCreate(BookingBase):
    room_number: Optional[str] = None


class BookingUpdate(BaseModel):
    course: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    room_number: str
    course: str
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def format_times(cls, value):
        if isinstance(value, datetime):
            return format_time(value)
        return value

    model_config = ConfigDict(from_attributes=True)


class SlotResponse(BaseModel):
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def format_times(cls, value):
        if isinstance(value, datetime):
            return format_time(value)
        return value

    model_config = ConfigDict(from_attributes=True)
