from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.schemas.user import FullnamePayload, FullnameResponse

VehicleType = Literal["car", "motorcycle", "auto"]


class VehiclePayload(BaseModel):
    color: str = Field(..., min_length=3, examples=["black"])
    plate: str = Field(..., min_length=3, examples=["ABC-1234"])
    capacity: int = Field(..., ge=1, examples=[4])
    vehicle_type: VehicleType = Field(..., examples=["car"])

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        return v.strip().upper()


class DriverRegisterPayload(BaseModel):
    fullname: FullnamePayload
    email: EmailStr = Field(..., examples=["driver@example.com"])
    password: str = Field(..., min_length=6, examples=["secret123"])
    vehicle: VehiclePayload


class DriverLoginPayload(BaseModel):
    email: EmailStr = Field(..., examples=["driver@example.com"])
    password: str = Field(..., min_length=6, examples=["secret123"])


class VehicleResponse(BaseModel):
    color: str
    plate: str
    capacity: int
    vehicle_type: VehicleType


class DriverResponse(BaseModel):
    id: int
    fullname: FullnameResponse
    email: EmailStr
    status: str
    socket_id: Optional[str] = None
    vehicle: VehicleResponse

    @model_validator(mode="before")
    @classmethod
    def from_record(cls, data):
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "fullname": {"firstname": data.firstname, "lastname": data.lastname},
            "email": data.email,
            "status": data.status,
            "socket_id": data.socket_id,
            "vehicle": {
                "color": data.vehicle_color,
                "plate": data.vehicle_plate,
                "capacity": data.vehicle_capacity,
                "vehicle_type": data.vehicle_type,
            },
        }


class DriverAuthResponse(BaseModel):
    token: str
    driver: DriverResponse


class DriverProfileResponse(BaseModel):
    driver: DriverResponse
