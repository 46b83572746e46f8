from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RoomStatus = Literal["available", "occupied", "maintenance"]
BookingStatus = Literal["pending", "confirmed", "checked-in", "completed", "cancelled"]
ChargeType = Literal["room-service", "laundry", "other"]


class SCategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class SCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class SCategory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    name: str
    description: str


class SAmenityCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    icon: str | None = None


class SAmenityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    icon: str | None = None


class SAmenity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    name: str
    description: str
    icon: str | None = None


class SRoomCreate(BaseModel):
    room_number: str = Field(min_length=1)
    category_id: str | None = None
    price: float = Field(gt=0)
    capacity: int = Field(gt=0)
    status: RoomStatus = "available"
    description: str = ""
    amenity_ids: list[str] = []


class SRoomUpdate(BaseModel):
    room_number: str | None = Field(default=None, min_length=1)
    category_id: str | None = None
    price: float | None = Field(default=None, gt=0)
    capacity: int | None = Field(default=None, gt=0)
    status: RoomStatus | None = None
    description: str | None = None
    amenity_ids: list[str] | None = None


class SRoom(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    room_number: str
    category_id: str | None = None
    price: float
    capacity: int
    status: RoomStatus
    description: str
    maintenance_note: str | None = None
    amenities: list[SAmenity] = []


class SRoomAvailability(SRoom):
    computed_status: RoomStatus
    active_booking_id: str | None = None


class SAvailabilityBoard(BaseModel):
    check_in: date
    check_out: date
    available: list[SRoomAvailability]
    unavailable: list[SRoomAvailability]


class SStayDates(BaseModel):
    check_in: date
    check_out: date

    @model_validator(mode="after")
    def check_out_not_before_check_in(self):
        if self.check_out < self.check_in:
            raise ValueError("check_out cannot be before check_in.")
        return self


class SBookingCreate(SStayDates):
    room_ids: list[str] = Field(min_length=1)
    guest_name: str = Field(min_length=1)
    phone: str = ""
    id_proof: str = ""
    guest_count: int = Field(default=1, ge=1)
    advance_payment: float = Field(default=0, ge=0)

    @field_validator("room_ids")
    def room_ids_unique(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("room_ids must not contain duplicates.")
        return v


class SStayEstimateRequest(SStayDates):
    room_ids: list[str] = Field(min_length=1)
    advance_payment: float = Field(default=0, ge=0)


class SStayEstimate(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nightly_total: float
    nights: int
    total_price: float
    advance_payment: float
    balance: float
    amount_payable: float


class SFolioChargeCreate(BaseModel):
    type: ChargeType
    item: str = Field(min_length=1)
    quantity: int = Field(default=1, gt=0)
    price: float = Field(ge=0)
    is_express: bool = False

    @model_validator(mode="after")
    def express_only_for_laundry(self):
        if self.is_express and self.type != "laundry":
            raise ValueError("Express service is only available for laundry.")
        return self


class SFolioCharge(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    type: ChargeType
    item: str
    quantity: int
    price: float
    is_express: bool
    total: float


class SBooking(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    room_id: str
    guest_name: str
    phone: str
    id_proof: str
    guest_count: int
    check_in: date
    check_out: date
    status: BookingStatus
    total_price: float
    advance_payment: float
    folio_charges: list[SFolioCharge] = []
    created_at: datetime


class SFolio(BaseModel):
    booking_id: str
    status: BookingStatus
    room_rent: float
    charges: list[SFolioCharge]
    charges_total: float
    advance_payment: float
    total_due: float
    amount_payable: float


class SExtendStay(BaseModel):
    check_out: date


class SCheckout(BaseModel):
    room_status: Literal["available", "maintenance"] = "available"
    maintenance_note: str | None = None


class SMaintenance(BaseModel):
    note: str | None = None
