from dataclasses import asdict
from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from outlet_admin.exceptions import InvalidDateRangeException
from outlet_admin.hotels.repository import HotelRepository, get_hotel_repository
from outlet_admin.hotels.schemas import (
    SAmenity,
    SAmenityCreate,
    SAmenityUpdate,
    SAvailabilityBoard,
    SBooking,
    SBookingCreate,
    SCategory,
    SCategoryCreate,
    SCategoryUpdate,
    SCheckout,
    SExtendStay,
    SFolio,
    SFolioChargeCreate,
    SMaintenance,
    SRoom,
    SRoomAvailability,
    SRoomCreate,
    SRoomUpdate,
    SStayEstimate,
    SStayEstimateRequest,
)

router = APIRouter(prefix="/outlets/{outlet_id}")


# Categories

@router.get("/categories")
async def list_categories(outlet_id: str, repo: HotelRepository = Depends(get_hotel_repository)) -> list[SCategory]:
    return await repo.list_categories(outlet_id)


@router.post("/categories", status_code=201)
async def create_category(outlet_id: str, data: SCategoryCreate,
                          repo: HotelRepository = Depends(get_hotel_repository)) -> SCategory:
    return await repo.create_category(outlet_id, data)


@router.get("/categories/{category_id}")
async def get_category(outlet_id: str, category_id: str,
                       repo: HotelRepository = Depends(get_hotel_repository)) -> SCategory:
    return await repo.get_category(outlet_id, category_id)


@router.patch("/categories/{category_id}")
async def update_category(outlet_id: str, category_id: str, data: SCategoryUpdate,
                          repo: HotelRepository = Depends(get_hotel_repository)) -> SCategory:
    return await repo.update_category(outlet_id, category_id, data)


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(outlet_id: str, category_id: str,
                          repo: HotelRepository = Depends(get_hotel_repository)):
    await repo.delete_category(outlet_id, category_id)
    return Response(status_code=204)


# Amenities

@router.get("/amenities")
async def list_amenities(outlet_id: str, repo: HotelRepository = Depends(get_hotel_repository)) -> list[SAmenity]:
    return await repo.list_amenities(outlet_id)


@router.post("/amenities", status_code=201)
async def create_amenity(outlet_id: str, data: SAmenityCreate,
                         repo: HotelRepository = Depends(get_hotel_repository)) -> SAmenity:
    return await repo.create_amenity(outlet_id, data)


@router.get("/amenities/{amenity_id}")
async def get_amenity(outlet_id: str, amenity_id: str,
                      repo: HotelRepository = Depends(get_hotel_repository)) -> SAmenity:
    return await repo.get_amenity(outlet_id, amenity_id)


@router.patch("/amenities/{amenity_id}")
async def update_amenity(outlet_id: str, amenity_id: str, data: SAmenityUpdate,
                         repo: HotelRepository = Depends(get_hotel_repository)) -> SAmenity:
    return await repo.update_amenity(outlet_id, amenity_id, data)


@router.delete("/amenities/{amenity_id}", status_code=204)
async def delete_amenity(outlet_id: str, amenity_id: str,
                         repo: HotelRepository = Depends(get_hotel_repository)):
    await repo.delete_amenity(outlet_id, amenity_id)
    return Response(status_code=204)


# Rooms

@router.get("/rooms")
async def list_rooms(
    outlet_id: str,
    category_id: str | None = None,
    capacity: list[int] = Query(default=[]),
    sort: Literal["asc", "desc"] | None = None,
    repo: HotelRepository = Depends(get_hotel_repository),
) -> list[SRoom]:
    return await repo.list_rooms(outlet_id, category_id, capacity, sort)


@router.get("/rooms/availability")
async def room_availability(
    outlet_id: str,
    check_in: date,
    check_out: date,
    category_id: str | None = None,
    capacity: list[int] = Query(default=[]),
    sort: Literal["asc", "desc"] | None = None,
    repo: HotelRepository = Depends(get_hotel_repository),
) -> SAvailabilityBoard:
    """Room Operations board: which rooms can be booked for the chosen dates."""
    if check_out < check_in:
        raise InvalidDateRangeException()

    board = await repo.availability_board(
        outlet_id, check_in, check_out, category_id, capacity, sort
    )

    def to_schema(entry):
        room = SRoom.model_validate(entry["room"]).model_dump()
        return SRoomAvailability(
            **room,
            computed_status=entry["computed_status"],
            active_booking_id=entry["active_booking_id"],
        )

    return SAvailabilityBoard(
        check_in=board["check_in"],
        check_out=board["check_out"],
        available=[to_schema(entry) for entry in board["available"]],
        unavailable=[to_schema(entry) for entry in board["unavailable"]],
    )


@router.post("/rooms", status_code=201)
async def create_room(outlet_id: str, data: SRoomCreate,
                      repo: HotelRepository = Depends(get_hotel_repository)) -> SRoom:
    return await repo.create_room(outlet_id, data)


@router.get("/rooms/{room_id}")
async def get_room(outlet_id: str, room_id: str,
                   repo: HotelRepository = Depends(get_hotel_repository)) -> SRoom:
    return await repo.get_room(outlet_id, room_id)


@router.patch("/rooms/{room_id}")
async def update_room(outlet_id: str, room_id: str, data: SRoomUpdate,
                      repo: HotelRepository = Depends(get_hotel_repository)) -> SRoom:
    return await repo.update_room(outlet_id, room_id, data)


@router.delete("/rooms/{room_id}", status_code=204)
async def delete_room(outlet_id: str, room_id: str,
                      repo: HotelRepository = Depends(get_hotel_repository)):
    await repo.delete_room(outlet_id, room_id)
    return Response(status_code=204)


@router.post("/rooms/{room_id}/maintenance")
async def set_room_maintenance(outlet_id: str, room_id: str, data: SMaintenance,
                               repo: HotelRepository = Depends(get_hotel_repository)) -> SRoom:
    return await repo.set_maintenance(outlet_id, room_id, data.note)


@router.post("/rooms/{room_id}/ready")
async def mark_room_ready(outlet_id: str, room_id: str,
                          repo: HotelRepository = Depends(get_hotel_repository)) -> SRoom:
    return await repo.mark_ready(outlet_id, room_id)


# Bookings

@router.post("/bookings/estimate")
async def estimate_booking(outlet_id: str, data: SStayEstimateRequest,
                           repo: HotelRepository = Depends(get_hotel_repository)) -> SStayEstimate:
    estimate = await repo.estimate(outlet_id, data)
    return SStayEstimate(**asdict(estimate))


@router.post("/bookings", status_code=201)
async def create_bookings(outlet_id: str, data: SBookingCreate,
                          repo: HotelRepository = Depends(get_hotel_repository)) -> list[SBooking]:
    """Book every selected room for the same guest and dates."""
    return await repo.create_bookings(outlet_id, data)


@router.get("/bookings")
async def list_bookings(
    outlet_id: str,
    status: str | None = None,
    repo: HotelRepository = Depends(get_hotel_repository),
) -> list[SBooking]:
    return await repo.list_bookings(outlet_id, status)


@router.get("/bookings/{booking_id}")
async def get_booking(outlet_id: str, booking_id: str,
                      repo: HotelRepository = Depends(get_hotel_repository)) -> SBooking:
    return await repo.get_booking(outlet_id, booking_id)


@router.get("/bookings/{booking_id}/folio")
async def get_folio(outlet_id: str, booking_id: str,
                    repo: HotelRepository = Depends(get_hotel_repository)) -> SFolio:
    booking = await repo.get_booking(outlet_id, booking_id)
    return repo.folio(booking)


@router.post("/bookings/{booking_id}/charges", status_code=201)
async def add_folio_charge(outlet_id: str, booking_id: str, data: SFolioChargeCreate,
                           repo: HotelRepository = Depends(get_hotel_repository)) -> SFolio:
    booking = await repo.add_charge(outlet_id, booking_id, data)
    return repo.folio(booking)


@router.post("/bookings/{booking_id}/extend")
async def extend_stay(outlet_id: str, booking_id: str, data: SExtendStay,
                      repo: HotelRepository = Depends(get_hotel_repository)) -> SBooking:
    return await repo.extend_stay(outlet_id, booking_id, data.check_out)


@router.post("/bookings/{booking_id}/check-in")
async def check_in_booking(outlet_id: str, booking_id: str,
                           repo: HotelRepository = Depends(get_hotel_repository)) -> SBooking:
    return await repo.check_in(outlet_id, booking_id)


@router.post("/bookings/{booking_id}/checkout")
async def checkout_booking(outlet_id: str, booking_id: str, data: SCheckout,
                           repo: HotelRepository = Depends(get_hotel_repository)) -> SBooking:
    return await repo.checkout(outlet_id, booking_id, data)


@router.post("/bookings/{booking_id}/cancel")
async def cancel_booking(outlet_id: str, booking_id: str,
                         repo: HotelRepository = Depends(get_hotel_repository)) -> SBooking:
    return await repo.cancel(outlet_id, booking_id)
