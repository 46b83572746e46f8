import logging
from datetime import date

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from outlet_admin.database import get_async_session
from outlet_admin.exceptions import (
    AmenityNotFoundException,
    BookingNotActiveException,
    BookingNotFoundException,
    CategoryInUseException,
    CategoryNotFoundException,
    InvalidStayExtensionException,
    RoomNotFoundException,
    RoomUnavailableException,
)
from outlet_admin.hotels.availability import (
    ACTIVE_BOOKING_STATUSES,
    RELEASED_BOOKING_STATUSES,
    active_booking,
    computed_status,
    filter_rooms,
    is_room_available,
)
from outlet_admin.hotels.billing import (
    amount_payable,
    calculate_total_bill,
    charge_total,
    charges_total,
    stay_price,
)
from outlet_admin.hotels.booking import build_bookings, estimate_stay
from outlet_admin.hotels.models import Amenity, Booking, Category, FolioCharge, Room
from outlet_admin.hotels.schemas import (
    SAmenityCreate,
    SAmenityUpdate,
    SBookingCreate,
    SCategoryCreate,
    SCategoryUpdate,
    SCheckout,
    SFolioChargeCreate,
    SRoomCreate,
    SRoomUpdate,
    SStayEstimateRequest,
)
from outlet_admin.outbox.publisher import record_event

logger = logging.getLogger(__name__)


def locked_rooms_query(outlet_id: str, room_ids):
    # stable lock order so concurrent batch bookings cannot deadlock
    return (
        select(Room)
        .where(Room.outlet_id == outlet_id, Room.id.in_(room_ids))
        .order_by(Room.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def booking_payload(booking: Booking) -> dict:
    return {
        "booking_id": booking.id,
        "outlet_id": booking.outlet_id,
        "room_id": booking.room_id,
        "guest_name": booking.guest_name,
        "check_in": booking.check_in.isoformat(),
        "check_out": booking.check_out.isoformat(),
        "status": booking.status,
    }


class HotelRepository:
    """Rooms, categories, amenities and bookings of a hotel outlet."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def list_categories(self, outlet_id: str):
        query = select(Category).where(Category.outlet_id == outlet_id).order_by(Category.name)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_category(self, outlet_id: str, category_id: str) -> Category:
        query = select(Category).where(Category.outlet_id == outlet_id, Category.id == category_id)
        category = (await self.db.execute(query)).scalar_one_or_none()
        if category is None:
            raise CategoryNotFoundException()
        return category

    async def create_category(self, outlet_id: str, data: SCategoryCreate) -> Category:
        category = Category(outlet_id=outlet_id, **data.model_dump())
        self.db.add(category)
        await self.db.commit()
        return category

    async def update_category(self, outlet_id: str, category_id: str, data: SCategoryUpdate) -> Category:
        category = await self.get_category(outlet_id, category_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        await self.db.commit()
        return category

    async def delete_category(self, outlet_id: str, category_id: str) -> None:
        category = await self.get_category(outlet_id, category_id)
        in_use = await self.db.scalar(
            select(func.count(Room.id)).where(Room.category_id == category.id)
        )
        if in_use:
            raise CategoryInUseException()
        await self.db.delete(category)
        await self.db.commit()

    # ------------------------------------------------------------------
    # Amenities
    # ------------------------------------------------------------------

    async def list_amenities(self, outlet_id: str):
        query = select(Amenity).where(Amenity.outlet_id == outlet_id).order_by(Amenity.name)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_amenity(self, outlet_id: str, amenity_id: str) -> Amenity:
        query = select(Amenity).where(Amenity.outlet_id == outlet_id, Amenity.id == amenity_id)
        amenity = (await self.db.execute(query)).scalar_one_or_none()
        if amenity is None:
            raise AmenityNotFoundException()
        return amenity

    async def create_amenity(self, outlet_id: str, data: SAmenityCreate) -> Amenity:
        amenity = Amenity(outlet_id=outlet_id, **data.model_dump())
        self.db.add(amenity)
        await self.db.commit()
        return amenity

    async def update_amenity(self, outlet_id: str, amenity_id: str, data: SAmenityUpdate) -> Amenity:
        amenity = await self.get_amenity(outlet_id, amenity_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(amenity, key, value)
        await self.db.commit()
        return amenity

    async def delete_amenity(self, outlet_id: str, amenity_id: str) -> None:
        amenity = await self.get_amenity(outlet_id, amenity_id)
        rooms = await self.list_rooms(outlet_id)
        for room in rooms:
            if amenity in room.amenities:
                room.amenities.remove(amenity)
        await self.db.delete(amenity)
        await self.db.commit()

    async def _resolve_amenities(self, outlet_id: str, amenity_ids):
        amenities = []
        for amenity_id in dict.fromkeys(amenity_ids):
            amenities.append(await self.get_amenity(outlet_id, amenity_id))
        return amenities

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    async def list_rooms(self, outlet_id: str, category_id: str = None, capacities=None, sort: str = None):
        query = select(Room).where(Room.outlet_id == outlet_id).order_by(Room.room_number)
        result = await self.db.execute(query)
        return filter_rooms(result.scalars().all(), category_id, capacities, sort)

    async def get_room(self, outlet_id: str, room_id: str, populate_existing: bool = False,
                       for_update: bool = False) -> Room:
        query = select(Room).where(Room.outlet_id == outlet_id, Room.id == room_id)
        if for_update:
            query = query.with_for_update()
        if populate_existing or for_update:
            query = query.execution_options(populate_existing=True)
        room = (await self.db.execute(query)).scalar_one_or_none()
        if room is None:
            raise RoomNotFoundException()
        return room

    async def create_room(self, outlet_id: str, data: SRoomCreate) -> Room:
        if data.category_id is not None:
            await self.get_category(outlet_id, data.category_id)

        values = data.model_dump(exclude={"amenity_ids"})
        room = Room(outlet_id=outlet_id, **values)
        room.amenities = await self._resolve_amenities(outlet_id, data.amenity_ids)
        self.db.add(room)
        await self.db.commit()
        return await self.get_room(outlet_id, room.id, populate_existing=True)

    async def update_room(self, outlet_id: str, room_id: str, data: SRoomUpdate) -> Room:
        room = await self.get_room(outlet_id, room_id)
        values = data.model_dump(exclude_unset=True)

        if values.get("category_id") is not None:
            await self.get_category(outlet_id, values["category_id"])
        amenity_ids = values.pop("amenity_ids", None)
        if amenity_ids is not None:
            room.amenities = await self._resolve_amenities(outlet_id, amenity_ids)

        for key, value in values.items():
            setattr(room, key, value)
        if room.status != "maintenance":
            room.maintenance_note = None

        await self.db.commit()
        return await self.get_room(outlet_id, room_id, populate_existing=True)

    async def delete_room(self, outlet_id: str, room_id: str) -> None:
        room = await self.get_room(outlet_id, room_id)
        bookings = await self._room_bookings([room.id])
        if any(booking.status not in RELEASED_BOOKING_STATUSES for booking in bookings):
            raise RoomUnavailableException("Room has active bookings and cannot be deleted.")

        for booking in bookings:
            await self.db.delete(booking)
        await self.db.delete(room)
        await self.db.commit()

    async def set_maintenance(self, outlet_id: str, room_id: str, note: str = None) -> Room:
        room = await self.get_room(outlet_id, room_id)
        room.status = "maintenance"
        room.maintenance_note = note
        await self.db.commit()
        logger.info("Room %s put under maintenance", room.room_number)
        return await self.get_room(outlet_id, room_id, populate_existing=True)

    async def mark_ready(self, outlet_id: str, room_id: str) -> Room:
        room = await self.get_room(outlet_id, room_id)
        room.status = "available"
        room.maintenance_note = None
        await self.db.commit()
        return await self.get_room(outlet_id, room_id, populate_existing=True)

    async def availability_board(self, outlet_id: str, check_in: date, check_out: date,
                                 category_id: str = None, capacities=None, sort: str = None) -> dict:
        """Rooms split into free and taken for the given dates, with their computed status."""
        rooms = await self.list_rooms(outlet_id, category_id, capacities, sort)
        bookings = await self._room_bookings([room.id for room in rooms])

        board = {"check_in": check_in, "check_out": check_out, "available": [], "unavailable": []}
        for room in rooms:
            status = computed_status(room, bookings, check_in, check_out)
            current = active_booking(room.id, bookings)
            entry = {
                "room": room,
                "computed_status": status,
                "active_booking_id": current.id if current is not None else None,
            }
            board["available" if status == "available" else "unavailable"].append(entry)
        return board

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def _room_bookings(self, room_ids):
        if not room_ids:
            return []
        query = select(Booking).where(Booking.room_id.in_(room_ids)).order_by(Booking.check_in)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def _selected_rooms(self, outlet_id: str, room_ids):
        return [await self.get_room(outlet_id, room_id) for room_id in room_ids]

    async def _lock_rooms(self, outlet_id: str, room_ids):
        """Selected rooms, row-locked until the transaction ends, in request order."""
        result = await self.db.execute(locked_rooms_query(outlet_id, room_ids))
        rooms = {room.id: room for room in result.scalars().all()}
        if len(rooms) != len(set(room_ids)):
            raise RoomNotFoundException()
        return [rooms[room_id] for room_id in room_ids]

    async def estimate(self, outlet_id: str, data: SStayEstimateRequest):
        rooms = await self._selected_rooms(outlet_id, data.room_ids)
        return estimate_stay(rooms, data.check_in, data.check_out, data.advance_payment)

    async def create_bookings(self, outlet_id: str, data: SBookingCreate, today: date = None):
        """
        Create one booking per selected room in a single transaction.

        Every room must be free for the whole stay; otherwise nothing is written.
        """
        today = today or date.today()
        rooms = await self._lock_rooms(outlet_id, data.room_ids)
        existing = await self._room_bookings(data.room_ids)

        taken = [
            room.room_number for room in rooms
            if not is_room_available(room, existing, data.check_in, data.check_out)
        ]
        if taken:
            raise RoomUnavailableException(
                f"Rooms not available for the requested dates: {', '.join(taken)}"
            )

        rooms_by_id = {room.id: room for room in rooms}
        bookings = []
        for draft in build_bookings(rooms, data, today):
            booking = Booking(
                outlet_id=outlet_id,
                room_id=draft.room_id,
                guest_name=draft.guest_name,
                phone=draft.phone,
                id_proof=draft.id_proof,
                guest_count=draft.guest_count,
                check_in=draft.check_in,
                check_out=draft.check_out,
                status=draft.status,
                total_price=draft.total_price,
                advance_payment=draft.advance_payment,
                folio_charges=[],
            )
            if draft.occupies_room:
                rooms_by_id[draft.room_id].status = "occupied"
            self.db.add(booking)
            bookings.append(booking)

        await self.db.flush()
        for booking in bookings:
            record_event(self.db, "booking_created", booking_payload(booking))
        await self.db.commit()

        logger.info(
            "Created %d booking(s) for %s at outlet %s",
            len(bookings), data.guest_name, outlet_id,
        )
        return [await self.get_booking(outlet_id, booking.id, populate_existing=True) for booking in bookings]

    async def list_bookings(self, outlet_id: str, status: str = None):
        query = select(Booking).where(Booking.outlet_id == outlet_id)
        if status:
            query = query.where(Booking.status == status)
        query = query.order_by(Booking.check_in, Booking.created_at)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_booking(self, outlet_id: str, booking_id: str, populate_existing: bool = False,
                          for_update: bool = False) -> Booking:
        query = select(Booking).where(Booking.outlet_id == outlet_id, Booking.id == booking_id)
        if for_update:
            query = query.with_for_update()
        if populate_existing or for_update:
            query = query.execution_options(populate_existing=True)
        booking = (await self.db.execute(query)).scalar_one_or_none()
        if booking is None:
            raise BookingNotFoundException()
        return booking

    async def _get_active_booking(self, outlet_id: str, booking_id: str) -> Booking:
        booking = await self.get_booking(outlet_id, booking_id, for_update=True)
        if booking.status not in ACTIVE_BOOKING_STATUSES:
            raise BookingNotActiveException()
        return booking

    def folio(self, booking: Booking) -> dict:
        balance = calculate_total_bill(booking)
        return {
            "booking_id": booking.id,
            "status": booking.status,
            "room_rent": booking.total_price,
            "charges": booking.folio_charges,
            "charges_total": charges_total(booking.folio_charges),
            "advance_payment": booking.advance_payment,
            "total_due": balance,
            "amount_payable": amount_payable(balance),
        }

    async def add_charge(self, outlet_id: str, booking_id: str, data: SFolioChargeCreate) -> Booking:
        booking = await self._get_active_booking(outlet_id, booking_id)
        charge = FolioCharge(
            type=data.type,
            item=data.item,
            quantity=data.quantity,
            price=data.price,
            is_express=data.is_express,
            total=charge_total(data.quantity, data.price, data.is_express),
        )
        booking.folio_charges.append(charge)
        await self.db.commit()
        return await self.get_booking(outlet_id, booking_id, populate_existing=True)

    async def extend_stay(self, outlet_id: str, booking_id: str, new_check_out: date) -> Booking:
        booking = await self._get_active_booking(outlet_id, booking_id)
        if new_check_out <= booking.check_out:
            raise InvalidStayExtensionException()

        room = await self.get_room(outlet_id, booking.room_id, for_update=True)
        others = await self._room_bookings([room.id])
        if not is_room_available(room, others, booking.check_in, new_check_out, exclude_booking_id=booking.id):
            raise RoomUnavailableException()

        booking.check_out = new_check_out
        booking.total_price = stay_price(room.price, booking.check_in, new_check_out)
        record_event(self.db, "booking_extended", booking_payload(booking))
        await self.db.commit()

        logger.info("Booking %s extended to %s", booking.id, new_check_out.isoformat())
        return await self.get_booking(outlet_id, booking_id, populate_existing=True)

    async def check_in(self, outlet_id: str, booking_id: str) -> Booking:
        booking = await self.get_booking(outlet_id, booking_id, for_update=True)
        if booking.status != "confirmed":
            raise BookingNotActiveException("Only confirmed bookings can be checked in.")

        room = await self.get_room(outlet_id, booking.room_id, for_update=True)
        booking.status = "checked-in"
        room.status = "occupied"
        await self.db.commit()
        return await self.get_booking(outlet_id, booking_id, populate_existing=True)

    async def checkout(self, outlet_id: str, booking_id: str, data: SCheckout) -> Booking:
        booking = await self._get_active_booking(outlet_id, booking_id)
        room = await self.get_room(outlet_id, booking.room_id, for_update=True)

        booking.status = "completed"
        room.status = data.room_status
        room.maintenance_note = data.maintenance_note if data.room_status == "maintenance" else None

        payload = booking_payload(booking)
        payload["total_due"] = calculate_total_bill(booking)
        record_event(self.db, "booking_completed", payload)
        await self.db.commit()

        logger.info("Booking %s checked out, room %s set to %s", booking.id, room.room_number, room.status)
        return await self.get_booking(outlet_id, booking_id, populate_existing=True)

    async def cancel(self, outlet_id: str, booking_id: str) -> Booking:
        booking = await self.get_booking(outlet_id, booking_id, for_update=True)
        if booking.status in RELEASED_BOOKING_STATUSES:
            raise BookingNotActiveException("Booking is already closed.")

        if booking.status == "checked-in":
            room = await self.get_room(outlet_id, booking.room_id, for_update=True)
            room.status = "available"

        booking.status = "cancelled"
        record_event(self.db, "booking_cancelled", booking_payload(booking))
        await self.db.commit()

        logger.info("Booking %s cancelled", booking.id)
        return await self.get_booking(outlet_id, booking_id, populate_existing=True)


async def get_hotel_repository(db: AsyncSession = Depends(get_async_session)):
    return HotelRepository(db)
