import asyncio

from outlet_admin.seed import HOTEL_OUTLET, seed_demo_data


def test_seed_is_loaded_once(session_factory, client):
    async def run():
        async with session_factory() as session:
            return await seed_demo_data(session), await seed_demo_data(session)

    assert asyncio.run(run()) == (True, False)

    rooms = client.get(f"/api/v1/outlets/{HOTEL_OUTLET}/rooms").json()
    assert len(rooms) == 5
    bookings = client.get(f"/api/v1/outlets/{HOTEL_OUTLET}/bookings").json()
    assert [b["status"] for b in bookings] == ["checked-in"]
    assert len(client.get("/api/v1/outlets/r1/menu-items").json()) == 4
    assert len(client.get("/api/v1/outlets/r1/menu-categories").json()) == 3
