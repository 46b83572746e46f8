import asyncio
import logging
import os

import uvicorn
from fastapi import FastAPI

from outlet_admin.auth.router import router as auth_router
from outlet_admin.hotels.router import router as hotel_router
from outlet_admin.outbox.publisher import RABBITMQ_URL, publish_outbox_events
from outlet_admin.restaurants.router import router as restaurant_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Outlet Admin Service",
    description="Back office for hotel, restaurant and travel outlets.",
    version="1.0.0",
)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "outlet-admin"}


@app.on_event("startup")
async def startup_event():
    if RABBITMQ_URL:
        app.state.outbox_task = asyncio.create_task(publish_outbox_events(RABBITMQ_URL))
        logger.info("Outbox publisher started")
    else:
        app.state.outbox_task = None
        logger.info("RABBITMQ_URL not set, outbox events stay in the database")


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "outbox_task", None)
    if task is not None:
        task.cancel()


app.include_router(auth_router, tags=["Auth"], prefix="/api")
app.include_router(hotel_router, tags=["Hotels"], prefix="/api/v1")
app.include_router(restaurant_router, tags=["Restaurants"], prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run("outlet_admin.main:app", reload=True)
