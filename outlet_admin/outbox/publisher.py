import asyncio
import json
import logging
import os

import aio_pika
from sqlalchemy import select

from outlet_admin.database import AsyncSessionLocal
from outlet_admin.outbox.models import OutboxEvent

logger = logging.getLogger(__name__)

RABBITMQ_URL = os.getenv("RABBITMQ_URL")
OUTBOX_POLL_SECONDS = int(os.getenv("OUTBOX_POLL_SECONDS", "5"))
QUEUE_NAME = "outlet_events"


def record_event(session, event_type: str, payload: dict) -> OutboxEvent:
    """Queue an event in the caller's transaction; it is published after commit."""
    event = OutboxEvent(event_type=event_type, payload=payload)
    session.add(event)
    return event


async def publish_outbox_events(rabbitmq_url: str = None, poll_interval: int = OUTBOX_POLL_SECONDS):
    """Background worker that drains pending outbox rows into RabbitMQ."""
    rabbitmq_url = rabbitmq_url or RABBITMQ_URL
    query = (
        select(OutboxEvent)
        .where(OutboxEvent.status == "PENDING")
        .order_by(OutboxEvent.id)
        .limit(10)
        .with_for_update(skip_locked=True)
    )
    while True:
        async with AsyncSessionLocal() as session:
            try:
                result = await session.execute(query)
                events = result.scalars().all()

                if not events:
                    await asyncio.sleep(poll_interval)
                    continue

                connection = await aio_pika.connect_robust(rabbitmq_url)
                async with connection:
                    channel = await connection.channel()
                    await channel.declare_queue(QUEUE_NAME, durable=True)

                    for event in events:
                        message_body = json.dumps({
                            "event_type": event.event_type,
                            "payload": event.payload
                        }).encode()

                        await channel.default_exchange.publish(
                            aio_pika.Message(
                                body=message_body,
                                delivery_mode=aio_pika.DeliveryMode.PERSISTENT
                            ),
                            routing_key=QUEUE_NAME,
                        )
                        event.status = "PROCESSED"

                    await session.commit()
                    logger.info("Published %d outbox events", len(events))

            except Exception:
                logger.exception("Error publishing outbox events")
                await session.rollback()
                await asyncio.sleep(poll_interval * 2)
