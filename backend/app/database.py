"""
StudyMate Backend — Document Store Connection Management
===========================================================

What:  motor (async MongoDB) client lifecycle, the per-request database
       dependency, and the shared store error-translation block.
Why:   Centralizes all connection logic in one place.
How:   The lifespan handler creates one AsyncIOMotorClient, pings it, and
       stores the client and database handle on app.state. Route handlers
       receive the database through FastAPI's Depends(get_database).
Who:   main.py (lifespan), route handlers (dependency), services (errors).
When:  Client is created at startup; the handle is injected per request.

Why app.state (not a module-level global):
    The handle is an explicit dependency of every route. Tests replace it
    with app.dependency_overrides[get_database] and never touch a real server.

Connection Pooling:
    motor/pymongo keep their own pool (maxPoolSize=100 by default). One
    client per process is shared by every request.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.config import settings
from app.exceptions import DatabaseError, StoreUnavailableError, StudyMateError

logger = logging.getLogger(__name__)


# ── Client Factory ────────────────────────────────────────────────────────
def create_client() -> AsyncIOMotorClient:
    """
    Build the async MongoDB client from settings.

    The driver connects lazily; nothing is sent over the network until the
    first command (see ping_store).
    """
    client = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        tz_aware=True,  # createdAt comes back as an aware UTC datetime
    )
    logger.info("MongoDB async client created (database=%s)", settings.mongo_db_name)
    return client


async def ping_store(client: AsyncIOMotorClient) -> None:
    """Send a ping to the admin database; raises ConnectionFailure when unreachable."""
    await client.admin.command("ping")


async def connect_to_store(client: AsyncIOMotorClient) -> bool:
    """
    Verify connectivity at startup with retry and backoff.

    What:    Pings the server up to retry_max_attempts times.
    Returns: True when the ping succeeds, False when every attempt failed.

    A failure here is logged, not raised. The server still starts and
    answers liveness probes; store-backed requests fail with 503 until
    MongoDB comes back.
    """
    try:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ConnectionFailure),
            stop=stop_after_attempt(settings.retry_max_attempts),
            wait=wait_exponential_jitter(
                initial=settings.retry_min_wait,
                max=settings.retry_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await ping_store(client)
    except PyMongoError as e:
        logger.error(
            "MongoDB connection failed after %d attempt(s): %s",
            settings.retry_max_attempts,
            str(e),
        )
        return False

    logger.info("Connected to MongoDB successfully!")
    return True


# ── Database Dependency ───────────────────────────────────────────────────
def get_database(request: Request) -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the shared database handle.

    Example usage in a route:
        @router.get("/partners")
        async def list_partners(db: AsyncIOMotorDatabase = Depends(get_database)):
            ...

    Raises:
        StoreUnavailableError: The lifespan never attached a database
            (client creation failed or the app runs without lifespan).
    """
    database: Optional[AsyncIOMotorDatabase] = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreUnavailableError(context={"reason": "database handle not initialized"})
    return database


# ── Error Translation ─────────────────────────────────────────────────────
@contextmanager
def store_operation(operation: str, **context) -> Iterator[None]:
    """
    Translate driver errors raised inside the block into application errors.

    Mapping:
        ConnectionFailure (incl. ServerSelectionTimeoutError) → StoreUnavailableError
        any other PyMongoError                                → DatabaseError
        StudyMateError                                        → re-raised unchanged

    Example:
        with store_operation("delete_partner", partner_id=partner_id):
            result = await collection.delete_one({"_id": oid})
    """
    try:
        yield
    except StudyMateError:
        raise
    except ConnectionFailure as e:
        logger.error("Store unreachable during %s: %s", operation, str(e))
        raise StoreUnavailableError(
            context={"operation": operation, "error_type": type(e).__name__, **context}
        ) from e
    except PyMongoError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context}
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
def close_client(client: Optional[AsyncIOMotorClient]) -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    if client is not None:
        client.close()
        logger.info("MongoDB client closed")
