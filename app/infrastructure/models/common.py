"""Column defaults shared by the ORM models."""

from datetime import datetime
from uuid import uuid4

from app.utils import to_storage_datetime, utc_now


def generate_id() -> str:
    """Return a new opaque identifier."""

    return str(uuid4())


def storage_now() -> datetime | None:
    """Return the current time in the representation stored by the database."""

    return to_storage_datetime(utc_now())
