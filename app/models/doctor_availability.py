"""Doctor availability slots using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Uuid,
    func,
    text,
)

from app.models.metadata import metadata

# No uniqueness on (doctor_id, date, time_slot): duplicate slots are accepted
doctor_availability = Table(
    "doctor_availability",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    Column(
        "doctor_id",
        Uuid(as_uuid=True),
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("date", Date, nullable=False),
    Column("time_slot", String(50), nullable=False),
    Column("is_available", Boolean, nullable=False, server_default=text("true")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Index("idx_doctor_availability_doctor_date", "doctor_id", "date", "time_slot"),
)
