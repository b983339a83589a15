"""Appointments table model using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    Uuid,
    func,
    text,
)

from app.models.metadata import metadata

# Appointments table
appointments = Table(
    "appointments",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    # Ownership / references
    Column(
        "doctor_id",
        Uuid(as_uuid=True),
        ForeignKey("doctors.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "patient_id",
        Uuid(as_uuid=True),
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    # Appointment details
    Column("date", Date, nullable=False),
    Column("time_slot", String(50), nullable=False),
    Column("reason", Text, nullable=False),
    # Snapshot of the doctor's specialization at booking time
    Column("specialty", String(200)),
    # Status management
    Column("status", String(20), nullable=False, server_default=text("'Waiting'")),
    # Audit fields
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    # Constraints
    CheckConstraint(
        "status IN ('Waiting', 'Booked', 'Completed', 'Cancelled')",
        name="appointments_status_check",
    ),
    Index("idx_appointments_doctor", "doctor_id"),
    Index("idx_appointments_patient_date", "patient_id", "date", "time_slot"),
)
