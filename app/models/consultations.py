"""Consultation records using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
    func,
)

from app.models.metadata import metadata

consultations = Table(
    "consultations",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    # One consultation per appointment
    Column(
        "appointment_id",
        Uuid(as_uuid=True),
        ForeignKey("appointments.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    ),
    # Denormalized for history queries
    Column("doctor_id", Uuid(as_uuid=True), ForeignKey("doctors.id"), nullable=False),
    Column("patient_id", Uuid(as_uuid=True), ForeignKey("patients.id"), nullable=False),
    Column("date", Date, nullable=False),
    # Clinical fields
    Column("symptoms", Text, nullable=False),
    Column("blood_pressure", String(20)),
    Column("height", Integer),
    Column("weight", Integer),
    Column("description", Text, nullable=False),
    Column("notes", Text),
    Column("status", String(20), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint(
        "status IN ('Ongoing', 'Completed', 'FollowUp')",
        name="consultations_status_check",
    ),
    Index("idx_consultations_patient_date", "patient_id", "date"),
)
