"""
SQLAlchemy models for the five persisted collections.

Each table carries an autoincrement ``seq`` surrogate key, used to list rows
in insertion order, and the domain's UUID ``id`` as a unique natural key that
foreign keys point at.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from .session import Base


class DoctorModel(Base):
    """Doctor registration record."""

    __tablename__ = "doctors"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    specialty: Mapped[str] = mapped_column(String(100), nullable=False)
    pesel_number: Mapped[Optional[str]] = mapped_column(String(11), nullable=True)
    pwz_number: Mapped[Optional[str]] = mapped_column(String(7), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<DoctorModel(id={self.id}, name='{self.name}')>"


class PatientModel(Base):
    """Patient registration record."""

    __tablename__ = "patients"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    pesel_number: Mapped[Optional[str]] = mapped_column(String(11), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<PatientModel(id={self.id}, name='{self.name}')>"


class PharmacistModel(Base):
    """Pharmacist registration record."""

    __tablename__ = "pharmacists"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    pharmacy: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<PharmacistModel(id={self.id}, name='{self.name}')>"


class DrugModel(Base):
    """Drug catalogue record."""

    __tablename__ = "drugs"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    dosage: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<DrugModel(id={self.id}, name='{self.name}')>"


class PrescriptionModel(Base):
    """Prescription record with foreign keys to the other four tables."""

    __tablename__ = "prescriptions"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_prescriptions_quantity_positive"),
        CheckConstraint(
            "(status = 'pending' AND filled_at IS NULL AND pharmacist_id IS NULL)"
            " OR (status = 'filled' AND filled_at IS NOT NULL AND pharmacist_id IS NOT NULL)",
            name="ck_prescriptions_fill_consistency",
        ),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, index=True)
    doctor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("doctors.id"), nullable=False, index=True
    )
    patient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("patients.id"), nullable=False, index=True
    )
    drug_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("drugs.id"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    filled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    pharmacist_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("pharmacists.id"), nullable=True
    )

    def __repr__(self):
        return f"<PrescriptionModel(id={self.id}, status='{self.status}')>"
