# backend/app/db.py
from sqlalchemy import create_engine, Column, Integer, String, Float, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
import datetime
import os

DATABASE_URL = os.getenv("VETDOSE_DATABASE_URL", "sqlite:///./vetdose.db")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class Medication(Base):
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    generic_name = Column(String)
    species = Column(String, nullable=False, default="both")  # dog | cat | both
    category = Column(String, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    # insertion order is the lookup order for the dosage resolver
    guidelines = relationship(
        "DosageGuideline",
        back_populates="medication",
        order_by="DosageGuideline.id",
        cascade="all, delete-orphan",
    )


class DosageGuideline(Base):
    __tablename__ = "dosage_guidelines"

    id = Column(Integer, primary_key=True, index=True)
    medication_id = Column(Integer, ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)
    min_weight_kg = Column(Float, nullable=False)
    max_weight_kg = Column(Float, nullable=False)
    dosage_mg_per_kg = Column(Float, nullable=False)
    frequency_per_day = Column(Integer, nullable=False)
    duration_days = Column(Integer)
    notes = Column(Text)
    created_at = Column(DateTime, default=_utcnow)

    medication = relationship("Medication", back_populates="guidelines")


class UserFavorite(Base):
    __tablename__ = "user_favorites"
    __table_args__ = (UniqueConstraint("user_id", "medication_id", name="uq_user_favorite"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    medication_id = Column(Integer, ForeignKey("medications.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=_utcnow)


Base.metadata.create_all(bind=engine)
