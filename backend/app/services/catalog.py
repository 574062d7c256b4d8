# backend/app/services/catalog.py
import logging
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from app.db import DosageGuideline, Medication
from app.schemas import MedicationCreate

log = logging.getLogger("catalog")


def _blank_to_none(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


def list_medications(db: Session, species: Optional[str] = None) -> List[Medication]:
    """
    Medications with their guidelines, ordered by name.
    For "dog" or "cat" only that species and "both" are returned.
    """
    q = db.query(Medication).options(selectinload(Medication.guidelines))
    if species and species != "both":
        q = q.filter(or_(Medication.species == species, Medication.species == "both"))
    return q.order_by(Medication.name).all()


def get_medication(db: Session, medication_id: int) -> Optional[Medication]:
    return (
        db.query(Medication)
        .options(selectinload(Medication.guidelines))
        .filter(Medication.id == medication_id)
        .first()
    )


def add_medication(db: Session, payload: MedicationCreate) -> Medication:
    """Insert a medication and its guidelines in one transaction, keeping guideline order."""
    med = Medication(
        name=payload.name.strip(),
        generic_name=_blank_to_none(payload.generic_name),
        species=payload.species,
        category=payload.category.strip(),
        description=_blank_to_none(payload.description),
    )
    for g in payload.guidelines:
        med.guidelines.append(DosageGuideline(
            min_weight_kg=g.min_weight_kg,
            max_weight_kg=g.max_weight_kg,
            dosage_mg_per_kg=g.dosage_mg_per_kg,
            frequency_per_day=g.frequency_per_day,
            duration_days=g.duration_days or None,
            notes=_blank_to_none(g.notes),
        ))
    try:
        db.add(med)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(med)
    log.info("Added medication %s (%d guidelines)", med.name, len(med.guidelines))
    return med
