# backend/app/main.py
import logging
import os
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from app.services import catalog, dosage, favorites, formulary
from app.schemas import (
    CalculationRequest,
    CalculationResult,
    FavoritesResponse,
    FavoriteToggleResponse,
    MedicationCreate,
    MedicationWithDosage,
    Species,
)
from typing import List, Optional
from app.db import SessionLocal

log = logging.getLogger("uvicorn.error")

SEED_CATALOG = os.getenv("VETDOSE_SEED_CATALOG", "1") == "1"

app = FastAPI(title="Vet Dosage API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def load_starter_formulary():
    if not SEED_CATALOG:
        return
    db = SessionLocal()
    try:
        formulary.seed_catalog(db)
    except Exception as e:
        log.error("Failed to seed starter formulary: %s", e)
    finally:
        db.close()


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/medications", response_model=List[MedicationWithDosage])
def route_list_medications(species: Optional[Species] = None):
    db = SessionLocal()
    try:
        meds = catalog.list_medications(db, species)
        return [MedicationWithDosage.model_validate(m) for m in meds]
    finally:
        db.close()


@app.get("/medications/{medication_id}", response_model=MedicationWithDosage)
def route_get_medication(medication_id: int):
    db = SessionLocal()
    try:
        med = catalog.get_medication(db, medication_id)
        if med is None:
            raise HTTPException(status_code=404, detail="Medication not found")
        return MedicationWithDosage.model_validate(med)
    finally:
        db.close()


@app.post("/medications", response_model=MedicationWithDosage, status_code=201)
def route_add_medication(payload: MedicationCreate):
    db = SessionLocal()
    try:
        med = catalog.add_medication(db, payload)
        return MedicationWithDosage.model_validate(med)
    except Exception as e:
        log.error("Error adding medication: %s", e)
        raise HTTPException(status_code=500, detail=f"Error adding medication: {e}")
    finally:
        db.close()


@app.post("/calculate", response_model=CalculationResult)
def route_calculate(req: CalculationRequest):
    """
    payload example:
    {"medication_id": 1, "weight": 11, "unit": "lbs"}

    no_match and invalid_weight are normal results, not errors.
    """
    db = SessionLocal()
    try:
        med = catalog.get_medication(db, req.medication_id)
        if med is None:
            raise HTTPException(status_code=404, detail="Medication not found")
        medication = MedicationWithDosage.model_validate(med)
    finally:
        db.close()

    return dosage.compute_plan(medication, req.weight, req.unit)


@app.get("/favorites/{user_id}", response_model=FavoritesResponse)
def route_list_favorites(user_id: str):
    db = SessionLocal()
    try:
        return FavoritesResponse(user_id=user_id, medication_ids=favorites.list_favorites(db, user_id))
    finally:
        db.close()


@app.post("/favorites/{user_id}/{medication_id}", response_model=FavoriteToggleResponse)
def route_toggle_favorite(user_id: str, medication_id: int):
    db = SessionLocal()
    try:
        state = favorites.toggle_favorite(db, user_id, medication_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Medication not found")
    except Exception as e:
        log.error("Error toggling favorite: %s", e)
        raise HTTPException(status_code=500, detail=f"Error toggling favorite: {e}")
    finally:
        db.close()
    return FavoriteToggleResponse(medication_id=medication_id, favorite=state)
