# backend/app/services/favorites.py
import logging
from typing import List
from sqlalchemy.orm import Session
from app.db import Medication, UserFavorite

log = logging.getLogger("favorites")


def list_favorites(db: Session, user_id: str) -> List[int]:
    rows = (
        db.query(UserFavorite.medication_id)
        .filter(UserFavorite.user_id == user_id)
        .order_by(UserFavorite.created_at, UserFavorite.id)
        .all()
    )
    return [r.medication_id for r in rows]


def toggle_favorite(db: Session, user_id: str, medication_id: int) -> bool:
    """
    Add the medication to the user's favorites, or remove it if already there.
    Returns True when it is a favorite afterwards.
    """
    if db.get(Medication, medication_id) is None:
        raise LookupError(f"Medication {medication_id} not found")

    existing = (
        db.query(UserFavorite)
        .filter(UserFavorite.user_id == user_id, UserFavorite.medication_id == medication_id)
        .first()
    )
    try:
        if existing:
            db.delete(existing)
            favorite = False
        else:
            db.add(UserFavorite(user_id=user_id, medication_id=medication_id))
            favorite = True
        db.commit()
    except Exception:
        db.rollback()
        raise
    log.info("User %s %s favorite %s", user_id, "added" if favorite else "removed", medication_id)
    return favorite
