# backend/app/services/dosage.py
import logging
from typing import Iterable, Optional
from app.schemas import CalculationResult, DosageGuideline, DosagePlan, MedicationWithDosage
from app.services.normalize import normalize_weight_unit, parse_magnitude

log = logging.getLogger("dosage")

KG_PER_LB = 0.453592

NO_MATCH_MESSAGE = (
    "No dosage guideline found for this weight range. "
    "Please consult veterinary guidelines or add appropriate dosage information."
)


class InvalidWeight(ValueError):
    """Weight magnitude or unit cannot be used for dosage arithmetic."""


def convert_weight(magnitude, unit="kg") -> float:
    """
    Convert a weight to kilograms.
    kg is returned unchanged, lbs is multiplied by 0.453592.
    Raises InvalidWeight for non-numeric, non-finite or negative magnitudes
    and for units other than kg/lbs.
    """
    canonical = normalize_weight_unit(unit)
    if canonical is None:
        raise InvalidWeight(f"Unsupported weight unit: {unit!r}")
    value = parse_magnitude(magnitude)
    if value is None:
        raise InvalidWeight(f"Weight must be a number, got {magnitude!r}")
    if value < 0:
        raise InvalidWeight(f"Weight cannot be negative: {value}")
    if canonical == "lbs":
        return value * KG_PER_LB
    return value


def find_guideline(guidelines: Iterable[DosageGuideline], weight_kg: float) -> Optional[DosageGuideline]:
    # first match wins when bands overlap
    for g in guidelines:
        if g.min_weight_kg <= weight_kg <= g.max_weight_kg:
            return g
    return None


def compute_plan(medication, weight, unit="kg") -> CalculationResult:
    """
    Resolve the dosage plan for one medication and weight.

    `medication` is a MedicationWithDosage or a mapping of the same shape.
    Never raises for bad weights or uncovered bands; those come back as
    status "invalid_weight" / "no_match". The dose is not rounded.
    """
    if not isinstance(medication, MedicationWithDosage):
        medication = MedicationWithDosage.model_validate(medication)

    try:
        weight_kg = convert_weight(weight, unit)
    except InvalidWeight as e:
        return CalculationResult(status="invalid_weight", message=str(e))

    guideline = find_guideline(medication.guidelines, weight_kg)
    if guideline is None:
        log.debug("No guideline for %s at %.3f kg", medication.name, weight_kg)
        return CalculationResult(status="no_match", weight_kg=weight_kg, message=NO_MATCH_MESSAGE)

    plan = DosagePlan(
        total_dose_mg=weight_kg * guideline.dosage_mg_per_kg,
        frequency_per_day=guideline.frequency_per_day,
        duration_days=guideline.duration_days,
        notes=guideline.notes,
    )
    return CalculationResult(status="ok", weight_kg=weight_kg, plan=plan)
