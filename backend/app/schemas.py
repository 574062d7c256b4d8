# backend/app/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, List, Literal, Optional

Species = Literal["dog", "cat", "both"]
WeightUnit = Literal["kg", "lbs"]


class DosageGuidelineBase(BaseModel):
    min_weight_kg: float
    max_weight_kg: float
    dosage_mg_per_kg: float
    frequency_per_day: int
    duration_days: Optional[int] = None
    notes: Optional[str] = None


class DosageGuidelineCreate(DosageGuidelineBase):
    min_weight_kg: float = Field(..., ge=0.1, allow_inf_nan=False)
    max_weight_kg: float = Field(..., ge=0.1, allow_inf_nan=False)
    dosage_mg_per_kg: float = Field(..., ge=0.001, allow_inf_nan=False)
    frequency_per_day: int = Field(..., ge=1)
    duration_days: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def check_weight_band(self):
        if self.max_weight_kg < self.min_weight_kg:
            raise ValueError("Maximum weight must be greater than or equal to minimum weight")
        return self


class DosageGuideline(DosageGuidelineBase):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    medication_id: Optional[int] = None
    created_at: Optional[datetime] = None


class MedicationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    generic_name: Optional[str] = None
    species: Species = "both"
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    guidelines: List[DosageGuidelineCreate] = Field(..., min_length=1)


class MedicationWithDosage(BaseModel):
    """A catalog entry together with its ordered dosage guidelines."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    generic_name: Optional[str] = None
    species: Species = "both"
    category: Optional[str] = None
    description: Optional[str] = None
    guidelines: List[DosageGuideline] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DosagePlan(BaseModel):
    total_dose_mg: float
    frequency_per_day: int
    duration_days: Optional[int] = None
    notes: Optional[str] = None


class CalculationResult(BaseModel):
    status: Literal["ok", "no_match", "invalid_weight"]
    weight_kg: Optional[float] = None
    plan: Optional[DosagePlan] = None
    message: Optional[str] = None


class CalculationRequest(BaseModel):
    medication_id: int
    # left untyped so bools, nulls and unparseable strings reach the resolver as invalid_weight
    weight: Any
    unit: str = "kg"


class FavoritesResponse(BaseModel):
    user_id: str
    medication_ids: List[int] = []


class FavoriteToggleResponse(BaseModel):
    medication_id: int
    favorite: bool
