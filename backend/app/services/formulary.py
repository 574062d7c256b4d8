# app/services/formulary.py
import logging
from app.schemas import MedicationCreate
from app.services import catalog

log = logging.getLogger("formulary")

# Starter catalog loaded into an empty database. Guidelines are listed in
# ascending weight order because lookup is first-match.
STARTER_FORMULARY = [
    {
        "name": "Rimadyl",
        "generic_name": "Carprofen",
        "species": "dog",
        "category": "NSAID",
        "description": "Non-steroidal anti-inflammatory for pain and inflammation in dogs.",
        "guidelines": [
            {"min_weight_kg": 1, "max_weight_kg": 80, "dosage_mg_per_kg": 4.4,
             "frequency_per_day": 1, "duration_days": 14,
             "notes": "Give with food. Alternatively 2.2 mg/kg twice daily."},
        ],
    },
    {
        "name": "Metacam",
        "generic_name": "Meloxicam",
        "species": "dog",
        "category": "NSAID",
        "description": "Oral suspension for osteoarthritis pain.",
        "guidelines": [
            {"min_weight_kg": 1, "max_weight_kg": 60, "dosage_mg_per_kg": 0.1,
             "frequency_per_day": 1, "duration_days": None,
             "notes": "Maintenance dose after a 0.2 mg/kg loading dose on day one."},
        ],
    },
    {
        "name": "Clavamox",
        "generic_name": "Amoxicillin / Clavulanate",
        "species": "both",
        "category": "Antibiotic",
        "description": "Broad-spectrum antibiotic for skin and soft tissue infections.",
        "guidelines": [
            {"min_weight_kg": 0.5, "max_weight_kg": 100, "dosage_mg_per_kg": 13.75,
             "frequency_per_day": 2, "duration_days": 7,
             "notes": "Continue 48 hours after symptoms resolve."},
        ],
    },
    {
        "name": "Onsior",
        "generic_name": "Robenacoxib",
        "species": "cat",
        "category": "NSAID",
        "description": "Short-term pain relief in cats.",
        "guidelines": [
            {"min_weight_kg": 2.5, "max_weight_kg": 12, "dosage_mg_per_kg": 1,
             "frequency_per_day": 1, "duration_days": 3,
             "notes": "Not for cats under 2.5 kg."},
        ],
    },
    {
        "name": "Neurontin",
        "generic_name": "Gabapentin",
        "species": "both",
        "category": "Analgesic",
        "description": "Adjunct for chronic and neuropathic pain.",
        "guidelines": [
            {"min_weight_kg": 1, "max_weight_kg": 10, "dosage_mg_per_kg": 10,
             "frequency_per_day": 2, "duration_days": None, "notes": None},
            {"min_weight_kg": 10, "max_weight_kg": 70, "dosage_mg_per_kg": 10,
             "frequency_per_day": 3, "duration_days": None,
             "notes": "Taper when discontinuing."},
        ],
    },
]


def seed_catalog(db):
    """Insert the starter formulary when the catalog is empty. Returns the number added."""
    if catalog.list_medications(db):
        return 0
    for entry in STARTER_FORMULARY:
        catalog.add_medication(db, MedicationCreate(**entry))
    log.info("Seeded %d starter medications", len(STARTER_FORMULARY))
    return len(STARTER_FORMULARY)
