"""
Medical specialty reference data.

Sources: Medscape 2024, Doximity 2024. Update annually.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SpecialtyData:
    """Salary and training profile for one specialty."""

    name: str
    median_attending_salary: float
    salary_p25: float
    salary_p75: float
    typical_training_years: int
    pslf_prevalence: float       # share working at PSLF-eligible employers


FALLBACK_SPECIALTY = "other"

SPECIALTIES = {
    # ── Primary Care ─────────────────────────────────────────────
    "family_medicine": SpecialtyData("Family Medicine", 255_000, 210_000, 300_000, 3, 0.45),
    "internal_medicine": SpecialtyData("Internal Medicine (General)", 275_000, 230_000, 330_000, 3, 0.40),
    "pediatrics": SpecialtyData("Pediatrics (General)", 245_000, 200_000, 290_000, 3, 0.55),
    "med_peds": SpecialtyData("Med-Peds", 260_000, 215_000, 310_000, 4, 0.45),

    # ── Internal Medicine Subspecialties ─────────────────────────
    "cardiology": SpecialtyData("Cardiology", 510_000, 400_000, 650_000, 6, 0.30),
    "gastroenterology": SpecialtyData("Gastroenterology", 495_000, 380_000, 600_000, 6, 0.25),
    "pulm_crit": SpecialtyData("Pulmonology/Critical Care", 400_000, 320_000, 480_000, 6, 0.40),
    "nephrology": SpecialtyData("Nephrology", 310_000, 260_000, 370_000, 5, 0.40),
    "endocrinology": SpecialtyData("Endocrinology", 270_000, 220_000, 320_000, 5, 0.45),
    "rheumatology": SpecialtyData("Rheumatology", 290_000, 240_000, 350_000, 5, 0.40),
    "infectious_disease": SpecialtyData("Infectious Disease", 265_000, 220_000, 315_000, 5, 0.50),
    "hematology_oncology": SpecialtyData("Hematology/Oncology", 440_000, 350_000, 550_000, 6, 0.35),

    # ── Hospital Medicine ────────────────────────────────────────
    "hospitalist": SpecialtyData("Hospitalist", 310_000, 260_000, 365_000, 3, 0.45),

    # ── Surgery ──────────────────────────────────────────────────
    "general_surgery": SpecialtyData("General Surgery", 420_000, 340_000, 520_000, 5, 0.25),
    "orthopedic_surgery": SpecialtyData("Orthopedic Surgery", 560_000, 450_000, 750_000, 5, 0.15),
    "neurosurgery": SpecialtyData("Neurosurgery", 650_000, 500_000, 850_000, 7, 0.20),
    "plastic_surgery": SpecialtyData("Plastic Surgery", 520_000, 380_000, 700_000, 6, 0.10),
    "cardiothoracic_surgery": SpecialtyData("Cardiothoracic Surgery", 600_000, 480_000, 780_000, 7, 0.25),
    "vascular_surgery": SpecialtyData("Vascular Surgery", 500_000, 400_000, 620_000, 6, 0.25),
    "urology": SpecialtyData("Urology", 480_000, 380_000, 600_000, 5, 0.20),
    "colorectal_surgery": SpecialtyData("Colorectal Surgery", 420_000, 340_000, 520_000, 6, 0.25),

    # ── Other Specialties ────────────────────────────────────────
    "anesthesiology": SpecialtyData("Anesthesiology", 430_000, 350_000, 520_000, 4, 0.25),
    "radiology": SpecialtyData("Radiology", 470_000, 380_000, 570_000, 5, 0.30),
    "radiation_oncology": SpecialtyData("Radiation Oncology", 480_000, 380_000, 580_000, 5, 0.35),
    "emergency_medicine": SpecialtyData("Emergency Medicine", 350_000, 290_000, 420_000, 3, 0.40),
    "psychiatry": SpecialtyData("Psychiatry", 280_000, 230_000, 340_000, 4, 0.50),
    "neurology": SpecialtyData("Neurology", 315_000, 260_000, 380_000, 4, 0.40),
    "dermatology": SpecialtyData("Dermatology", 450_000, 350_000, 600_000, 4, 0.15),
    "ophthalmology": SpecialtyData("Ophthalmology", 400_000, 300_000, 550_000, 4, 0.15),
    "pathology": SpecialtyData("Pathology", 320_000, 260_000, 390_000, 4, 0.40),
    "physical_medicine": SpecialtyData("Physical Medicine & Rehabilitation", 290_000, 240_000, 350_000, 4, 0.35),
    "ob_gyn": SpecialtyData("Obstetrics & Gynecology", 340_000, 275_000, 420_000, 4, 0.35),
    "otolaryngology": SpecialtyData("Otolaryngology (ENT)", 420_000, 330_000, 530_000, 5, 0.20),

    # ── Custom / Other ───────────────────────────────────────────
    FALLBACK_SPECIALTY: SpecialtyData("Other Specialty", 320_000, 250_000, 400_000, 4, 0.35),
}


def get_specialty(key: str) -> SpecialtyData:
    """Look up a specialty, falling back to the generic ``other`` record."""
    return SPECIALTIES.get(key, SPECIALTIES[FALLBACK_SPECIALTY])


def all_specialty_keys() -> List[str]:
    return list(SPECIALTIES)
