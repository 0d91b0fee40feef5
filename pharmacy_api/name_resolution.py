"""
Drug name resolution.

Maps regionally known drug names (UK / Iraq trade and generic names) to the
names openFDA indexes, and proposes fallback suggestions when a search finds
nothing at all.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3

# Regional name -> US/FDA name. Names that are the same in both regions map
# to themselves so that a US name resolves to itself.
DRUG_NAME_TRANSLATIONS: Dict[str, str] = {
    # Pain relievers
    "paracetamol": "acetaminophen",
    "co-codamol": "acetaminophen with codeine",
    "cocodamol": "acetaminophen with codeine",
    "ibuprofen": "ibuprofen",
    "naproxen": "naproxen",
    "diclofenac": "diclofenac",
    # Antibiotics
    "amoxicillin": "amoxicillin",
    "penicillin": "penicillin",
    "erythromycin": "erythromycin",
    "clarithromycin": "clarithromycin",
    "doxycycline": "doxycycline",
    "metronidazole": "metronidazole",
    "ciprofloxacin": "ciprofloxacin",
    "trimethoprim": "trimethoprim",
    # Cardiovascular
    "atenolol": "atenolol",
    "bisoprolol": "bisoprolol",
    "ramipril": "ramipril",
    "lisinopril": "lisinopril",
    "amlodipine": "amlodipine",
    "simvastatin": "simvastatin",
    "atorvastatin": "atorvastatin",
    # Diabetes
    "metformin": "metformin",
    "gliclazide": "gliclazide",
    "glimepiride": "glimepiride",
    # Respiratory
    "salbutamol": "albuterol",
    "ventolin": "albuterol",
    "becotide": "beclomethasone",
    "beclozone": "beclomethasone",
    "flixotide": "fluticasone",
    "seretide": "fluticasone salmeterol",
    # Stomach / GI
    "omeprazole": "omeprazole",
    "lansoprazole": "lansoprazole",
    "gaviscon": "aluminum hydroxide magnesium hydroxide",
    "peptac": "aluminum hydroxide magnesium hydroxide",
    # Mental health
    "diazepam": "diazepam",
    "lorazepam": "lorazepam",
    "temazepam": "temazepam",
    "amitriptyline": "amitriptyline",
    "sertraline": "sertraline",
    "citalopram": "citalopram",
    "fluoxetine": "fluoxetine",
    # Brand names (UK -> US)
    "panadol": "tylenol",
    "nurofen": "advil",
    "voltaire": "cataflam",
    "augmentin": "augmentin",
    "zantac": "zantac",
    "losec": "prilosec",
    "nexium": "nexium",
    # Vitamins
    "vitamin c": "ascorbic acid",
    "vitamin d": "cholecalciferol",
    "vitamin b12": "cyanocobalamin",
    "folic acid": "folic acid",
    # Common misspellings and US names
    "paracitamol": "acetaminophen",
    "acetaminophen": "acetaminophen",
    "tylenol": "acetaminophen",
}

# Symptom keyword -> commonly used drugs. Order matters: the first keyword
# found in the query wins.
SYMPTOM_SUGGESTIONS: Dict[str, List[str]] = {
    "pain": ["acetaminophen", "ibuprofen", "naproxen"],
    "headache": ["acetaminophen", "ibuprofen", "aspirin"],
    "fever": ["acetaminophen", "ibuprofen"],
    "inflammation": ["ibuprofen", "naproxen", "diclofenac"],
    "infection": ["amoxicillin", "penicillin", "erythromycin"],
    "blood pressure": ["lisinopril", "atenolol", "amlodipine"],
    "diabetes": ["metformin", "gliclazide"],
    "asthma": ["albuterol", "fluticasone"],
    "stomach": ["omeprazole", "lansoprazole"],
    "depression": ["sertraline", "fluoxetine", "citalopram"],
    "anxiety": ["diazepam", "lorazepam"],
}

# Therapeutic alternatives shown next to a drug's detail page
DRUG_ALTERNATIVES: Dict[str, List[str]] = {
    # Pain relievers
    "acetaminophen": ["ibuprofen", "naproxen", "aspirin", "diclofenac"],
    "ibuprofen": ["acetaminophen", "naproxen", "aspirin", "diclofenac"],
    "naproxen": ["ibuprofen", "acetaminophen", "aspirin", "diclofenac"],
    "aspirin": ["acetaminophen", "ibuprofen", "naproxen", "clopidogrel"],
    "diclofenac": ["ibuprofen", "naproxen", "acetaminophen", "celecoxib"],
    # Antibiotics
    "amoxicillin": ["penicillin", "erythromycin", "clarithromycin", "azithromycin"],
    "penicillin": ["amoxicillin", "erythromycin", "clarithromycin", "azithromycin"],
    "erythromycin": ["azithromycin", "clarithromycin", "amoxicillin", "penicillin"],
    "azithromycin": ["erythromycin", "clarithromycin", "amoxicillin", "doxycycline"],
    "clarithromycin": ["azithromycin", "erythromycin", "amoxicillin", "penicillin"],
    "doxycycline": ["azithromycin", "erythromycin", "minocycline", "tetracycline"],
    "ciprofloxacin": ["levofloxacin", "moxifloxacin", "ofloxacin", "norfloxacin"],
    "trimethoprim": ["sulfamethoxazole", "nitrofurantoin", "fosfomycin", "amoxicillin"],
    # Cardiovascular
    "lisinopril": ["ramipril", "enalapril", "benazepril", "losartan"],
    "ramipril": ["lisinopril", "enalapril", "benazepril", "losartan"],
    "enalapril": ["lisinopril", "ramipril", "benazepril", "losartan"],
    "losartan": ["valsartan", "irbesartan", "candesartan", "lisinopril"],
    "valsartan": ["losartan", "irbesartan", "candesartan", "olmesartan"],
    "atenolol": ["metoprolol", "propranolol", "bisoprolol", "carvedilol"],
    "metoprolol": ["atenolol", "propranolol", "bisoprolol", "carvedilol"],
    "amlodipine": ["nifedipine", "diltiazem", "verapamil", "felodipine"],
    "simvastatin": ["atorvastatin", "rosuvastatin", "pravastatin", "lovastatin"],
    "atorvastatin": ["simvastatin", "rosuvastatin", "pravastatin", "lovastatin"],
    # Diabetes
    "metformin": ["glipizide", "glyburide", "pioglitazone", "sitagliptin"],
    "glipizide": ["glyburide", "glimepiride", "metformin", "sitagliptin"],
    "glyburide": ["glipizide", "glimepiride", "metformin", "sitagliptin"],
    "glimepiride": ["glipizide", "glyburide", "metformin", "sitagliptin"],
    # Respiratory
    "albuterol": ["levalbuterol", "pirbuterol", "terbutaline", "salmeterol"],
    "fluticasone": ["budesonide", "beclomethasone", "mometasone", "triamcinolone"],
    "beclomethasone": ["fluticasone", "budesonide", "mometasone", "triamcinolone"],
    "budesonide": ["fluticasone", "beclomethasone", "mometasone", "triamcinolone"],
    # Stomach / GI
    "omeprazole": ["esomeprazole", "lansoprazole", "pantoprazole", "rabeprazole"],
    "lansoprazole": ["omeprazole", "esomeprazole", "pantoprazole", "rabeprazole"],
    "esomeprazole": ["omeprazole", "lansoprazole", "pantoprazole", "rabeprazole"],
    # Mental health
    "sertraline": ["fluoxetine", "paroxetine", "escitalopram", "citalopram"],
    "fluoxetine": ["sertraline", "paroxetine", "escitalopram", "citalopram"],
    "paroxetine": ["sertraline", "fluoxetine", "escitalopram", "citalopram"],
    "escitalopram": ["sertraline", "fluoxetine", "paroxetine", "citalopram"],
    "citalopram": ["sertraline", "fluoxetine", "paroxetine", "escitalopram"],
    "diazepam": ["lorazepam", "alprazolam", "clonazepam", "temazepam"],
    "lorazepam": ["diazepam", "alprazolam", "clonazepam", "temazepam"],
    "alprazolam": ["diazepam", "lorazepam", "clonazepam", "temazepam"],
    "amitriptyline": ["nortriptyline", "imipramine", "desipramine", "venlafaxine"],
}


def normalize_name(name: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return " ".join((name or "").lower().split())


def resolve(query: str) -> Optional[str]:
    """
    Map a regional drug name to its US equivalent.

    Args:
        query: Drug name as typed by the user

    Returns:
        The US/FDA name, or None when nothing in the table matches
    """
    normalized = normalize_name(query)
    if not normalized:
        return None

    if normalized in DRUG_NAME_TRANSLATIONS:
        return DRUG_NAME_TRANSLATIONS[normalized]

    # Compound names ("panadol extra", "vitamin d3") match on substrings
    for regional_name, us_name in DRUG_NAME_TRANSLATIONS.items():
        if regional_name in normalized or normalized in regional_name:
            return us_name

    return None


def suggest(query: str) -> List[Dict[str, str]]:
    """
    Propose up to three drugs to try when a search found nothing.

    Returns:
        List of {original, suggestion, description}
    """
    suggestions: List[Dict[str, str]] = []
    translation = resolve(query)

    if translation and translation != normalize_name(query):
        suggestions.append(
            {
                "original": query,
                "suggestion": translation,
                "description": f'Commonly known as "{translation}" in the US',
            }
        )

    if not suggestions:
        lowered = normalize_name(query)
        for symptom, drugs in SYMPTOM_SUGGESTIONS.items():
            if symptom in lowered:
                for drug in drugs:
                    suggestions.append(
                        {
                            "original": query,
                            "suggestion": drug,
                            "description": f"Common medication for {symptom}",
                        }
                    )
                break

    logger.debug("Suggestions for %r: %s", query, [s["suggestion"] for s in suggestions])
    return suggestions[:MAX_SUGGESTIONS]


def alternatives_for(drug_name: str) -> List[str]:
    """Therapeutic alternatives for a drug, empty when the drug is not listed."""
    return list(DRUG_ALTERNATIVES.get(normalize_name(drug_name), []))
