"""
Prompt construction for the AI gateway.

Every prompt that can produce Kurdish text carries the same Sorani rule
block so terminology stays consistent across summaries, translations,
interaction checks and chat replies.
"""

import json
from typing import Any, Dict, List

from pharmacy_api.utils.i18n import LANGUAGE_NAMES

CHAT_CONTEXT_LIMIT = 6000
TRANSLATION_TEXT_LIMIT = 1500
INTERACTION_SECTION_LIMIT = 1500
SUMMARY_TEXT_LIMIT = 4000

SORANI_RULES = """KURDISH OUTPUT RULES (apply to every "ku" value):
- Write Central Kurdish (Sorani) in Arabic script ONLY.
- NEVER use Kurmanji and NEVER use Latin script.
- Use this vocabulary consistently: medicine = دەرمان, dose = ژەمە, side effects = کاریگەری لاوەکی,
  warning = ئاگاداری, pregnancy = سکپڕی, doctor = پزیشک, pharmacist = دەرمانساز, pain = ئازار,
  headache = سەرئێشە, bleeding = خوێنبەربوون."""

SUMMARY_RULES: Dict[str, str] = {
    "uses": (
        "Extract what the medicine is used to treat or prevent. "
        "List conditions or purposes only; ignore dosing, warnings and marketing text."
    ),
    "sideEffects": (
        "Extract the most common side effects (adverse reactions). "
        "Ignore usage instructions, dosing, statistics and study descriptions; name the effect only."
    ),
    "warnings": (
        "Extract the most important safety warnings, boxed warnings first. "
        "Ignore side-effect frequency tables and dosing directions."
    ),
    "dosage": (
        "Extract the usual adult dose, how often to take it and the maximum daily dose. "
        "Keep numbers and units exactly as written; ignore pediatric tables unless nothing else exists."
    ),
    "contraindications": (
        "Extract who must NOT take this medicine (conditions, allergies, combinations). "
        "Ignore general warnings that are not absolute contraindications."
    ),
    "interactions": (
        "Extract the drugs or drug classes that interact with this medicine and the effect of each. "
        "Ignore food and lab-test interactions unless they are the only ones listed."
    ),
    "pregnancy": (
        "Extract what the label says about use during pregnancy and breastfeeding. "
        "State the risk plainly; ignore animal-study details."
    ),
}


def build_summary_messages(text: str, task: str) -> List[Dict[str, str]]:
    system = f"""You are a clinical pharmacist writing patient-friendly drug summaries.
TASK: {SUMMARY_RULES[task]}

OUTPUT RULES:
- Output ONLY raw JSON with exactly these keys: "en", "ar", "ku".
- Each key holds an array of exactly 3 short strings (under 12 words each).
- "ar" is Modern Standard Arabic. "ku" follows the Kurdish rules below.
- Base every point on the supplied label text only.

{SORANI_RULES}"""
    user = f'Label section ({task}):\n"""\n{text[:SUMMARY_TEXT_LIMIT]}\n"""\n\nReturn the JSON object now.'
    return [{"role": "system", "content": system}, {"role": "user", "content": user}]


def build_translation_messages(text: str, target_language: str) -> List[Dict[str, str]]:
    language_name = LANGUAGE_NAMES.get(target_language, target_language)
    system = f"""You are a professional medical translator.
Translate the user's FDA label text into {language_name}.
- Preserve the full meaning, numbers, units and drug names.
- Keep the original paragraph and list formatting.
- Output ONLY the translation, with no notes or preamble."""
    if target_language == "ku":
        system += "\n\n" + SORANI_RULES
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": text[:TRANSLATION_TEXT_LIMIT]},
    ]


def build_chat_messages(message: str, drug_name: str, context: Any, language: str) -> List[Dict[str, str]]:
    context_json = json.dumps(context, ensure_ascii=False, default=str)[:CHAT_CONTEXT_LIMIT]
    language_name = LANGUAGE_NAMES.get(language, "English")
    system = f"""You are an expert clinical pharmacist assistant.
You are currently answering questions about the drug: "{drug_name}".

CONTEXT (FDA LABEL DATA):
{context_json}

RULES:
1. Answer ONLY based on the provided FDA context. If the answer is not in the data, say "I cannot find that information in the official label."
2. Be concise, professional, and empathetic.
3. If asked for personal medical advice (e.g., "Should I take this?"), refuse and tell them to consult a doctor.
4. Keep answers short (under 3 sentences) unless asked for details.
5. Reply in {language_name}, the language of the user's question.

{SORANI_RULES}"""
    return [{"role": "system", "content": system}, {"role": "user", "content": message}]


def build_interaction_messages(label_blobs: List[Dict[str, str]]) -> List[Dict[str, str]]:
    system = f"""You are a pharmaceutical interaction expert.
RULES:
- Output ONLY raw JSON.
- Cross-reference each drug's "drug_interactions" and "warnings" sections against the other drugs.
- Report only interactions supported by the supplied label text.
- Severity MUST be exactly "critical", "moderate" or "minor".
- Provide every text in English ("en"), Arabic ("ar") and Kurdish ("ku").

REQUIRED JSON STRUCTURE:
{{
  "interactions": [
    {{
      "severity": "critical|moderate|minor",
      "drugs": ["drug a", "drug b"],
      "title": {{"en": "...", "ar": "...", "ku": "..."}},
      "description": {{"en": "...", "ar": "...", "ku": "..."}},
      "recommendations": {{"en": ["..."], "ar": ["..."], "ku": ["..."]}}
    }}
  ],
  "overallRisk": "critical|moderate|minor",
  "summary": {{"en": "...", "ar": "...", "ku": "..."}}
}}

{SORANI_RULES}"""
    user = "Drug label data:\n" + json.dumps(label_blobs, ensure_ascii=False)
    return [{"role": "system", "content": system}, {"role": "user", "content": user}]
