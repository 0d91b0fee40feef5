"""
Static drug-interaction rule table.

Used when AI analysis is unavailable. Drugs are mapped to classes by
keyword substring match against the queried names and the brand/generic
names on their labels; each rule fires on a pair of classes.
"""

import logging
from itertools import combinations
from typing import Dict, Iterable, List, Set

from pharmacy_api.models import Severity, highest_severity

logger = logging.getLogger(__name__)

CLASS_KEYWORDS: Dict[str, List[str]] = {
    "nsaid": [
        "aspirin", "ibuprofen", "naproxen", "diclofenac", "celecoxib", "meloxicam",
        "ketorolac", "indomethacin", "advil", "motrin", "aleve", "nurofen", "cataflam",
    ],
    "anticoagulant": [
        "warfarin", "coumadin", "jantoven", "heparin", "apixaban", "eliquis",
        "rivaroxaban", "xarelto", "dabigatran", "edoxaban",
    ],
    "ace_inhibitor": [
        "lisinopril", "enalapril", "ramipril", "captopril", "benazepril", "quinapril", "perindopril",
    ],
    "ssri": ["sertraline", "fluoxetine", "citalopram", "escitalopram", "paroxetine"],
    "benzodiazepine": ["diazepam", "lorazepam", "alprazolam", "clonazepam", "temazepam"],
    "opioid": ["codeine", "morphine", "oxycodone", "hydrocodone", "tramadol", "fentanyl"],
    "statin": ["simvastatin", "atorvastatin", "lovastatin", "rosuvastatin", "pravastatin"],
    "macrolide": ["clarithromycin", "erythromycin"],
}

INTERACTION_RULES: List[Dict] = [
    {
        "classes": ("nsaid", "anticoagulant"),
        "severity": Severity.CRITICAL,
        "title": {
            "en": "Serious bleeding risk",
            "ar": "خطر نزيف شديد",
            "ku": "مەترسی خوێنبەربوونی توند",
        },
        "description": {
            "en": "NSAIDs such as aspirin or ibuprofen add to the effect of blood thinners and can cause dangerous bleeding.",
            "ar": "مضادات الالتهاب غير الستيرويدية مثل الأسبرين أو الإيبوبروفين تزيد من تأثير مميعات الدم وقد تسبب نزيفًا خطيرًا.",
            "ku": "دەرمانە دژە هەوکردنەکانی وەک ئەسپرین یان ئایبوپرۆفین کاریگەری دەرمانی تەنککردنەوەی خوێن زیاد دەکەن و دەبنە هۆی خوێنبەربوونی مەترسیدار.",
        },
        "recommendations": {
            "en": ["Avoid this combination unless a doctor prescribed it.", "Watch for unusual bruising or black stools."],
            "ar": ["تجنب هذا الجمع إلا بوصفة من الطبيب.", "راقب ظهور كدمات غير عادية أو براز أسود."],
            "ku": ["ئەم تێکەڵەیە بەکارمەهێنە مەگەر پزیشک نووسیبێتی.", "ئاگاداری شینبوونی نائاسایی یان پیسایی ڕەش بە."],
        },
    },
    {
        "classes": ("nsaid", "nsaid"),
        "severity": Severity.MODERATE,
        "title": {
            "en": "Stomach bleeding risk",
            "ar": "خطر نزيف المعدة",
            "ku": "مەترسی خوێنبەربوونی گەدە",
        },
        "description": {
            "en": "Taking two NSAIDs together raises the risk of stomach ulcers and bleeding, and ibuprofen can weaken the heart-protective effect of low-dose aspirin.",
            "ar": "تناول اثنين من مضادات الالتهاب غير الستيرويدية معًا يزيد خطر قرحة المعدة والنزيف، وقد يضعف الإيبوبروفين التأثير الوقائي للقلب للأسبرين بجرعة منخفضة.",
            "ku": "بەکارهێنانی دوو دەرمانی دژە هەوکردن پێکەوە مەترسی برینی گەدە و خوێنبەربوون زیاد دەکات.",
        },
        "recommendations": {
            "en": ["Do not take two pain relievers of this type together.", "Ask a pharmacist about timing if you take daily aspirin."],
            "ar": ["لا تتناول مسكنين من هذا النوع معًا.", "اسأل الصيدلي عن التوقيت إذا كنت تتناول الأسبرين يوميًا."],
            "ku": ["دوو دەرمانی ئازارشکێنی لەم جۆرە پێکەوە مەخۆ.", "ئەگەر ڕۆژانە ئەسپرین دەخۆیت پرسیار لە دەرمانساز بکە."],
        },
    },
    {
        "classes": ("nsaid", "ace_inhibitor"),
        "severity": Severity.MODERATE,
        "title": {
            "en": "Reduced blood pressure control",
            "ar": "انخفاض التحكم في ضغط الدم",
            "ku": "کەمبوونەوەی کۆنترۆڵی پەستانی خوێن",
        },
        "description": {
            "en": "NSAIDs can weaken the blood-pressure effect of ACE inhibitors and strain the kidneys.",
            "ar": "قد تضعف مضادات الالتهاب غير الستيرويدية تأثير مثبطات الإنزيم المحول على ضغط الدم وترهق الكلى.",
            "ku": "دەرمانە دژە هەوکردنەکان دەتوانن کاریگەری دەرمانی پەستانی خوێن کەم بکەنەوە و زیان بە گورچیلە بگەیەنن.",
        },
        "recommendations": {
            "en": ["Monitor blood pressure regularly.", "Drink enough fluids and report reduced urination."],
            "ar": ["راقب ضغط الدم بانتظام.", "اشرب كمية كافية من السوائل وأبلغ عن قلة التبول."],
            "ku": ["بەردەوام پەستانی خوێن بپشکنە.", "شلەی پێویست بخۆرەوە."],
        },
    },
    {
        "classes": ("ssri", "anticoagulant"),
        "severity": Severity.CRITICAL,
        "title": {
            "en": "Increased bleeding risk",
            "ar": "زيادة خطر النزيف",
            "ku": "زیادبوونی مەترسی خوێنبەربوون",
        },
        "description": {
            "en": "SSRI antidepressants affect platelets and increase bleeding when combined with blood thinners.",
            "ar": "تؤثر مضادات الاكتئاب من نوع SSRI على الصفائح الدموية وتزيد النزيف عند الجمع مع مميعات الدم.",
            "ku": "دەرمانەکانی دژە خەمۆکی جۆری SSRI کار لە پەڕەکانی خوێن دەکەن و لەگەڵ تەنککەرەوەی خوێن خوێنبەربوون زیاد دەکەن.",
        },
        "recommendations": {
            "en": ["Your doctor may need to check your blood clotting more often."],
            "ar": ["قد يحتاج طبيبك إلى فحص تخثر الدم بشكل متكرر."],
            "ku": ["لەوانەیە پزیشکەکەت پێویستی بە پشکنینی زیاتری مەیینی خوێن بێت."],
        },
    },
    {
        "classes": ("ssri", "nsaid"),
        "severity": Severity.MODERATE,
        "title": {
            "en": "Stomach bleeding risk",
            "ar": "خطر نزيف المعدة",
            "ku": "مەترسی خوێنبەربوونی گەدە",
        },
        "description": {
            "en": "Combining SSRIs with NSAIDs increases the risk of stomach bleeding.",
            "ar": "الجمع بين مضادات الاكتئاب SSRI ومضادات الالتهاب يزيد خطر نزيف المعدة.",
            "ku": "تێکەڵکردنی SSRI لەگەڵ دەرمانی دژە هەوکردن مەترسی خوێنبەربوونی گەدە زیاد دەکات.",
        },
        "recommendations": {
            "en": ["Use the lowest effective NSAID dose for the shortest time."],
            "ar": ["استخدم أقل جرعة فعالة من مضاد الالتهاب لأقصر مدة."],
            "ku": ["کەمترین ژەمەی کاریگەر بۆ کورتترین ماوە بەکاربهێنە."],
        },
    },
    {
        "classes": ("ssri", "opioid"),
        "severity": Severity.MODERATE,
        "title": {
            "en": "Serotonin syndrome risk",
            "ar": "خطر متلازمة السيروتونين",
            "ku": "مەترسی نیشانەکانی سێرۆتۆنین",
        },
        "description": {
            "en": "Some opioids such as tramadol can raise serotonin levels together with SSRIs.",
            "ar": "بعض المواد الأفيونية مثل الترامادول قد ترفع مستوى السيروتونين مع مضادات الاكتئاب SSRI.",
            "ku": "هەندێک دەرمانی ئەفیونی وەک ترامادۆل لەگەڵ SSRI ئاستی سێرۆتۆنین بەرز دەکەنەوە.",
        },
        "recommendations": {
            "en": ["Seek help for agitation, fever, sweating or muscle twitching."],
            "ar": ["اطلب المساعدة عند الهياج أو الحمى أو التعرق أو ارتعاش العضلات."],
            "ku": ["لە کاتی شڵەژان، تا، ئارەقکردنەوە یان لەرزینی ماسولکە یارمەتی وەربگرە."],
        },
    },
    {
        "classes": ("benzodiazepine", "opioid"),
        "severity": Severity.CRITICAL,
        "title": {
            "en": "Dangerous sedation and slowed breathing",
            "ar": "تخدير خطير وبطء في التنفس",
            "ku": "خەوالوویی مەترسیدار و هێواشبوونی هەناسە",
        },
        "description": {
            "en": "Benzodiazepines with opioids can cause profound sedation, breathing problems, coma and death.",
            "ar": "الجمع بين البنزوديازيبينات والمواد الأفيونية قد يسبب تخديرًا عميقًا ومشاكل في التنفس وغيبوبة ووفاة.",
            "ku": "بێنزۆدیازیپین لەگەڵ دەرمانی ئەفیونی دەتوانێت ببێتە هۆی خەوالوویی قووڵ، کێشەی هەناسە و مردن.",
        },
        "recommendations": {
            "en": ["Only use together if a doctor has decided no alternative exists.", "Never combine with alcohol."],
            "ar": ["لا تستخدمهما معًا إلا إذا قرر الطبيب عدم وجود بديل.", "لا تجمعهما مع الكحول أبدًا."],
            "ku": ["تەنها ئەگەر پزیشک بڕیاری دابێت پێکەوە بەکاریان بهێنە.", "هەرگیز لەگەڵ ئەلکهول تێکەڵیان مەکە."],
        },
    },
    {
        "classes": ("statin", "macrolide"),
        "severity": Severity.CRITICAL,
        "title": {
            "en": "Muscle damage risk",
            "ar": "خطر تلف العضلات",
            "ku": "مەترسی زیانی ماسولکە",
        },
        "description": {
            "en": "Clarithromycin and erythromycin raise statin levels and can cause severe muscle breakdown.",
            "ar": "يرفع الكلاريثرومايسين والإريثرومايسين مستوى الستاتين وقد يسببان تلفًا شديدًا في العضلات.",
            "ku": "کلاریسرۆمایسین و ئێریسرۆمایسین ئاستی ستاتین بەرز دەکەنەوە و دەبنە هۆی تێکچوونی توندی ماسولکە.",
        },
        "recommendations": {
            "en": ["Your doctor may pause the statin during the antibiotic course.", "Report unexplained muscle pain."],
            "ar": ["قد يوقف طبيبك الستاتين مؤقتًا أثناء المضاد الحيوي.", "أبلغ عن أي ألم عضلي غير مبرر."],
            "ku": ["لەوانەیە پزیشک ستاتین لە ماوەی دژە بەکتریاکەدا ڕابگرێت.", "ئازاری ماسولکەی نائاسایی ڕابگەیەنە."],
        },
    },
]


def classify(names: Iterable[str]) -> Set[str]:
    """Drug classes whose keywords appear in any of ``names``."""
    lowered = [name.lower() for name in names if name]
    return {
        drug_class
        for drug_class, keywords in CLASS_KEYWORDS.items()
        if any(keyword in name for name in lowered for keyword in keywords)
    }


def _rule_matches(rule: Dict, first: Set[str], second: Set[str]) -> bool:
    a, b = rule["classes"]
    return (a in first and b in second) or (b in first and a in second)


def evaluate(drugs: Dict[str, List[str]]) -> Dict:
    """
    Apply the rule table to a set of drugs.

    Args:
        drugs: Query name -> names known for that drug (query plus label names)

    Returns:
        {interactions, overallRisk}; interactions list the two query names
    """
    classes = {query: classify([query, *names]) for query, names in drugs.items()}
    interactions: List[Dict] = []

    for first, second in combinations(classes, 2):
        for rule in INTERACTION_RULES:
            if _rule_matches(rule, classes[first], classes[second]):
                logger.debug("Rule %s matched %s + %s", "/".join(rule["classes"]), first, second)
                interactions.append(
                    {
                        "severity": rule["severity"].value,
                        "drugs": [first, second],
                        "title": dict(rule["title"]),
                        "description": dict(rule["description"]),
                        "recommendations": {k: list(v) for k, v in rule["recommendations"].items()},
                    }
                )
                break

    return {
        "interactions": interactions,
        "overallRisk": highest_severity(item["severity"] for item in interactions),
    }
