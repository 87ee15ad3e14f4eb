"""
The monthly questionnaire.

Answers are stored per report under the keys ``q1`` … ``q28``. Two cleaning
paths exist and are kept deliberately different:

* ``clean_appended_answers`` (``POST /add-answers``) trims values and drops
  anything empty or non-string;
* ``clean_replaced_answers`` (``PUT /qa``) keeps every valid key as sent,
  empty strings included.

Either way the result replaces the report's whole ``qa`` mapping.
"""
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

QUESTION_COUNT = 28
QUESTION_KEYS: Tuple[str, ...] = tuple(f"q{i}" for i in range(1, QUESTION_COUNT + 1))

_QUESTION_KEY_RE = re.compile(r"^q([1-9]|1[0-9]|2[0-8])$")

QUESTIONS: Tuple[str, ...] = (
    "Agr koi namaz qaza hui to kis waqt ki aur kyun?",
    "Mutaleya tafseer-o-hadees sy liye gaye eham asool aur us pr amal daramad ki surat-e-haal?",
    "Mutaleya shuda(surat, kitaab, hadees, literature) ka naam?(mukamal/jari)",
    "Hifz shuda surat, hadees, dua?",
    "Konsi ikhlaaqi khoobi apnaaney ya burai chorny ki koshish rhi?",
    "Khandaan, hamsaya, degar mutalakeen k saath husn mamla, khidmat, ayadat, tauhfa waghera ki kya koshishein rhin?",
    "Tadaad mutaiyan afraad?",
    "Izafa mutaiyan afraad?",
    "Kitny mutaiyan afraad sy raabta rha?",
    "Mutaiyan afraad k saath ki gai sirgarmiyaan?",
    "Kya apka halka dars qaim hai?",
    "Dawati halky main ki gai sirgarmiyaan?(sisilawar dars quran/qurani class/degar)",
    "Kitny hami banaye?",
    "Kitny afraad ko islam ki bunyadi baatein sikhai?",
    "Ijtemai mutaly(tadaad)?",
    "Group discusssions(tadaad)?",
    "Hadiya kutab(tadaad)?",
    "Library sy parhwain(tadaad)?",
    "Kya mtutalka ijtemaat main shirkat ki?",
    "Shirkat na krny ki wajah?",
    "Apni anat di?",
    "Doosron sy kitni jama ki?",
    "Kya nisaab main milny waaly kaam kiye?",
    "Zer-e-tarbiyat afraad k liye kya koshishein rhi?",
    "Degar koi baat/kaam/masla/mashwara/muhsiba?",
    "Kya report barwaqt arsaal kr rhi hein?",
    "Agr berwaqt arsaal nahi kr rhi to wajah?",
    "Arsaal krdah khatoot nazma shehr/rafiqaat/karkunaan?",
)

NO_ANSWER = "No answer provided"


def is_question_key(key: Any) -> bool:
    return isinstance(key, str) and _QUESTION_KEY_RE.match(key) is not None


def clean_appended_answers(answers: Mapping[str, Any]) -> Dict[str, str]:
    """Valid keys only, values trimmed, empty or non-string values dropped."""
    clean = {}
    for key, value in answers.items():
        if not is_question_key(key) or not isinstance(value, str):
            continue
        value = value.strip()
        if value:
            clean[key] = value
    return clean


def clean_replaced_answers(qa: Mapping[str, Any]) -> Dict[str, str]:
    """Valid keys only, values kept as sent (empty strings included)."""
    clean = {}
    for key, value in qa.items():
        if not is_question_key(key):
            continue
        if value is None:
            value = ""
        elif not isinstance(value, str):
            value = str(value)
        clean[key] = value
    return clean


def question_answer_pairs(qa: Optional[Mapping[str, Any]]) -> List[Tuple[int, str, str]]:
    """All 28 questions in order as (number, question, answer-or-placeholder)."""
    qa = qa or {}
    pairs = []
    for number, (key, question) in enumerate(zip(QUESTION_KEYS, QUESTIONS), start=1):
        answer = qa.get(key)
        if not isinstance(answer, str) or not answer.strip():
            answer = NO_ANSWER
        pairs.append((number, question, answer))
    return pairs
