"""Heuristic language detection used to steer the reply locale of agents.

Scoring works in two passes. Distinctive non-Latin scripts are counted first
and only contribute once they pass a per-script minimum, so a stray foreign
character in an English posting does not flip the result. Then every
language's keyword patterns are run and each hit adds one point. The highest
score wins; ties and all-zero scores fall back to English.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)


class DetectedLanguage(str, Enum):
    ENGLISH = "English"
    CHINESE = "Chinese"
    JAPANESE = "Japanese"
    KOREAN = "Korean"
    GERMAN = "German"
    FRENCH = "French"
    SPANISH = "Spanish"
    PORTUGUESE = "Portuguese"
    RUSSIAN = "Russian"
    ARABIC = "Arabic"
    THAI = "Thai"


DEFAULT_LANGUAGE = DetectedLanguage.ENGLISH

SCRIPT_WEIGHT = 2

# (language, script range, minimum match count before the script counts)
SCRIPT_RULES: list[tuple[DetectedLanguage, re.Pattern[str], int]] = [
    (DetectedLanguage.CHINESE, re.compile(r"[\u4e00-\u9fff]"), 10),
    (DetectedLanguage.JAPANESE, re.compile(r"[\u3040-\u309f\u30a0-\u30ff]"), 5),
    (DetectedLanguage.KOREAN, re.compile(r"[\uac00-\ud7af\u1100-\u11ff]"), 5),
    (DetectedLanguage.RUSSIAN, re.compile(r"[\u0400-\u04ff]"), 10),
    (DetectedLanguage.ARABIC, re.compile(r"[\u0600-\u06ff]"), 10),
    (DetectedLanguage.THAI, re.compile(r"[\u0e00-\u0e7f]"), 10),
]

_I = re.IGNORECASE

LANGUAGE_PATTERNS: dict[DetectedLanguage, list[re.Pattern[str]]] = {
    DetectedLanguage.ENGLISH: [
        re.compile(
            r"\b(the|and|is|are|for|with|this|that|have|will|from|they|been|would|could|"
            r"should|about|which|their|there|other|after|first|also|into|only|over|such|"
            r"make|like|just|than|some|very|when|come|made|find|here|many|where|those|"
            r"being|between|must|through|while|before|since|each|both|during|under)\b",
            _I,
        ),
        re.compile(
            r"\b(requirements?|responsibilities?|qualifications?|experience|skills?|team|"
            r"company|work|position|role)\b",
            _I,
        ),
    ],
    DetectedLanguage.CHINESE: [
        re.compile(r"[\u4e00-\u9fff]{2,}"),
        re.compile(r"(要求|职责|任职|工作|岗位|负责|公司|团队|经验|技能|能力|熟悉|了解|精通|优先)"),
    ],
    DetectedLanguage.JAPANESE: [
        re.compile(r"[\u3040-\u309f\u30a0-\u30ff]+"),
        re.compile(r"(仕事|経験|スキル|必須|歓迎|業務|会社)"),
    ],
    DetectedLanguage.KOREAN: [
        re.compile(r"[\uac00-\ud7af]+"),
        re.compile(r"(경험|업무|회사|자격|우대|필수)"),
    ],
    DetectedLanguage.GERMAN: [
        re.compile(
            r"\b(und|der|die|das|ist|sind|für|mit|sie|werden|haben|oder|bei|als|auch|nach|"
            r"noch|nur|durch|über|vor|diese|einer|kann|muss|Jahr|Jahren)\b",
            _I,
        ),
        re.compile(r"\b(Anforderungen|Aufgaben|Qualifikationen|Erfahrung|Kenntnisse)\b", _I),
    ],
    DetectedLanguage.FRENCH: [
        re.compile(
            r"\b(le|la|les|de|du|des|et|est|sont|pour|avec|vous|nous|dans|sur|par|une|qui|"
            r"que|aux|cette|son|ses|mais|plus|tout|sans|entre)\b",
            _I,
        ),
        re.compile(r"\b(expérience|compétences|requis|missions|profil|entreprise|responsabilités)\b", _I),
    ],
    DetectedLanguage.SPANISH: [
        re.compile(
            r"\b(el|la|los|las|de|del|en|que|es|son|para|con|por|una|como|más|pero|sus|"
            r"este|está|han|sin|sobre|todo|entre|desde|hasta)\b",
            _I,
        ),
        re.compile(r"\b(experiencia|requisitos|responsabilidades|habilidades|empresa)\b", _I),
    ],
    DetectedLanguage.PORTUGUESE: [
        re.compile(
            r"\b(de|que|é|são|para|com|em|uma|os|das|dos|por|mais|como|seu|sua|está|tem|"
            r"mas|aos|nas|nos|essa|esse|isso)\b",
            _I,
        ),
        re.compile(r"\b(experiência|requisitos|responsabilidades|habilidades|empresa)\b", _I),
    ],
    DetectedLanguage.RUSSIAN: [
        re.compile(r"[\u0400-\u04ff]+"),
        re.compile(r"(опыт|требования|обязанности|навыки|компания)", _I),
    ],
    DetectedLanguage.ARABIC: [
        re.compile(r"[\u0600-\u06ff]+"),
    ],
}

LANGUAGE_INSTRUCTIONS: dict[DetectedLanguage, str] = {
    DetectedLanguage.CHINESE: "请使用中文回复。",
    DetectedLanguage.JAPANESE: "日本語で回答してください。",
    DetectedLanguage.KOREAN: "한국어로 답변해 주세요.",
    DetectedLanguage.GERMAN: "Bitte antworten Sie auf Deutsch.",
    DetectedLanguage.FRENCH: "Veuillez répondre en français.",
    DetectedLanguage.SPANISH: "Por favor responda en español.",
    DetectedLanguage.PORTUGUESE: "Por favor, responda em português.",
    DetectedLanguage.RUSSIAN: "Пожалуйста, отвечайте на русском языке.",
    DetectedLanguage.ARABIC: "الرجاء الرد باللغة العربية.",
    DetectedLanguage.THAI: "กรุณาตอบเป็นภาษาไทย",
    DetectedLanguage.ENGLISH: "Please respond in English.",
}

LOCALE_LANGUAGES: dict[str, DetectedLanguage] = {
    "en": DetectedLanguage.ENGLISH,
    "zh": DetectedLanguage.CHINESE,
    "ja": DetectedLanguage.JAPANESE,
    "ko": DetectedLanguage.KOREAN,
    "de": DetectedLanguage.GERMAN,
    "fr": DetectedLanguage.FRENCH,
    "es": DetectedLanguage.SPANISH,
    "pt": DetectedLanguage.PORTUGUESE,
    "ru": DetectedLanguage.RUSSIAN,
    "ar": DetectedLanguage.ARABIC,
    "th": DetectedLanguage.THAI,
}


class LanguageDetector:
    """Detect the dominant language of a text and phrase a reply directive."""

    def score(self, text: str) -> dict[DetectedLanguage, int]:
        """Return the raw per-language scores for *text*."""
        scores: dict[DetectedLanguage, int] = {}
        if not text or not text.strip():
            return scores

        for language, pattern, minimum in SCRIPT_RULES:
            count = len(pattern.findall(text))
            if count > minimum:
                scores[language] = scores.get(language, 0) + count * SCRIPT_WEIGHT

        for language, patterns in LANGUAGE_PATTERNS.items():
            for pattern in patterns:
                hits = len(pattern.findall(text))
                if hits:
                    scores[language] = scores.get(language, 0) + hits

        return scores

    def detect(self, text: str) -> DetectedLanguage:
        """Return the language with the strictly highest score, else English."""
        best = DEFAULT_LANGUAGE
        best_score = 0
        for language, value in self.score(text).items():
            if value > best_score:
                best, best_score = language, value
            elif value == best_score and value > 0:
                # a tie between two candidates is not a signal
                best = DEFAULT_LANGUAGE
        return best

    def instruction_for(self, text: str) -> str:
        return self.instruction_for_language(self.detect(text))

    def instruction_for_language(self, language: DetectedLanguage | str) -> str:
        """Map a language label to its fixed reply directive."""
        try:
            label = DetectedLanguage(language)
        except ValueError:
            return f"Please respond in {language}."
        return LANGUAGE_INSTRUCTIONS.get(label, f"Please respond in {label.value}.")

    @staticmethod
    def language_from_locale(locale: str | None) -> DetectedLanguage | None:
        """Map a locale tag such as ``zh-CN`` or ``pt_BR`` to a language."""
        if not locale or not locale.strip():
            return None
        primary = re.split(r"[-_]", locale.strip().lower(), maxsplit=1)[0]
        return LOCALE_LANGUAGES.get(primary)
