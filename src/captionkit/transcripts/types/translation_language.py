"""Translation target language type."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranslationLanguage:
    """A language a caption track can be machine translated into.

    Attributes:
        language: Display name (e.g., "Spanish").
        language_code: Language code (e.g., "es").
    """

    language: str
    language_code: str
