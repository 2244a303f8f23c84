"""
Dangerous-content classifier for product listings.

A listing is dangerous when its case-folded ``name + " " + description``
contains any banned word as a substring, or any profanity-list word as a
whole word. The word lists come from settings and are frozen into a
``Classifier`` value that callers receive as a dependency.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple

from safetrade.config import Settings, settings as default_settings


def _normalise(words: Iterable[str]) -> Tuple[str, ...]:
    cleaned = {w.strip().lower() for w in words if w and w.strip()}
    return tuple(sorted(cleaned))


@dataclass(frozen=True)
class ProfanityFilter:
    words: Tuple[str, ...]
    _pattern: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        words = _normalise(self.words)
        object.__setattr__(self, "words", words)
        if words:
            pattern = re.compile(
                r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b",
                re.IGNORECASE,
            )
            object.__setattr__(self, "_pattern", pattern)

    def check(self, text: str) -> bool:
        if self._pattern is None:
            return False
        return self._pattern.search(text or "") is not None


@dataclass(frozen=True)
class Classifier:
    banned_words: Tuple[str, ...]
    profanity: ProfanityFilter

    @classmethod
    def build(cls, banned_words: Iterable[str], profanity_words: Iterable[str]) -> "Classifier":
        return cls(
            banned_words=_normalise(banned_words),
            profanity=ProfanityFilter(tuple(profanity_words)),
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "Classifier":
        return cls.build(config.MODERATION_BANNED_WORDS, config.MODERATION_PROFANITY_WORDS)

    @staticmethod
    def listing_text(name: Optional[str], description: Optional[str]) -> str:
        return f"{name or ''} {description or ''}".lower()

    def has_banned_word(self, text: str) -> bool:
        return any(word in text for word in self.banned_words)

    def is_dangerous(self, name: Optional[str], description: Optional[str]) -> bool:
        text = self.listing_text(name, description)
        return self.has_banned_word(text) or self.profanity.check(text)


@lru_cache
def get_classifier() -> Classifier:
    """FastAPI dependency returning the classifier built from settings."""
    return Classifier.from_settings(default_settings)
