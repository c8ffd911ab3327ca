"""Keyword heuristic deciding which skills apply to a request."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pattern_skills.skills.load import SkillDocument

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class TriggerMatch:
    """A skill that applies to an utterance, with the terms that matched."""

    skill: SkillDocument
    matched: tuple[str, ...]

    @property
    def score(self) -> int:
        return len(self.matched)


_ES_PLURAL_SUFFIXES = ("sses", "xes", "ches", "shes")


def _normalize_token(token: str) -> str:
    # "factories" -> "factory", "addresses" -> "address", "constructors" -> "constructor"
    if len(token) > 4 and token.endswith("ies"):
        return token[:-3] + "y"
    if token.endswith(_ES_PLURAL_SUFFIXES):
        return token[:-2]
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def tokenize(text: str) -> tuple[str, ...]:
    """Lowercase text and split it into normalized word tokens."""
    return tuple(_normalize_token(t) for t in _TOKEN_PATTERN.findall(text.lower()))


def trigger_terms(skill: SkillDocument) -> tuple[str, ...]:
    """Terms that make a skill applicable: its triggers, then its name."""
    terms = list(skill.triggers)
    name_term = skill.name.replace("-", " ").replace("_", " ")
    if name_term.lower() not in (t.lower() for t in terms):
        terms.append(name_term)
    return tuple(terms)


def _contains_sequence(haystack: tuple[str, ...], needle: tuple[str, ...]) -> bool:
    if not needle or len(needle) > len(haystack):
        return False
    width = len(needle)
    return any(
        haystack[i : i + width] == needle for i in range(len(haystack) - width + 1)
    )


def match_skill(utterance: str, skill: SkillDocument) -> TriggerMatch | None:
    """Match one skill against an utterance.

    A term matches when its tokens appear contiguously in the utterance.

    Returns:
        TriggerMatch listing matched terms, or None when nothing matched
    """
    tokens = tokenize(utterance)
    if not tokens:
        return None

    matched = tuple(
        term for term in trigger_terms(skill) if _contains_sequence(tokens, tokenize(term))
    )
    if not matched:
        return None
    return TriggerMatch(skill=skill, matched=matched)
