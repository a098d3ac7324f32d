"""
passquality.evaluator

Password quality scorer (0 = unusable, 10 = best):
- profile_password(password): per-class character counts and unique chars
- char_diversity_quality / char_type_diversity_quality / length_quality /
  known_quality: the four independent sub-scores
- score(password, lookup): returns an immutable QualityReport whose final
  quality is the lowest of the four sub-scores (weakest link)
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from .toplists import KnownListTier, KnownPasswordLookup, lookup_tier

# Scores above this value are acceptable, everything else is weak.
ACCEPTABLE_THRESHOLD = 5

# unique char count -> quality; 8 or more unique chars score 10
CHAR_DIVERSITY_QUALITIES = {0: 0, 1: 1, 2: 2, 3: 3, 4: 5, 5: 6, 6: 8, 7: 9}

KNOWN_QUALITIES = {
    KnownListTier.TOP10: 1,
    KnownListTier.TOP25: 3,
    KnownListTier.TOP50: 5,
    KnownListTier.NONE: 10,
}


@dataclass(frozen=True)
class CharacterProfile:
    """Character class counts of a single password."""
    length: int = 0
    unique_chars: FrozenSet[str] = field(default_factory=frozenset)
    lowercase: int = 0
    uppercase: int = 0
    digits: int = 0
    others: int = 0

    @property
    def unique_count(self) -> int:
        return len(self.unique_chars)


def profile_password(password: str) -> CharacterProfile:
    """
    Count lowercase, uppercase, digit and other characters.

    Only ASCII a-z, A-Z and 0-9 are letters/digits here; accented letters,
    other scripts, symbols and whitespace are all "other". Python strings
    iterate by code point, so multi-byte characters count once.
    """
    lower = upper = digits = 0
    for c in password:
        if "a" <= c <= "z":
            lower += 1
        elif "A" <= c <= "Z":
            upper += 1
        elif "0" <= c <= "9":
            digits += 1
    length = len(password)
    return CharacterProfile(
        length=length,
        unique_chars=frozenset(password),
        lowercase=lower,
        uppercase=upper,
        digits=digits,
        others=length - lower - upper - digits,
    )


def char_diversity_quality(unique_count: int) -> int:
    return CHAR_DIVERSITY_QUALITIES.get(unique_count, 10)


def char_type_diversity_quality(profile: CharacterProfile) -> int:
    """+2 per upper/lower/digit class present, +4 if any other char is present."""
    quality = 0
    if profile.uppercase > 0:
        quality += 2
    if profile.lowercase > 0:
        quality += 2
    if profile.digits > 0:
        quality += 2
    if profile.others > 0:
        quality += 4
    return quality


def length_quality(length: int) -> int:
    """0 for 0-1 chars, then one point per extra char, capped at 10 from 11 chars on."""
    if length < 2:
        return 0
    return min(length - 1, 10)


def known_quality(tier: KnownListTier) -> int:
    return KNOWN_QUALITIES[tier]


@dataclass(frozen=True)
class QualityReport:
    """
    Result of scoring one password. All values are computed once by build()
    and never change afterwards.
    """
    profile: CharacterProfile
    char_diversity_quality: int
    char_type_diversity_quality: int
    length_quality: int
    known_quality: int
    top_list_tier: KnownListTier
    quality: int

    @classmethod
    def build(cls, password: str, tier: KnownListTier) -> "QualityReport":
        profile = profile_password(password)
        diversity = char_diversity_quality(profile.unique_count)
        type_diversity = char_type_diversity_quality(profile)
        length_q = length_quality(profile.length)
        known = known_quality(tier)
        return cls(
            profile=profile,
            char_diversity_quality=diversity,
            char_type_diversity_quality=type_diversity,
            length_quality=length_q,
            known_quality=known,
            top_list_tier=tier,
            quality=min(known, diversity, type_diversity, length_q),
        )

    # read accessors over the profile

    @property
    def length(self) -> int:
        return self.profile.length

    @property
    def unique_chars(self) -> FrozenSet[str]:
        return self.profile.unique_chars

    @property
    def unique_count(self) -> int:
        return self.profile.unique_count

    @property
    def lowercase(self) -> int:
        return self.profile.lowercase

    @property
    def uppercase(self) -> int:
        return self.profile.uppercase

    @property
    def digits(self) -> int:
        return self.profile.digits

    @property
    def others(self) -> int:
        return self.profile.others

    def is_acceptable(self, threshold: int = ACCEPTABLE_THRESHOLD) -> bool:
        return self.quality > threshold

    def to_dict(self) -> Dict:
        """
        JSON-friendly view of the report. The password and its unique
        characters are not included.
        """
        return {
            "length": self.length,
            "unique_count": self.unique_count,
            "lowercase": self.lowercase,
            "uppercase": self.uppercase,
            "digits": self.digits,
            "others": self.others,
            "char_diversity_quality": self.char_diversity_quality,
            "char_type_diversity_quality": self.char_type_diversity_quality,
            "length_quality": self.length_quality,
            "known_quality": self.known_quality,
            "top_list": int(self.top_list_tier),
            "quality": self.quality,
        }


def score(password: str, lookup: KnownPasswordLookup) -> QualityReport:
    """
    Score a password against the given known-password lookup.

    Raises LookupUnavailable when the lookup fails; a failed lookup is never
    treated as "not in any list".
    """
    tier = lookup_tier(password, lookup)
    return QualityReport.build(password, tier)
