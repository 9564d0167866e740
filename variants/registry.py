# variants/registry.py
"""
Repository variants and the feature availability table.

Every optional feature is declared exactly once here, together with an
explicit True/False for each of the three repository variants. The table is
checked when this module is imported, so a missing entry fails at startup
instead of silently defaulting somewhere in a template.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from django.core.exceptions import ImproperlyConfigured


# ============================================
# REPOSITORY VARIANTS
# ============================================

class RepositoryVariant(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    SANDBOX = "sandbox"

    def __str__(self):
        return self.value


DEFAULT_VARIANT = RepositoryVariant.PRIVATE

VARIANT_CHOICES = tuple(v.value for v in RepositoryVariant)


def parse_variant(value) -> RepositoryVariant | None:
    """
    Normalize a raw token into a RepositoryVariant.

    Surrounding whitespace is ignored and matching is case-insensitive.
    Returns None for anything that is not one of the three identifiers.
    """
    if isinstance(value, RepositoryVariant):
        return value
    if not isinstance(value, str):
        return None

    token = value.strip().lower()
    try:
        return RepositoryVariant(token)
    except ValueError:
        return None


# ============================================
# FEATURES
# ============================================

class Feature(str, Enum):
    ADVANCED_REPORTING = "ADVANCED_REPORTING"
    EXPERIMENTAL_UI = "EXPERIMENTAL_UI"
    PRIVACY_AGREEMENTS = "PRIVACY_AGREEMENTS"
    AUDIT_LOGGING = "AUDIT_LOGGING"
    BETA_FEATURES = "BETA_FEATURES"

    def __str__(self):
        return self.value


def parse_feature(value) -> Feature | None:
    """Look up a Feature by member or by name; None if it is not registered."""
    if isinstance(value, Feature):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Feature(value.strip().upper())
    except ValueError:
        return None


@dataclass(frozen=True)
class FeatureFlag:
    """A named optional capability and the variants it ships in."""

    key: Feature
    title: str
    description: str
    availability: Mapping[RepositoryVariant, bool]

    def is_available_in(self, variant: RepositoryVariant) -> bool:
        return self.availability[variant] is True

    def to_dict(self):
        return {
            "key": self.key.value,
            "title": self.title,
            "description": self.description,
            "availability": {v.value: self.availability[v] for v in RepositoryVariant},
        }


def _flag(key, title, description, *, private, public, sandbox):
    return FeatureFlag(
        key=key,
        title=title,
        description=description,
        availability=MappingProxyType({
            RepositoryVariant.PRIVATE: private,
            RepositoryVariant.PUBLIC: public,
            RepositoryVariant.SANDBOX: sandbox,
        }),
    )


_DECLARED_FLAGS = (
    _flag(
        Feature.ADVANCED_REPORTING,
        "Advanced Reporting",
        "Advanced reporting and analytics features",
        private=True, public=False, sandbox=True,
    ),
    _flag(
        Feature.EXPERIMENTAL_UI,
        "Experimental UI",
        "New experimental user interface components",
        private=True, public=False, sandbox=True,
    ),
    _flag(
        Feature.PRIVACY_AGREEMENTS,
        "Privacy Agreements",
        "Privacy agreement tracking and management",
        private=True, public=True, sandbox=True,
    ),
    _flag(
        Feature.AUDIT_LOGGING,
        "Audit Logging",
        "Detailed audit logging of all system actions",
        private=True, public=True, sandbox=True,
    ),
    _flag(
        Feature.BETA_FEATURES,
        "Beta Features",
        "Upcoming features in beta testing",
        private=True, public=False, sandbox=True,
    ),
)


def validate_registry(flags) -> Mapping[Feature, FeatureFlag]:
    """
    Check a sequence of FeatureFlags and index it by key.

    Raises ImproperlyConfigured when:
    - a Feature is declared twice or not at all
    - an availability map is missing a variant or holds a non-bool
    """
    registry = {}
    for flag in flags:
        if flag.key in registry:
            raise ImproperlyConfigured(f"Feature {flag.key.value} is declared more than once")

        missing = [v.value for v in RepositoryVariant if v not in flag.availability]
        if missing:
            raise ImproperlyConfigured(
                f"Feature {flag.key.value} has no availability declared for: {', '.join(missing)}"
            )
        extra = [v for v in flag.availability if not isinstance(v, RepositoryVariant)]
        if extra:
            raise ImproperlyConfigured(
                f"Feature {flag.key.value} declares availability for unknown variants: {extra!r}"
            )
        not_bool = [v.value for v, on in flag.availability.items() if not isinstance(on, bool)]
        if not_bool:
            raise ImproperlyConfigured(
                f"Feature {flag.key.value} availability must be True/False for: {', '.join(not_bool)}"
            )
        registry[flag.key] = flag

    undeclared = [f.value for f in Feature if f not in registry]
    if undeclared:
        raise ImproperlyConfigured(f"Features missing from the registry: {', '.join(undeclared)}")

    return MappingProxyType(registry)


FEATURE_FLAGS = validate_registry(_DECLARED_FLAGS)


# ============================================
# LOOKUPS
# ============================================

def get_feature_flag(feature) -> FeatureFlag | None:
    key = parse_feature(feature)
    if key is None:
        return None
    return FEATURE_FLAGS[key]


def availability(feature, variant) -> bool | None:
    """
    Whether ``feature`` ships in ``variant``.

    Returns None (the "unknown feature" answer) when the feature is not
    registered or the variant is not valid. Callers decide how to default.
    """
    flag = get_feature_flag(feature)
    variant = parse_variant(variant)
    if flag is None or variant is None:
        return None
    return flag.is_available_in(variant)


def all_features() -> list[FeatureFlag]:
    """All declared flags, in declaration order."""
    return list(FEATURE_FLAGS.values())
