# variants/gate.py
"""
Feature gating for one resolved repository variant.

Unknown feature keys are never enabled: every query that cannot be matched
against the registry answers False.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType

from .registry import (
    Feature,
    FeatureFlag,
    RepositoryVariant,
    all_features,
    availability,
    get_feature_flag,
    parse_variant,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureStatus:
    flag: FeatureFlag
    enabled: bool
    variant: RepositoryVariant

    @property
    def key(self):
        return self.flag.key

    @property
    def title(self):
        return self.flag.title

    @property
    def description(self):
        return self.flag.description

    def to_dict(self):
        return {**self.flag.to_dict(), "enabled": self.enabled, "variant": self.variant.value}


class FeatureGate:
    """Answers feature queries for a fixed variant. There is no way to flip a feature here."""

    __slots__ = ("_variant",)

    def __init__(self, variant):
        resolved = parse_variant(variant)
        if resolved is None:
            raise ValueError(f"Unknown repository variant: {variant!r}")
        self._variant = resolved

    @property
    def variant(self) -> RepositoryVariant:
        return self._variant

    def is_available_in(self, feature, variant) -> bool:
        answer = availability(feature, variant)
        if answer is None:
            logger.debug(f"Feature query for unknown key {feature!r} / variant {variant!r}; treating as disabled")
            return False
        return answer

    def is_enabled(self, feature) -> bool:
        return self.is_available_in(feature, self._variant)

    def enabled_features(self) -> frozenset[Feature]:
        return frozenset(flag.key for flag in all_features() if flag.is_available_in(self._variant))

    def get_feature_config(self, feature) -> FeatureFlag | None:
        return get_feature_flag(feature)

    def all_features(self) -> list[FeatureStatus]:
        return [
            FeatureStatus(flag=flag, enabled=flag.is_available_in(self._variant), variant=self._variant)
            for flag in all_features()
        ]

    def as_template_flags(self):
        """Read-only ``{"ADVANCED_REPORTING": True, ...}`` for templates."""
        return MappingProxyType({
            flag.key.value: flag.is_available_in(self._variant) for flag in all_features()
        })

    def __repr__(self):
        return f"<FeatureGate variant={self._variant.value}>"
