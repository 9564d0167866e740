# variants/context.py
"""
The process-wide VariantContext.

Resolution runs once (normally from VariantsConfig.ready()) and the result is
kept on the app config. Everything else - context processors, views, API,
decorators - asks get_variant_context() for it instead of re-resolving.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.apps import apps

from .branch import BranchCheck, check_branch_consistency
from .conf import get_variant_settings
from .gate import FeatureGate
from .registry import RepositoryVariant
from .resolver import Resolution, VariantResolver
from .signals import variant_resolved
from .version import VersionInfo, build_version_info


@dataclass(frozen=True)
class VariantContext:
    resolution: Resolution
    branch_check: BranchCheck
    version_info: VersionInfo
    gate: FeatureGate

    @property
    def variant(self) -> RepositoryVariant:
        return self.resolution.variant


def build_variant_context(resolver=None, variant_settings=None, adopt_marker=True) -> VariantContext:
    """
    Run a full resolution and wrap the result. Does not cache.

    ``adopt_marker`` is passed to the resolver built here; it is ignored when
    a resolver is given.
    """
    variant_settings = variant_settings or get_variant_settings()
    resolver = resolver or VariantResolver.from_settings(variant_settings, adopt_marker=adopt_marker)

    resolution = resolver.detect()
    branch_check = check_branch_consistency(resolution.variant, resolution.branch)

    variant_resolved.send(
        sender=VariantContext,
        resolution=resolution,
        branch_check=branch_check,
    )

    return VariantContext(
        resolution=resolution,
        branch_check=branch_check,
        version_info=build_version_info(resolution.variant, variant_settings),
        gate=FeatureGate(resolution.variant),
    )


def get_variant_context() -> VariantContext:
    """The context owned by the variants app, built on first use if startup skipped it."""
    config = apps.get_app_config('variants')
    if config.variant_context is None:
        config.variant_context = build_variant_context()
    return config.variant_context


def reset_variant_context():
    """Forget the cached context so the next lookup resolves again."""
    apps.get_app_config('variants').variant_context = None
