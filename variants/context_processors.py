# ====================================
#  IMPORTS
# ====================================
from .context import get_variant_context
from .registry import all_features


# ====================================
#  FEATURE FLAGS
# ====================================
def feature_flags(request):
    """
    Make the repository variant and feature flags available to all templates.

    ``features`` is read-only; a key that is not registered renders as an
    empty (falsy) value, so ``{% if features.UNKNOWN %}`` stays closed.
    """
    context = get_variant_context()
    return {
        'repository_variant': context.variant.value,
        'version_info': context.version_info,
        'features': context.gate.as_template_flags(),
        'feature_statuses': context.gate.all_features(),
        'feature_registry': {flag.key.value: flag.to_dict()['availability'] for flag in all_features()},
    }
