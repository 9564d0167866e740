from functools import wraps
import logging

from django.http import Http404

from .context import get_variant_context
from .registry import parse_feature

logger = logging.getLogger(__name__)


def feature_required(feature):
    """
    Hide a view unless ``feature`` is enabled for the running variant.

    Disabled or unknown features answer 404 so the page does not appear to
    exist in variants that do not ship it.

        @feature_required(Feature.ADVANCED_REPORTING)
        def reports(request): ...
    """
    if parse_feature(feature) is None:
        logger.warning(f"feature_required() used with unregistered feature {feature!r}; the view will always 404")

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            context = get_variant_context()
            if not context.gate.is_enabled(feature):
                raise Http404(f"{feature} is not available in the {context.variant.value} repository")
            return view_func(request, *args, **kwargs)
        return _wrapped

    return decorator
