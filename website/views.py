# website/views.py
from django.shortcuts import render
import logging

from variants.context import get_variant_context
from variants.decorators import feature_required
from variants.registry import Feature

logger = logging.getLogger(__name__)


# ====================================
#  DASHBOARD
# ====================================
def home(request):
    gate = get_variant_context().gate

    # Panels that only some repositories ship
    context = {
        'show_experimental_panel': gate.is_enabled(Feature.EXPERIMENTAL_UI),
        'show_beta_panel': gate.is_enabled(Feature.BETA_FEATURES),
        'show_audit_notice': gate.is_enabled(Feature.AUDIT_LOGGING),
    }
    return render(request, 'website/dashboard.html', context)


# ====================================
#  REPORTS
# ====================================
@feature_required(Feature.ADVANCED_REPORTING)
def reports(request):
    logger.info(f"Advanced reports opened ({get_variant_context().variant.value} repository)")
    return render(request, 'website/reports.html')
