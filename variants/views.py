from django.shortcuts import render
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .context import get_variant_context
from .registry import RepositoryVariant
from .serializers import FeatureStatusSerializer, VariantContextSerializer

# ====================================
# REST API VIEWS
# ====================================

class VariantDetailView(APIView):
    """API endpoint for the running repository variant (read-only)"""

    permission_classes = [AllowAny]
    http_method_names = ['get', 'head', 'options']

    def get(self, request):
        return Response(VariantContextSerializer(get_variant_context()).data)


class FeatureListView(APIView):
    """API endpoint listing every feature flag and whether it is on"""

    permission_classes = [AllowAny]
    http_method_names = ['get', 'head', 'options']

    def get(self, request):
        statuses = get_variant_context().gate.all_features()

        # Filter by enabled state
        enabled = request.query_params.get('enabled', None)
        if enabled is not None:
            wanted = enabled.lower() in ('1', 'true', 'yes')
            statuses = [s for s in statuses if s.enabled == wanted]

        return Response(FeatureStatusSerializer(statuses, many=True).data)


# ====================================
# HTML VIEWS
# ====================================

def feature_status(request):
    """Feature-status summary: every flag against every variant"""
    context = get_variant_context()
    rows = [
        {
            'status': status,
            'availability': [status.flag.availability[v] for v in RepositoryVariant],
        }
        for status in context.gate.all_features()
    ]
    return render(request, 'variants/feature_status.html', {
        'variants': [v.value for v in RepositoryVariant],
        'rows': rows,
        'branch_check': context.branch_check,
        'resolution': context.resolution,
    })
