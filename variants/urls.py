from django.urls import path
from . import views

app_name = 'variants'

urlpatterns = [
    # ============================================
    # REST API ENDPOINTS
    # ============================================
    path('api/variant/', views.VariantDetailView.as_view(), name='variant-api'),
    path('api/features/', views.FeatureListView.as_view(), name='feature-list-api'),

    # ============================================
    # HTML
    # ============================================
    path('status/', views.feature_status, name='feature-status'),
]
