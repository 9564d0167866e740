from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Repository variant status + read-only API
    path('variants/', include('variants.urls')),

    # Main site
    path('', include('website.urls')),
]
