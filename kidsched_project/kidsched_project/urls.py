from django.contrib import admin
from django.urls import path


urlpatterns = [
    # DJANGO ADMIN (OPERATORS ONLY)
    path("django/admin/", admin.site.urls),
]
