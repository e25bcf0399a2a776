"""
URL configuration for the country_catalog project.

GET  /status
GET  /countries
POST /countries/refresh
GET  /countries/image
GET  /countries/<name>
DELETE /countries/<name>
"""
from django.urls import path, include
from django.http import JsonResponse

urlpatterns = [
    path('', include('countries.urls')),
]


def custom_404(request, exception):
    return JsonResponse({"error": "Endpoint not found, try /countries or /status"}, status=404)


def custom_500(request):
    return JsonResponse({"error": "Internal server error"}, status=500)


handler404 = "country_catalog.urls.custom_404"
handler500 = "country_catalog.urls.custom_500"
