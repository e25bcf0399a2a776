from rest_framework import generics, status
from rest_framework.views import APIView
from rest_framework.response import Response
from django.http import FileResponse
from loguru import logger
from .exceptions import NoData, NotFound, SourceUnavailable, ValidationFailed
from .serializers import CountrySerializer, RefreshResultSerializer, StatusSerializer
from .services import refresh_country_data
from .queries import delete_country, filter_countries, get_country, get_status, summary
from .image_utils import generate_summary_image, summary_image_path
import os


INTERNAL_ERROR = {"error": "Internal server error"}
COUNTRY_NOT_FOUND = {"error": "Country not found"}


def validation_failed(e):
    return Response(
        {"error": "Validation failed", "details": e.details},
        status=status.HTTP_400_BAD_REQUEST
    )


# -----------------------------------------------------------
# GET /countries → list all countries (with filter/sort)
# -----------------------------------------------------------
class CountryListView(generics.ListAPIView):
    serializer_class = CountrySerializer

    def get_queryset(self):
        params = self.request.query_params
        return filter_countries(
            region=params.get('region'),
            currency=params.get('currency'),
            sort=params.get('sort'),
        )


# -----------------------------------------------------------
# GET /countries/:name → retrieve a country by name
# DELETE /countries/:name → delete a country
# -----------------------------------------------------------
class CountryDetailView(APIView):
    def get(self, request, name):
        try:
            country = get_country(name)
        except ValidationFailed as e:
            return validation_failed(e)
        except NotFound:
            return Response(COUNTRY_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CountrySerializer(country).data)

    def delete(self, request, name):
        try:
            delete_country(name)
        except ValidationFailed as e:
            return validation_failed(e)
        except NotFound:
            return Response(COUNTRY_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        logger.info(f"Deleted country {name!r}")
        return Response(status=status.HTTP_204_NO_CONTENT)


# -----------------------------------------------------------
# POST /countries/refresh → refresh all data
# -----------------------------------------------------------
class CountryRefreshView(APIView):
    def post(self, request):
        try:
            result = refresh_country_data()
            generate_summary_image(*summary())
        except SourceUnavailable as e:
            return Response(
                {"error": "External data source unavailable", "details": f"Could not fetch data from {e.source}"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        except NoData:
            return Response(INTERNAL_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:
            logger.exception("Country refresh failed")
            return Response(INTERNAL_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        data = {"message": "Data refreshed successfully"}
        data.update(RefreshResultSerializer(result).data)
        return Response(data, status=status.HTTP_200_OK)


# -----------------------------------------------------------
# GET /status → show catalog summary
# -----------------------------------------------------------
class StatusView(APIView):
    def get(self, request):
        serializer = StatusSerializer(get_status())
        return Response(serializer.data, status=status.HTTP_200_OK)


# -----------------------------------------------------------
# GET /countries/image → serve summary image
# -----------------------------------------------------------
class CountryImageView(APIView):
    def get(self, request):
        image_path = summary_image_path()
        if os.path.exists(image_path):
            return FileResponse(open(image_path, 'rb'), content_type='image/png')
        return Response(
            {"error": "Summary image not found"},
            status=status.HTTP_404_NOT_FOUND
        )
