from django.db.models import F
from django.db.models.functions import Lower

from .exceptions import NotFound, ValidationFailed
from .models import Country
from .services import WATERMARK_KEY
from .store import CatalogStore


DEFAULT_SORT = "name_asc"

# ?sort=gdp_desc, ?sort=population_asc, ?sort=name_desc
SORT_ORDERINGS = {
    "gdp_asc": [F("estimated_gdp").asc(nulls_last=True), "id"],
    "gdp_desc": [F("estimated_gdp").desc(nulls_last=True), "id"],
    "population_asc": ["population", "id"],
    "population_desc": ["-population", "id"],
    "name_asc": [Lower("name").asc(), "id"],
    "name_desc": [Lower("name").desc(), "id"],
}


def filter_countries(region=None, currency=None, sort=None):
    """Countries matching the optional filters, in the requested order.

    Unknown sort tokens fall back to ``name_asc`` instead of being rejected.
    """
    queryset = Country.objects.all()
    if region:
        queryset = queryset.filter(region__iexact=region)
    if currency:
        queryset = queryset.filter(currency_code__iexact=currency)

    ordering = SORT_ORDERINGS.get((sort or "").strip().lower(), SORT_ORDERINGS[DEFAULT_SORT])
    return queryset.order_by(*ordering)


def _require_name(name):
    if name is None or not name.strip():
        raise ValidationFailed({"name": "is required"})
    return name.strip()


def get_country(name, store=None):
    store = store or CatalogStore()
    country = store.find_by_name(_require_name(name))
    if country is None:
        raise NotFound(name)
    return country


def delete_country(name, store=None):
    store = store or CatalogStore()
    if not store.delete_by_name(_require_name(name)):
        raise NotFound(name)


def get_last_refreshed_at(store=None):
    store = store or CatalogStore()
    watermark = store.get_metadata(WATERMARK_KEY)
    return watermark.updated_at if watermark else None


def get_status(store=None):
    store = store or CatalogStore()
    return {
        "total_countries": store.count(),
        "last_refreshed_at": get_last_refreshed_at(store),
    }


def summary(top_n=5, store=None):
    """Figures for the summary image: total, top countries by GDP, watermark."""
    store = store or CatalogStore()
    return store.count(), store.top_n_by_estimated_value(top_n), get_last_refreshed_at(store)
