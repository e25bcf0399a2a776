import pytest
from decimal import Decimal
from django.db import IntegrityError, transaction
from django.utils import timezone

from countries.exceptions import NotFound, ValidationFailed
from countries.models import Country
from countries.queries import delete_country, filter_countries, get_country, get_status, summary
from countries.services import refresh_country_data


@pytest.fixture
def catalog(db):
    now = timezone.now()
    rows = [
        ("Nigeria", "Africa", 206000000, "NGN", Decimal("150000000.00")),
        ("Ghana", "Africa", 31000000, "GHS", Decimal("4000000000.00")),
        ("japan", "Asia", 126000000, "JPY", Decimal("1600000000.00")),
        ("Brazil", "Americas", 212000000, "BRL", None),
        ("Canada", "Americas", 37000000, "CAD", Decimal("40000000000.00")),
    ]
    return [
        Country.objects.create(
            name=name, region=region, population=population,
            currency_code=code, estimated_gdp=gdp, last_refreshed_at=now,
        )
        for name, region, population, code, gdp in rows
    ]


def names(queryset):
    return [c.name for c in queryset]


def test_default_order_is_name_ascending(catalog):
    assert names(filter_countries()) == ["Brazil", "Canada", "Ghana", "japan", "Nigeria"]


def test_unrecognized_sort_falls_back_to_name(catalog):
    assert names(filter_countries(sort="area_desc")) == names(filter_countries())
    assert names(filter_countries(sort="")) == names(filter_countries())


def test_population_desc(catalog):
    populations = [c.population for c in filter_countries(sort="population_desc")]

    assert populations == sorted(populations, reverse=True)


def test_population_asc(catalog):
    assert names(filter_countries(sort="population_asc"))[0] == "Ghana"


def test_name_desc(catalog):
    assert names(filter_countries(sort="name_desc")) == ["Nigeria", "japan", "Ghana", "Canada", "Brazil"]


def test_gdp_sorts_put_unknown_values_last(catalog):
    assert names(filter_countries(sort="gdp_desc")) == ["Canada", "Ghana", "japan", "Nigeria", "Brazil"]
    assert names(filter_countries(sort="gdp_asc")) == ["Nigeria", "japan", "Ghana", "Canada", "Brazil"]


def test_filter_by_region_is_case_insensitive(catalog):
    assert names(filter_countries(region="africa")) == ["Ghana", "Nigeria"]
    assert names(filter_countries(region="AFRICA")) == ["Ghana", "Nigeria"]


def test_filters_combine(catalog):
    assert names(filter_countries(region="Africa", currency="ngn")) == ["Nigeria"]
    assert names(filter_countries(region="Asia", currency="NGN")) == []


@pytest.mark.parametrize("name", ["Japan", "japan", "JAPAN", "  Japan "])
def test_get_country_is_case_insensitive(catalog, name):
    assert get_country(name).name == "japan"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_get_country_requires_name(catalog, name):
    with pytest.raises(ValidationFailed) as excinfo:
        get_country(name)

    assert excinfo.value.details == {"name": "is required"}


def test_get_country_not_found(catalog):
    with pytest.raises(NotFound):
        get_country("Atlantis")


def test_delete_country(catalog):
    delete_country("CANADA")

    assert not Country.objects.filter(name="Canada").exists()
    with pytest.raises(NotFound):
        delete_country("Canada")


@pytest.mark.django_db
def test_status_before_any_refresh():
    assert get_status() == {"total_countries": 0, "last_refreshed_at": None}


@pytest.mark.django_db
def test_status_reports_watermark(sources):
    result = refresh_country_data()

    assert get_status() == {"total_countries": 5, "last_refreshed_at": result.last_refreshed_at}


def test_summary_lists_top_countries(catalog):
    total, top, last_refreshed_at = summary(top_n=2)

    assert total == 5
    assert [c.name for c in top] == ["Canada", "Ghana"]
    assert last_refreshed_at is None


@pytest.mark.django_db
@pytest.mark.parametrize("name", ["Åland Islands", "åland islands", "ÅLAND ISLANDS"])
def test_get_country_folds_non_ascii_case(name):
    Country.objects.create(name="Åland Islands", population=29000, last_refreshed_at=timezone.now())

    assert get_country(name).name == "Åland Islands"


@pytest.mark.django_db
def test_case_variant_names_cannot_both_be_stored():
    Country.objects.create(name="Côte d'Ivoire", population=1, last_refreshed_at=timezone.now())

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Country.objects.create(name="CÔTE D'IVOIRE", population=1, last_refreshed_at=timezone.now())

    assert Country.objects.count() == 1


@pytest.mark.django_db
def test_delete_country_folds_non_ascii_case():
    Country.objects.create(name="Curaçao", population=1, last_refreshed_at=timezone.now())

    delete_country("CURAÇAO")

    assert not Country.objects.exists()
