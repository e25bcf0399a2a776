from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from django.db import transaction

from .models import Country, SystemMetadata, country_name_key


UPDATE_FIELDS = [
    "capital",
    "region",
    "population",
    "currency_code",
    "exchange_rate",
    "estimated_gdp",
    "flag_url",
    "last_refreshed_at",
]


@dataclass
class CountryRecord:
    """Reconciled values for one country, ready to be written."""
    name: str
    capital: Optional[str] = None
    region: Optional[str] = None
    population: int = 0
    currency_code: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    estimated_gdp: Optional[Decimal] = None
    flag_url: Optional[str] = None


class CatalogStore:
    """Every read and write the refresh pipeline makes against the database."""

    def atomic(self):
        return transaction.atomic()

    def find_by_name(self, name) -> Optional[Country]:
        return Country.objects.filter(name_key=country_name_key(name)).first()

    def upsert_batch(self, records: Iterable[CountryRecord], refreshed_at) -> Tuple[int, int]:
        """Create or update countries by case-insensitive name.

        Existing rows keep their primary key. Returns ``(created, updated)``.
        """
        existing = {c.name_key: c for c in Country.objects.all()}
        new_countries = {}
        updated_countries = {}

        for record in records:
            key = country_name_key(record.name)
            obj = existing.get(key)
            if obj is None:
                obj = new_countries.get(key)
            if obj is None:
                new_countries[key] = Country(name=record.name, name_key=key, last_refreshed_at=refreshed_at)
                obj = new_countries[key]
            elif key in existing:
                updated_countries[key] = obj

            obj.capital = record.capital
            obj.region = record.region
            obj.population = record.population
            obj.currency_code = record.currency_code
            obj.exchange_rate = record.exchange_rate
            obj.estimated_gdp = record.estimated_gdp
            obj.flag_url = record.flag_url
            obj.last_refreshed_at = refreshed_at

        if new_countries:
            Country.objects.bulk_create(new_countries.values(), batch_size=100)
        if updated_countries:
            Country.objects.bulk_update(updated_countries.values(), UPDATE_FIELDS, batch_size=100)
        return len(new_countries), len(updated_countries)

    def delete_by_name(self, name) -> bool:
        deleted, _ = Country.objects.filter(name_key=country_name_key(name)).delete()
        return deleted > 0

    def count(self) -> int:
        return Country.objects.count()

    def top_n_by_estimated_value(self, n) -> List[Country]:
        return list(
            Country.objects.filter(estimated_gdp__isnull=False).order_by("-estimated_gdp", "id")[:n]
        )

    def get_metadata(self, key) -> Optional[SystemMetadata]:
        return SystemMetadata.objects.filter(key_name=key).first()

    def set_metadata(self, key, value, timestamp) -> SystemMetadata:
        obj, _ = SystemMetadata.objects.update_or_create(
            key_name=key,
            defaults={"key_value": value, "updated_at": timestamp},
        )
        return obj
