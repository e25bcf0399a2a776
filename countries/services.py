import asyncio
import random
import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from django.utils import timezone
from loguru import logger

from .clients import CountryPayload, RatesPayload, fetch_sources
from .exceptions import NoData, SourceUnavailable
from .store import CatalogStore, CountryRecord


WATERMARK_KEY = "last_refreshed_at"
MULTIPLIER_RANGE = (1000, 2000)

GDP_PLACES = Decimal("0.01")
RATE_PLACES = Decimal("0.000001")

_random = random.Random()
_refresh_lock = threading.Lock()


@dataclass
class RefreshResult:
    processed: int
    created: int
    updated: int
    total: int
    last_refreshed_at: datetime


# --- Policies --- #
def canonical_currency_code(country: CountryPayload) -> Optional[str]:
    """Only the first listed currency is kept; the rest are dropped."""
    if not country.currencies:
        return None
    return country.currencies[0].code


def make_multiplier(rng=None) -> int:
    return (rng or _random).randint(*MULTIPLIER_RANGE)


def compute_estimated_gdp(population, exchange_rate, rng=None) -> Decimal:
    """Placeholder economic figure: population * random(1000..2000) / rate.

    Not a real GDP statistic and not reproducible between runs unless ``rng``
    is pinned.
    """
    multiplier = make_multiplier(rng)
    value = (Decimal(population) * multiplier) / exchange_rate
    return value.quantize(GDP_PLACES, rounding=ROUND_HALF_UP)


def reconcile_country(country: CountryPayload, rates, rng=None) -> CountryRecord:
    """Join one source country against the rate table."""
    record = CountryRecord(
        name=country.name.strip(),
        capital=country.capital,
        region=country.region,
        population=country.population,
        flag_url=country.flag,
    )

    if not country.currencies:
        record.estimated_gdp = Decimal("0")
        return record

    record.currency_code = canonical_currency_code(country)
    rate = rates.get(record.currency_code) if record.currency_code else None
    if rate is not None and rate > 0:
        record.exchange_rate = rate.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)
        record.estimated_gdp = compute_estimated_gdp(record.population, rate, rng)
    return record


def reconcile(countries: List[CountryPayload], rates: RatesPayload, rng=None) -> List[CountryRecord]:
    records = []
    for country in countries:
        if not country.name or not country.name.strip():
            logger.debug("Skipping country without a name")
            continue
        records.append(reconcile_country(country, rates.rates, rng))
    return records


# --- Core Refresh Function --- #
def load_sources():
    """Fetch both sources and raise the first failure in source order."""
    countries, rates = asyncio.run(fetch_sources())

    if isinstance(countries, BaseException):
        raise countries
    if not countries:
        raise NoData("No countries data received from Countries API")
    if isinstance(rates, BaseException):
        raise rates
    return countries, rates


def refresh_country_data(store=None, rng=None) -> RefreshResult:
    """
    Refresh every country from the REST Countries and Exchange Rate APIs.

    Nothing is written unless both sources load. The batch upsert and the
    watermark write share one transaction, and every touched row gets the same
    ``last_refreshed_at``.
    """
    store = store or CatalogStore()

    with _refresh_lock:
        logger.info("Starting country refresh")
        try:
            countries, rates = load_sources()
        except SourceUnavailable as e:
            logger.warning(f"Country refresh aborted: {e}")
            raise
        except NoData as e:
            logger.error(f"Country refresh aborted: {e}")
            raise

        refresh_time = timezone.now()
        records = reconcile(countries, rates, rng)

        with store.atomic():
            created, updated = store.upsert_batch(records, refresh_time)
            store.set_metadata(WATERMARK_KEY, refresh_time.isoformat(), refresh_time)
            total = store.count()

        logger.info(
            f"Refreshed {len(records)} countries "
            f"({created} created, {updated} updated, {total} total)"
        )
        return RefreshResult(
            processed=len(records),
            created=created,
            updated=updated,
            total=total,
            last_refreshed_at=refresh_time,
        )
