import asyncio
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

import aiohttp
from django.conf import settings
from loguru import logger

from .exceptions import SourceDataInvalid, SourceUnavailable
from .serializers import ExchangeRatePayloadSerializer, RestCountryPayloadSerializer


COUNTRIES_SOURCE = "Countries API"
RATES_SOURCE = "Exchange Rate API"


@dataclass(frozen=True)
class CurrencyPayload:
    code: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None


@dataclass(frozen=True)
class CountryPayload:
    name: Optional[str]
    capital: Optional[str] = None
    region: Optional[str] = None
    population: int = 0
    flag: Optional[str] = None
    currencies: List[CurrencyPayload] = field(default_factory=list)


@dataclass(frozen=True)
class RatesPayload:
    base_code: Optional[str]
    rates: Dict[str, Decimal]
    result: Optional[str] = None


# --- Parsers --- #
def parse_countries(data) -> List[CountryPayload]:
    """Turn the REST Countries JSON array into payload objects.

    Entries with wrongly typed fields are skipped; absent optional fields are not
    an error.
    """
    if not isinstance(data, list):
        raise SourceDataInvalid(COUNTRIES_SOURCE, "expected a list of countries")

    countries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping country #{index}: not an object")
            continue
        serializer = RestCountryPayloadSerializer(data=item)
        if not serializer.is_valid():
            logger.warning(f"Skipping country #{index} ({item.get('name')!r}): {serializer.errors}")
            continue
        values = serializer.validated_data
        countries.append(
            CountryPayload(
                name=values.get("name"),
                capital=values.get("capital") or None,
                region=values.get("region") or None,
                population=values.get("population") or 0,
                flag=values.get("flag") or None,
                currencies=[
                    CurrencyPayload(
                        code=currency.get("code") or None,
                        name=currency.get("name") or None,
                        symbol=currency.get("symbol") or None,
                    )
                    for currency in values.get("currencies") or []
                ],
            )
        )
    return countries


def parse_rates(data) -> RatesPayload:
    if not isinstance(data, dict):
        raise SourceDataInvalid(RATES_SOURCE, "expected an object")
    if data.get("result") == "error":
        raise SourceUnavailable(RATES_SOURCE, status=data.get("error-type"))

    serializer = ExchangeRatePayloadSerializer(data=data)
    if not serializer.is_valid():
        raise SourceDataInvalid(RATES_SOURCE, serializer.errors)
    values = serializer.validated_data
    rates = values.get("rates")
    if not rates:
        raise SourceDataInvalid(RATES_SOURCE, "rate table is empty")
    return RatesPayload(base_code=values.get("base_code"), rates=dict(rates), result=values.get("result"))


# --- Async Fetchers --- #
async def fetch_json(session, url, source):
    timeout = aiohttp.ClientTimeout(total=settings.EXTERNAL_TIMEOUT)
    try:
        async with session.get(url, timeout=timeout) as response:
            if response.status != 200:
                raise SourceUnavailable(source, status=response.status)
            return await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise SourceUnavailable(source, detail=str(exc) or exc.__class__.__name__) from exc


async def fetch_countries(session) -> List[CountryPayload]:
    data = await fetch_json(session, settings.COUNTRIES_API_URL, COUNTRIES_SOURCE)
    return parse_countries(data)


async def fetch_rates(session) -> RatesPayload:
    data = await fetch_json(session, settings.EXCHANGE_RATES_API_URL, RATES_SOURCE)
    return parse_rates(data)


async def fetch_sources():
    """Fetch REST Countries and the exchange rate table concurrently.

    Returns ``[countries, rates]``; either item may be the exception raised while
    fetching it, so the caller decides which failure wins.
    """
    async with aiohttp.ClientSession() as session:
        return await asyncio.gather(
            fetch_countries(session),
            fetch_rates(session),
            return_exceptions=True,
        )
