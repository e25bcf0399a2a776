from decimal import Decimal
from typing import Dict

from countries.clients import CountryPayload, CurrencyPayload, RatesPayload


class FixedRandom:
    """Stand-in RNG that always returns the same multiplier."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.value


def country(name, population=1000000, code=None, region="Americas", capital=None, currencies=None):
    if currencies is None:
        currencies = [CurrencyPayload(code=code)] if code else []
    return CountryPayload(
        name=name,
        capital=capital,
        region=region,
        population=population,
        flag=f"https://flagcdn.com/{name.lower()}.svg" if name else None,
        currencies=currencies,
    )


def rates(mapping: Dict[str, str]):
    return RatesPayload(
        base_code="USD",
        rates={code: Decimal(value) for code, value in mapping.items()},
        result="success",
    )
