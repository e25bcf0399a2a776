import pytest

from tests.helpers import FixedRandom, country, rates


@pytest.fixture(autouse=True)
def summary_image_path(settings, tmp_path):
    settings.SUMMARY_IMAGE_PATH = tmp_path / "cache" / "summary.png"
    return settings.SUMMARY_IMAGE_PATH


@pytest.fixture
def source_data():
    return {
        "countries": [
            country("Canada", 37000000, "CAD", capital="Ottawa"),
            country("Japan", 126000000, "JPY", region="Asia", capital="Tokyo"),
            country("Nigeria", 206000000, "NGN", region="Africa", capital="Abuja"),
            country("Atlantis", 5000, "XAT", region="Oceania"),
            country("Antarctica", 1000, region="Polar"),
        ],
        "rates": rates({"USD": "1", "CAD": "1.35", "JPY": "150.5", "NGN": "1600"}),
    }


@pytest.fixture
def sources(monkeypatch, source_data):
    """Replace both upstream fetches with ``source_data``.

    Tests may mutate the dict, or put an exception in it, before refreshing.
    """
    async def fake_fetch_sources():
        return [source_data["countries"], source_data["rates"]]

    monkeypatch.setattr("countries.services.fetch_sources", fake_fetch_sources)
    return source_data


@pytest.fixture
def fixed_random():
    return FixedRandom(1000)
