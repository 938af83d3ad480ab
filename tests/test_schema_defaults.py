"""Form defaults taken from settings."""
from app.config.settings import get_settings
from app.schemas.catalog import ServicePayload, SessionPayload
from app.schemas.program import ProgramPayload

settings = get_settings()


def test_program_defaults_from_settings():
    payload = ProgramPayload()

    assert payload.duration == settings.default_program_duration
    assert payload.currency == settings.default_currency


def test_catalog_currency_from_settings():
    assert SessionPayload().currency == settings.default_currency
    assert ServicePayload().currency == settings.default_currency


def test_explicit_values_win():
    payload = ProgramPayload(duration=21, currency="USD")

    assert payload.duration == 21
    assert payload.currency == "USD"
