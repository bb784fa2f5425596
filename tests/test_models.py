import pytest
from pydantic import ValidationError

from edgepurge.models import PurgeOutcome, PurgePagesRequest, Zone


def test_outcomes_are_immutable() -> None:
    outcome = PurgeOutcome.success()
    assert outcome.message == ""
    with pytest.raises(ValidationError):
        outcome.succeeded = False


def test_zone_ignores_extra_provider_fields() -> None:
    zone = Zone.model_validate({"id": "z1", "name": "example.com", "status": "active"})
    assert zone == Zone(id="z1", name="example.com")


def test_purge_pages_request_requires_urls() -> None:
    PurgePagesRequest(urls=["https://example.com/"])
    with pytest.raises(ValidationError):
        PurgePagesRequest(urls=[])
