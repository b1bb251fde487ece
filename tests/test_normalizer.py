from datetime import datetime, timezone

from worldevents.ingestion import Enclosure
from worldevents.pipeline import (
    EnclosureImageStrategy,
    ImageStrategy,
    MediaContentImageStrategy,
    make_event_id,
    normalize_event,
    normalize_whitespace,
    resolve_image,
)
from worldevents.pipeline.normalizer import resolve_published_at

from .conftest import make_item


def test_normalize_event_builds_canonical_event(europe_source):
    item = make_item(
        title="  EU Summit  ",
        link="https://a/1",
        iso_date="2024-01-02T00:00:00Z",
        content_snippet="Leaders\n\n  meet   in\tBrussels ",
    )

    event = normalize_event(europe_source, item)

    assert event is not None
    assert event.title == "EU Summit"
    assert event.summary == "Leaders meet in Brussels"
    assert event.url == "https://a/1"
    assert event.source_id == "s1"
    assert event.source_name == "S1"
    assert event.source_homepage == "https://s1.example.com"
    assert event.regions == ["europe"]
    assert event.published_at == datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert event.image is None


def test_event_id_is_deterministic_and_url_specific(europe_source):
    item = make_item(link="https://a/1")

    first = normalize_event(europe_source, item)
    second = normalize_event(europe_source, item)

    assert first.id == second.id
    assert first.id.startswith("s1:")
    assert make_event_id("s1", "https://a/1") != make_event_id("s1", "https://a/2")
    assert make_event_id("s1", "https://a/1") != make_event_id("s2", "https://a/1")
    assert "=" not in make_event_id("s1", "https://a/1")


def test_items_missing_mandatory_fields_are_rejected(europe_source):
    assert normalize_event(europe_source, make_item(title="   ")) is None
    assert normalize_event(europe_source, make_item(title=None)) is None
    assert normalize_event(europe_source, make_item(link="")) is None
    assert normalize_event(europe_source, make_item(iso_date=None, pub_date=None)) is None
    assert normalize_event(europe_source, make_item(iso_date=None, pub_date="unknown")) is None


def test_pub_date_used_when_iso_date_missing(europe_source):
    item = make_item(iso_date=None, pub_date="Tue, 02 Jan 2024 10:30:00 +0100")

    event = normalize_event(europe_source, item)

    assert event.published_at == datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)


def test_iso_date_preferred_over_pub_date(europe_source):
    item = make_item(iso_date="2024-03-01T12:00:00Z", pub_date="Tue, 02 Jan 2024 10:30:00 GMT")

    event = normalize_event(europe_source, item)

    assert event.published_at == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)


def test_unparseable_iso_date_falls_back_to_pub_date(europe_source):
    item = make_item(iso_date="garbage", pub_date="Tue, 02 Jan 2024 10:30:00 GMT")

    event = normalize_event(europe_source, item)

    assert event.published_at == datetime(2024, 1, 2, 10, 30, tzinfo=timezone.utc)


def test_summary_falls_back_to_content(europe_source):
    item = make_item(content_snippet="   ", content="Full\n body text")

    assert normalize_event(europe_source, item).summary == "Full body text"
    assert normalize_event(europe_source, make_item()).summary == ""


def test_enclosure_image_preferred_over_media_content(europe_source):
    item = make_item(
        enclosure=Enclosure(url="https://img.example.com/enc.jpg", type="image/jpeg"),
        media_content=[{"url": "https://img.example.com/media.jpg"}],
    )

    assert normalize_event(europe_source, item).image == "https://img.example.com/enc.jpg"


def test_media_content_used_when_enclosure_not_http(europe_source):
    item = make_item(
        enclosure=Enclosure(url="ftp://img.example.com/enc.jpg"),
        media_content=[{"medium": "image"}, {"url": "https://img.example.com/media.jpg"}],
    )

    assert normalize_event(europe_source, item).image == "https://img.example.com/media.jpg"


def test_first_media_entry_with_url_wins_even_if_not_http(europe_source):
    item = make_item(
        media_content=[{"url": "/relative.jpg"}, {"url": "https://img.example.com/second.jpg"}],
    )

    assert normalize_event(europe_source, item).image is None


def test_strategies_return_none_without_candidates():
    item = make_item()

    assert EnclosureImageStrategy().extract(item) is None
    assert MediaContentImageStrategy().extract(item) is None


def test_normalize_whitespace():
    assert normalize_whitespace(None) == ""
    assert normalize_whitespace("  a \n\n b\t c ") == "a b c"


def test_out_of_range_pub_date_is_rejected_not_raised(europe_source):
    item = make_item(iso_date=None, pub_date="99999999999999999999999")

    assert resolve_published_at(item) is None
    assert normalize_event(europe_source, item) is None


def test_out_of_range_iso_date_falls_back_to_pub_date(europe_source):
    item = make_item(iso_date="99999999999999999999999", pub_date="Tue, 02 Jan 2024 10:30:00 GMT")

    assert normalize_event(europe_source, item).published_at == datetime(2024, 1, 2, 10, 30, tzinfo=timezone.utc)


def test_non_http_image_from_custom_strategy_is_ignored(europe_source):
    class DataUriStrategy(ImageStrategy):
        def extract(self, item):
            return "data:image/png;base64,AAAA"

    class FixedStrategy(ImageStrategy):
        def extract(self, item):
            return "https://img.example.com/fixed.jpg"

    item = make_item()

    assert resolve_image(item, [DataUriStrategy()]) is None
    assert resolve_image(item, [DataUriStrategy(), FixedStrategy()]) == "https://img.example.com/fixed.jpg"
    assert normalize_event(europe_source, item, [DataUriStrategy()]).image is None
