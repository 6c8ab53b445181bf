"""Unit tests for feed item schemas."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from bakeboard.feeds.aggregation.schemas import (
    AlbumRelease,
    ArtistInfo,
    ChartAlbum,
    GameRelease,
    SteamDescription,
    TopChartsResponse,
    absolute_url_or_none,
)
from bakeboard.feeds.aggregation.stats import EnrichmentStats


@pytest.mark.unit
class TestAbsoluteUrl:
    @staticmethod
    def test_protocol_relative_gains_https() -> None:
        assert absolute_url_or_none("//images.igdb.com/a.jpg") == "https://images.igdb.com/a.jpg"

    @staticmethod
    def test_relative_or_empty_is_none() -> None:
        assert absolute_url_or_none("/a.jpg") is None
        assert absolute_url_or_none("") is None
        assert absolute_url_or_none(None) is None

    @staticmethod
    def test_validator_applied_on_models() -> None:
        assert SteamDescription(header_image="ftp://x").header_image is None


@pytest.mark.unit
class TestModels:
    @staticmethod
    def test_camel_case_dump() -> None:
        album = AlbumRelease(id="r1", title="LP", artist_listeners=10, in_library=True)
        dumped = album.model_dump(by_alias=True)

        assert dumped["artistListeners"] == 10
        assert dumped["inLibrary"] is True
        assert dumped["artist"] == "Unknown Artist"
        assert dumped["type"] == "Album"

    @staticmethod
    def test_popularity_serialized() -> None:
        game = GameRelease(id=1, name="G", hypes=2, follows=3)
        assert game.model_dump(by_alias=True)["popularity"] == 5

    @staticmethod
    def test_models_are_frozen() -> None:
        game = GameRelease(id=1, name="G")
        with pytest.raises(ValidationError):
            game.name = "H"  # type: ignore[misc]

    @staticmethod
    def test_populate_by_alias() -> None:
        game = GameRelease.model_validate({"id": 1, "name": "G", "steamAppId": "730"})
        assert game.steam_app_id == "730"

    @staticmethod
    def test_chart_album_identity_and_rank() -> None:
        album = ChartAlbum(name="OK Computer", artist="Radiohead", genre="rock", rank=1)
        assert album.identity == ("ok computer", "radiohead")
        with pytest.raises(ValidationError):
            ChartAlbum(name="x", artist="y", genre="z", rank=0)

    @staticmethod
    def test_artist_info_known() -> None:
        assert ArtistInfo().is_known is False
        assert ArtistInfo(genre="jazz").is_known is True

    @staticmethod
    def test_charts_response_json_dump() -> None:
        response = TopChartsResponse(fetched_at=datetime(2024, 6, 14, tzinfo=UTC))
        dumped = response.model_dump(by_alias=True, mode="json")
        assert dumped["fetchedAt"].startswith("2024-06-14T00:00:00")
        assert dumped["albums"] == []


@pytest.mark.unit
class TestEnrichmentStats:
    @staticmethod
    def test_record_and_failures(caplog: pytest.LogCaptureFixture) -> None:
        stats = EnrichmentStats(feed="games", total_items=3)
        stats.record("reviews", 3, 2)
        stats.record("reviews", 1, 1)
        stats.record("descriptions", 4, 1)

        assert stats.attempted == {"reviews": 4, "descriptions": 4}
        assert stats.total_failed == 4

        with caplog.at_level("INFO"):
            stats.log_summary()
        assert "reviews=3/4" in caplog.text
