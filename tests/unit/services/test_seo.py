"""Unit tests for SEO metadata."""

from uuid import UUID

import pytest

from domain.entities.profile import Profile
from domain.services.field_resolver import resolve_profile
from domain.services.seo import SiteInfo, build_profile_metadata


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, username="ana")


class TestSiteInfo:
    def test_profile_url(self, site: SiteInfo):
        assert site.profile_url("ana") == "https://folio.example/u/ana"

    def test_absolute_keeps_full_urls(self, site: SiteInfo):
        assert site.absolute("https://cdn.example/a.png") == "https://cdn.example/a.png"
        assert site.absolute("/a.png") == "https://folio.example/a.png"


class TestBuildProfileMetadata:
    def test_title_and_canonical(self, site: SiteInfo, profile: Profile):
        profile.display_name = "Ana Ruiz"

        metadata = build_profile_metadata(resolve_profile(profile, []), site)

        assert metadata.title == "Ana Ruiz | Folio"
        assert metadata.canonical == "https://folio.example/u/ana"

    def test_description_falls_back_to_site(self, site: SiteInfo, profile: Profile):
        metadata = build_profile_metadata(resolve_profile(profile, []), site)

        assert metadata.title == "ana | Folio"
        assert metadata.description == "Professional profiles"

    def test_image_falls_back_to_site_og_image(self, site: SiteInfo, profile: Profile):
        metadata = build_profile_metadata(resolve_profile(profile, []), site)

        assert metadata.image == "https://folio.example/og-image.png"

    def test_profile_photo_is_used(self, site: SiteInfo, profile: Profile):
        profile.profile_photo_url = "/photos/ana.png"

        metadata = build_profile_metadata(resolve_profile(profile, []), site)

        assert metadata.image == "https://folio.example/photos/ana.png"
        assert metadata.open_graph["images"][0]["url"] == metadata.image
        assert metadata.open_graph["images"][0]["width"] == 1200
        assert metadata.open_graph["images"][0]["height"] == 630

    def test_social_cards(self, site: SiteInfo, profile: Profile):
        profile.seo_keywords = ["python"]

        metadata = build_profile_metadata(resolve_profile(profile, []), site)

        assert metadata.open_graph["type"] == "profile"
        assert metadata.twitter["card"] == "summary_large_image"
        assert metadata.twitter["creator"] == "@ana"
        assert metadata.keywords == ["python"]
