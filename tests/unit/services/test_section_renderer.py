"""Unit tests for the section renderer."""

from uuid import UUID

import pytest

from domain.entities.experience import ProfileExperience
from domain.entities.plan import PlanId
from domain.entities.profile import Profile, ProfileBundle
from domain.entities.section import Section
from domain.services.field_resolver import resolve_profile
from domain.services.section_renderer import (
    SectionRenderer,
    render_markdown,
    safe_url,
)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, username="ana", published=True)


def _section(profile: Profile, type: str, content, order: int = 0) -> Section:
    return Section(profile_id=profile.id, type=type, content=content, order=order)


def _bundle(profile: Profile, sections=None, experiences=None) -> ProfileBundle:
    return ProfileBundle(profile=profile, sections=sections or [], experiences=experiences or [])


class TestSafeUrl:
    @pytest.mark.parametrize(
        "url",
        ["https://a.example", "http://a.example/x", "mailto:ana@example.com", "/avatar.png"],
    )
    def test_allowed(self, url: str):
        assert safe_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "//evil.example",
            "/\\evil.example/x.png",
            "\\\\evil.example/x.png",
            "/\t/evil.example",
            "data:text/html,x",
            "",
            None,
            42,
        ],
    )
    def test_rejected(self, url):
        assert safe_url(url) is None


class TestMarkdown:
    def test_escapes_html(self):
        html = render_markdown("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_bullets_and_headings(self):
        html = render_markdown("## Skills\n\n- Python\n- SQL")

        assert "<h2>Skills</h2>" in html
        assert "<ul><li>Python</li><li>SQL</li></ul>" in html


class TestRenderSection:
    def test_about_uses_legacy_bio(self, renderer: SectionRenderer, profile: Profile):
        section = _section(profile, "about", {"bio": "Hello there"})

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert block.kind == "about"
        assert "Hello there" in block.html

    def test_empty_section_renders_nothing(self, renderer: SectionRenderer, profile: Profile):
        section = _section(profile, "about", {"summary": ""})

        assert renderer.render_section(section, resolve_profile(profile, [section])) is None

    def test_unknown_type_renders_placeholder(self, renderer: SectionRenderer, profile: Profile):
        section = _section(profile, "timeline", {"items": []})

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert block.kind == "unknown"
        assert 'Section type "timeline" is not yet implemented' in block.html

    def test_links_drop_unsafe_urls(self, renderer: SectionRenderer, profile: Profile):
        section = _section(
            profile,
            "links",
            {
                "links": [
                    {"type": "github", "url": "https://github.com/ana"},
                    {"type": "other", "url": "javascript:alert(1)"},
                    {"type": "email", "url": "ana@example.com"},
                ]
            },
        )

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert "https://github.com/ana" in block.html
        assert "javascript:" not in block.html
        assert 'href="mailto:ana@example.com"' in block.html

    def test_skills_skip_empty_categories(self, renderer: SectionRenderer, profile: Profile):
        section = _section(
            profile,
            "skills",
            {"categories": [{"name": "Languages", "items": ["Python"]}, {"name": "Empty", "items": []}]},
        )

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert "Languages" in block.html
        assert "Empty" not in block.html

    def test_experience_section_dates(self, renderer: SectionRenderer, profile: Profile):
        section = _section(
            profile,
            "experience",
            {"items": [{"company": "Acme", "role": "Engineer", "startDate": "2020-01"}]},
        )

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert "2020 - Present" in block.html

    @pytest.mark.parametrize(
        ("type", "content", "expected"),
        [
            ("projects", {"projects": [{"name": "Folio"}]}, "Folio"),
            ("education", {"education": [{"institution": "Lisbon Tech"}]}, "Lisbon Tech"),
            ("certifications", {"certifications": [{"name": "CKA"}]}, "CKA"),
            ("mdx", {"content": "Legacy body"}, "Legacy body"),
        ],
    )
    def test_legacy_body_fields(
        self, renderer: SectionRenderer, profile: Profile, type: str, content, expected: str
    ):
        section = _section(profile, type, content)

        block = renderer.render_section(section, resolve_profile(profile, [section]))

        assert block is not None
        assert expected in block.html

    def test_malformed_content_does_not_raise(self, renderer: SectionRenderer, profile: Profile):
        section = _section(profile, "projects", {"items": "oops"})

        assert renderer.render_section(section, resolve_profile(profile, [section])) is None


class TestRenderProfile:
    def test_sections_render_in_order(self, renderer: SectionRenderer, profile: Profile):
        about = _section(profile, "about", {"summary": "About me"}, order=2)
        hero = _section(profile, "hero", {"fullName": "Ana Ruiz"}, order=0)
        links = _section(profile, "links", {"items": [{"url": "https://a.example"}]}, order=1)

        rendered = renderer.render_profile(_bundle(profile, [about, hero, links]), PlanId.FREE)

        assert [b.kind for b in rendered.blocks] == ["hero", "links", "about"]

    def test_identity_header_when_no_hero(self, renderer: SectionRenderer, profile: Profile):
        profile.display_name = "Ana Ruiz"
        profile.headline = "Engineer"
        profile.location = "Lisbon"

        rendered = renderer.render_profile(_bundle(profile), PlanId.FREE)

        assert rendered.blocks[0].kind == "identity"
        assert "Ana Ruiz" in rendered.blocks[0].html
        assert "Engineer in Lisbon" in rendered.blocks[0].html

    def test_empty_hero_section_suppresses_identity_header(
        self, renderer: SectionRenderer, profile: Profile
    ):
        profile.display_name = "Ana Ruiz"
        hero = _section(profile, "hero", {})

        rendered = renderer.render_profile(_bundle(profile, [hero]), PlanId.FREE)

        assert [b.kind for b in rendered.blocks] == ["hero"]
        assert rendered.html.count("<h1>Ana Ruiz</h1>") == 1

    def test_footer_on_free_plan(self, renderer: SectionRenderer, profile: Profile):
        rendered = renderer.render_profile(_bundle(profile), PlanId.FREE)

        assert rendered.footer is not None
        assert "Powered by" in rendered.footer
        assert rendered.html.endswith(rendered.footer)

    def test_footer_removed_when_branding_removed(
        self, renderer: SectionRenderer, profile: Profile
    ):
        profile.remove_branding = True

        rendered = renderer.render_profile(_bundle(profile), PlanId.PRO)

        assert rendered.footer is None

    def test_mdx_hidden_on_free_plan(self, renderer: SectionRenderer, profile: Profile):
        mdx = _section(profile, "mdx", {"mdx": "# Custom"})

        free = renderer.render_profile(_bundle(profile, [mdx]), PlanId.FREE)
        pro = renderer.render_profile(_bundle(profile, [mdx]), PlanId.PRO)

        assert [b.kind for b in free.blocks] == []
        assert [b.kind for b in pro.blocks] == ["mdx"]

    def test_legacy_document_when_no_sections(self, renderer: SectionRenderer, profile: Profile):
        profile.content = "---\ntitle: Ana\ngithub: ana\n---\nI build **APIs**."

        rendered = renderer.render_profile(_bundle(profile), PlanId.FREE)

        kinds = [b.kind for b in rendered.blocks]
        assert "document" in kinds
        document = next(b for b in rendered.blocks if b.kind == "document")
        assert "https://github.com/ana" in document.html

    def test_document_ignored_when_sections_exist(
        self, renderer: SectionRenderer, profile: Profile
    ):
        profile.content = "---\ntitle: Ana\n---\nBody"
        about = _section(profile, "about", {"summary": "From sections"})

        rendered = renderer.render_profile(_bundle(profile, [about]), PlanId.FREE)

        assert "document" not in [b.kind for b in rendered.blocks]

    def test_experience_records_follow_sections(
        self, renderer: SectionRenderer, profile: Profile
    ):
        about = _section(profile, "about", {"summary": "Hi"})
        later = ProfileExperience(
            profile_id=profile.id, company="Beta", role="Lead", start_date="2022", order=1
        )
        earlier = ProfileExperience(
            profile_id=profile.id,
            company="Acme",
            role="Engineer",
            start_date="2019",
            end_date="2021",
            order=0,
        )

        rendered = renderer.render_profile(_bundle(profile, [about], [later, earlier]), PlanId.FREE)

        assert [b.kind for b in rendered.blocks] == ["about", "professional-experience"]
        html = rendered.blocks[-1].html
        assert html.index("Acme") < html.index("Beta")
        assert "2019 - 2021" in html
        assert "2022 - Present" in html

    def test_html_is_escaped(self, renderer: SectionRenderer, profile: Profile):
        hero = _section(profile, "hero", {"fullName": "<b>Ana</b>"})

        rendered = renderer.render_profile(_bundle(profile, [hero]), PlanId.FREE)

        assert "<b>Ana</b>" not in rendered.html
        assert "&lt;b&gt;Ana&lt;/b&gt;" in rendered.html
