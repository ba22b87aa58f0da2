"""
Integration tests for end-to-end CV parsing.

Parses the fixture documents in tests/fixtures and checks the structured
result: metadata normalization, section order, entry fields, skill groups,
break markers and the body fallback for documents without frontmatter.
"""

import datetime
import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from cvcraft.contexts.parsing import (
    CVParser,
    CVParserOptions,
    DocumentParseError,
    Entry,
    FrontmatterInvalidField,
    FrontmatterMissingField,
    SectionType,
    SkillGroup,
    parse_cv,
    validate_cv_content,
)
from cvcraft.contexts.rendering import create_template_config

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.fixture(scope="module")
def full_cv_text():
    return (FIXTURES_PATH / "full_cv.md").read_text(encoding="utf-8")


@pytest.fixture(scope="module")
def full_cv(full_cv_text):
    return parse_cv(full_cv_text)


@pytest.mark.integration
def test_frontmatter_metadata_is_normalized(full_cv):
    metadata = full_cv.metadata

    assert metadata["name"] == "Jane Doe"
    assert metadata["email"] == "jane.doe@example.com"
    assert metadata["phone"] == "+1 (555) 123-4567"
    assert metadata["linkedin"] == "https://linkedin.com/in/janedoe"
    # Fields outside the identity set pass through as loaded
    assert metadata["updated"] == datetime.date(2024, 1, 15)


@pytest.mark.integration
def test_section_order_and_break_marker(full_cv):
    sections = full_cv.sections

    assert [section.type for section in sections] == [
        SectionType.SUMMARY,
        SectionType.EXPERIENCE,
        SectionType.PARAGRAPH,
        SectionType.EDUCATION,
        SectionType.SKILLS,
    ]
    assert [section.break_before for section in sections] == [False, False, True, False, False]
    assert sections[2].content == []
    assert sections[1].title == "Work Experience"


@pytest.mark.integration
def test_inline_formatting_survives(full_cv):
    summary = full_cv.sections_of_type(SectionType.SUMMARY)[0]
    assert summary.content == [
        "Backend engineer with **ten years** of experience building *distributed* systems."
    ]


@pytest.mark.integration
def test_experience_entries(full_cv):
    experience = full_cv.sections_of_type(SectionType.EXPERIENCE)[0]

    assert experience.content == [
        Entry(
            title="Senior Engineer",
            company="Acme Corp",
            date="Jan 2020 – Present",
            description="Led the platform team.",
            bullets=[
                "Migrated billing to event sourcing",
                "Cut p99 latency by 40%",
                "Rewrote the cache layer",
            ],
        ),
        Entry(
            title="Software Engineer",
            company="Initech",
            date="2016 – 2019",
            description="Built internal tooling.\n\nMaintained the CI fleet.",
        ),
    ]


@pytest.mark.integration
def test_education_entry(full_cv):
    education = full_cv.sections_of_type(SectionType.EDUCATION)[0]
    assert education.entries == [
        Entry(title="BSc Computer Science", company="State University", date="2012 - 2016")
    ]


@pytest.mark.integration
def test_skill_groups(full_cv):
    skills = full_cv.sections_of_type(SectionType.SKILLS)[0]
    assert skills.content == [
        SkillGroup(category="Frontend", skills=["React", "Vue"]),
        SkillGroup(category="Backend", skills=["Node", "Go"]),
    ]


@pytest.mark.integration
def test_parse_is_deterministic(full_cv_text):
    parser = CVParser()
    assert parser.parse(full_cv_text) == parser.parse(full_cv_text)


@pytest.mark.integration
def test_parse_with_config_is_deterministic(full_cv_text):
    parser = CVParser()
    first = parser.parse(full_cv_text, config=create_template_config())
    second = parser.parse(full_cv_text, config=create_template_config())

    assert first == second
    assert first.rendered_markup == second.rendered_markup
    assert first.style_variables == second.style_variables


@pytest.mark.integration
def test_shared_parser_across_threads():
    texts = [
        (FIXTURES_PATH / name).read_text(encoding="utf-8")
        for name in ("full_cv.md", "no_frontmatter.md", "unsafe_markup.md")
    ]
    config = create_template_config()
    parser = CVParser()
    expected = [parser.parse(text, config=config).to_dict() for text in texts]

    jobs = texts * 8
    with ThreadPoolExecutor(max_workers=6) as pool:
        results = list(pool.map(lambda text: parser.parse(text, config=config).to_dict(), jobs))

    for index, result in enumerate(results):
        assert result == expected[index % len(texts)]


@pytest.mark.integration
def test_to_dict_is_json_ready(full_cv):
    data = full_cv.to_dict()
    encoded = json.loads(json.dumps(data, default=str))

    assert encoded["metadata"]["updated"] == "2024-01-15"
    assert encoded["sections"][2] == {
        "type": "paragraph",
        "title": "",
        "level": 0,
        "content": [],
        "breakBefore": True,
    }
    assert encoded["sections"][4]["content"][0] == {"category": "Frontend", "skills": ["React", "Vue"]}
    assert "renderedMarkup" not in encoded
    assert "styleVariables" not in encoded


@pytest.mark.integration
def test_body_fallback_without_frontmatter():
    text = (FIXTURES_PATH / "no_frontmatter.md").read_text(encoding="utf-8")
    document = parse_cv(text)

    assert document.metadata == {
        "name": "John Smith",
        "email": "john.smith@example.com",
        "phone": "+44 20 7946 0958",
        "location": "London",
        "website": "https://johnsmith.dev",
        "linkedin": "https://linkedin.com/in/johnsmith",
    }
    assert document.sections[0].entries == [
        Entry(
            title="Data Analyst",
            company="Globex",
            date="2018 – 2021",
            bullets=["Built dashboards"],
        )
    ]


@pytest.mark.integration
def test_body_fallback_can_be_disabled():
    text = (FIXTURES_PATH / "no_frontmatter.md").read_text(encoding="utf-8")
    document = parse_cv(text, CVParserOptions(extract_metadata=False))
    assert document.metadata == {}


class TestFrontmatterErrors:
    """Parse-level failures from the frontmatter block."""

    @pytest.mark.integration
    def test_required_email(self):
        options = CVParserOptions(validate_required=True)
        with pytest.raises(FrontmatterMissingField) as exc_info:
            CVParser(options).parse("---\nname: Jane\n---\n# Jane\n")
        assert exc_info.value.field == "email"

    @pytest.mark.integration
    def test_required_mode_off_by_default(self):
        document = parse_cv("---\nname: Jane\n---\n# Jane\n")
        assert document.metadata == {"name": "Jane"}

    @pytest.mark.integration
    def test_invalid_email_in_strict_mode(self):
        with pytest.raises(FrontmatterInvalidField) as exc_info:
            parse_cv("---\nname: Jane\nemail: not-an-email\n---\n")
        assert exc_info.value.field == "email"
        assert "not-an-email" in str(exc_info.value)

    @pytest.mark.integration
    def test_lenient_mode(self):
        options = CVParserOptions(strict_frontmatter=False)
        document = parse_cv("---\nname: Jane\nemail: Not-An-Email\n---\n", options)
        assert document.metadata["email"] == "not-an-email"

    @pytest.mark.integration
    def test_malformed_yaml(self):
        with pytest.raises(DocumentParseError):
            parse_cv("---\nname: [unclosed\n---\n# Jane\n")

    @pytest.mark.integration
    def test_deeply_nested_yaml(self):
        with pytest.raises(DocumentParseError, match="nested too deeply"):
            parse_cv("---\nname: " + "[" * 5000 + "\n---\n# Jane\n")

    @pytest.mark.integration
    def test_non_text_input(self):
        with pytest.raises(DocumentParseError):
            parse_cv(b"# Jane")


@pytest.mark.integration
def test_empty_document():
    document = parse_cv("")
    assert document.metadata == {}
    assert document.sections == []


@pytest.mark.integration
def test_validator_agrees_with_fixtures(full_cv_text):
    assert validate_cv_content(full_cv_text).valid
    assert validate_cv_content((FIXTURES_PATH / "no_frontmatter.md").read_text(encoding="utf-8")).valid
    assert not validate_cv_content("Plain text without a name heading\n").valid
