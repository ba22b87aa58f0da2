"""
Section kind inference for CV headings.

Maps a level-2 heading title onto one of a closed set of section kinds using
ordered keyword tables. Matching is substring-based on the lowercased title,
so "Work Experience", "Freelance Experience" and "Employment History" all
land on EXPERIENCE. First match in table order wins.
"""

import re
from enum import Enum
from typing import Tuple


class SectionType(Enum):
    """Semantic kind of a CV section."""

    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    LANGUAGES = "languages"
    CERTIFICATIONS = "certifications"
    INTERESTS = "interests"
    REFERENCES = "references"
    SUMMARY = "summary"
    # Fallback for unrecognised titles and for synthetic break markers
    PARAGRAPH = "paragraph"


# Order matters: "Project Experience" is experience, "Skills & Languages" is skills
SECTION_KEYWORDS: Tuple[Tuple[SectionType, Tuple[str, ...]], ...] = (
    (SectionType.EXPERIENCE, ("experience", "work", "employment")),
    (SectionType.EDUCATION, ("education", "academic")),
    (SectionType.SKILLS, ("skill", "technolog", "competenc")),
    (SectionType.PROJECTS, ("project",)),
    (SectionType.LANGUAGES, ("language",)),
    (SectionType.CERTIFICATIONS, ("certification", "award")),
    (SectionType.INTERESTS, ("interest", "hobbi")),
    (SectionType.REFERENCES, ("reference",)),
    (SectionType.SUMMARY, ("summary", "profile", "about")),
)

# Sections whose level-3 headings are typically jobs, degrees or projects
ENTRY_SECTION_TYPES = frozenset(
    {SectionType.EXPERIENCE, SectionType.EDUCATION, SectionType.PROJECTS}
)


def normalize_section_title(title: str) -> str:
    """
    Normalize section title for matching.

    Args:
        title: Raw heading text

    Returns:
        Lowercased title with surrounding whitespace stripped and inner runs collapsed
    """
    return re.sub(r"\s+", " ", title.lower().strip())


def infer_section_type(title: str) -> SectionType:
    """
    Infer the section kind from its heading title.

    Args:
        title: Heading text (may contain inline markdown)

    Returns:
        Matching SectionType, or SectionType.PARAGRAPH if no keyword matches
    """
    normalized = normalize_section_title(title)

    for section_type, keywords in SECTION_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return section_type

    return SectionType.PARAGRAPH
