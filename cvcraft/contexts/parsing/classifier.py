"""
Content classification heuristics for CV sections.

Three jobs, all best-effort and total (they never raise):
- split an entry heading into title and company,
- decide what a paragraph inside an entry is (company, date, description),
- group skill list items into categories.

Paragraph rules are an ordered priority list; the first rule that applies
wins and later rules are not consulted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from cvcraft.contexts.parsing.cv_data_structure import Entry, ListItem, SkillGroup
from cvcraft.contexts.parsing.logger import _log_debug
from cvcraft.contexts.parsing.patterns import EntryPatterns, SkillPatterns

FALLBACK_SKILL_CATEGORY = "General"


@dataclass
class EntryDraft:
    """
    An entry still being filled in by the segmenter.

    Description paragraphs are buffered as a list and joined on finalize().
    """

    title: str
    company: str = ""
    date: str = ""
    location: str = ""
    description: List[str] = field(default_factory=list)
    bullets: List[str] = field(default_factory=list)

    def finalize(self) -> Entry:
        return Entry(
            title=self.title,
            company=self.company,
            date=self.date,
            location=self.location,
            description="\n\n".join(self.description),
            bullets=list(self.bullets),
        )


class ParagraphKind(Enum):
    """Which rule claimed an entry paragraph."""

    COMPANY_AND_DATE = "company_and_date"
    COMPANY = "company"
    PIPE_COMPANY_AND_DATE = "pipe_company_and_date"
    DATE = "date"
    DESCRIPTION = "description"


# ============================================================================
# Entry headings
# ============================================================================


def split_entry_title(heading: str) -> EntryDraft:
    """
    Start an entry from a level-3 heading.

    Formats:
    - "Title | Company" (split on the first pipe; the rest is the company)
    - "Title at Company" (case-insensitive " at ")
    - anything else is the title alone

    Args:
        heading: Reconstructed heading text

    Returns:
        EntryDraft with title and possibly company set
    """
    if "|" in heading:
        title, _, company = heading.partition("|")
        return EntryDraft(title=title.strip(), company=company.strip())

    match = EntryPatterns.TITLE_AT_COMPANY.match(heading)
    if match:
        return EntryDraft(title=match.group(1).strip(), company=match.group(2).strip())

    return EntryDraft(title=heading.strip())


# ============================================================================
# Entry paragraphs
# ============================================================================


def _split_pipe_company_date(text: str) -> Optional[Tuple[str, str]]:
    """"Company | Date" without bold. None unless the right side contains a year."""
    before, _, after = text.partition("|")
    before, after = before.strip(), after.strip()
    if before and EntryPatterns.YEAR.search(after):
        return before, after
    return None


def classify_entry_paragraph(draft: EntryDraft, text: str) -> ParagraphKind:
    """
    Apply one paragraph to an open entry.

    Rules, first match wins:
    1. `**Company** | Date` (also `·`, `•`, `—`) with a year in the date:
       sets company and date where unset.
    2. `**Company**` alone, while company is unset: sets company.
    3. `Company | Date` with a year after the pipe, while company or date is
       unset: fills whichever is unset. A pipe line without a year is
       description.
    4. A line with a year (optionally wrapped in `*`/`_`), while date is
       unset: sets date.
    5. Description.

    Args:
        draft: Entry being built (mutated)
        text: Reconstructed paragraph text

    Returns:
        The rule that claimed the paragraph
    """
    text = text.strip()

    match = EntryPatterns.BOLD_COMPANY_DATE.match(text)
    if match and EntryPatterns.YEAR.search(match.group(2)):
        if not draft.company:
            draft.company = match.group(1).strip()
        if not draft.date:
            draft.date = match.group(2).strip()
        return ParagraphKind.COMPANY_AND_DATE

    if EntryPatterns.BOLD_ONLY.match(text) and not draft.company:
        draft.company = text[2:-2].strip()
        return ParagraphKind.COMPANY

    if "|" in text:
        pipe_parts = _split_pipe_company_date(text)
        if pipe_parts is None:
            draft.description.append(text)
            return ParagraphKind.DESCRIPTION
        if not draft.company or not draft.date:
            company, date = pipe_parts
            if not draft.company:
                draft.company = company
            if not draft.date:
                draft.date = date
            return ParagraphKind.PIPE_COMPANY_AND_DATE

    match = EntryPatterns.DATE_LINE.match(text)
    if match and not draft.date:
        draft.date = match.group(1).strip()
        return ParagraphKind.DATE

    draft.description.append(text)
    return ParagraphKind.DESCRIPTION


# ============================================================================
# Skills
# ============================================================================


def split_skills(value: str) -> List[str]:
    """Comma-separated skills, trimmed, empties dropped."""
    return [skill.strip() for skill in value.split(",") if skill.strip()]


def _match_category(line: str) -> Optional[Tuple[str, str]]:
    match = SkillPatterns.CATEGORY_LINE.match(line)
    if not match:
        return None
    category = (match.group(1) or match.group(2)).strip()
    return category, match.group(3)


def _match_label(line: str) -> Optional[str]:
    match = SkillPatterns.LABEL_ONLY.match(line)
    if not match:
        return None
    return (match.group(1) or match.group(2)).strip()


def _text_lines(texts: List[str]) -> List[str]:
    return [line.strip() for text in texts for line in text.split("\n") if line.strip()]


def _nested_label(item: ListItem) -> Optional[str]:
    """Category of a label-only item that carries its values as nested items."""
    if not item.items or "\n" in item.text.strip():
        return None
    line = item.text.strip()
    if _match_category(line) is not None:
        return None
    return _match_label(line)


def parse_skill_groups(items: List[ListItem]) -> List[SkillGroup]:
    """
    Group skill list items into categories.

    Accepted forms per line:
    - `**Category:** a, b` / `**Category**: a, b` / `Category: a, b`
    - a label line (`**Category**`, `Category:`) followed by a plain line of
      comma-separated values
    - a label item whose nested items hold the values; every nested item
      belongs to that category

    With at least one category found, any leftover lines are collected into
    a trailing "General" group. With none, a single "General" group holds
    the raw item texts.

    Args:
        items: List items of the skills list

    Returns:
        Skill groups in document order (never empty when items is not)
    """
    item_texts = [text for item in items for text in item.flatten()]

    groups: List[SkillGroup] = []
    leftovers: List[str] = []
    # (category, raw line) of a label waiting for its values line
    pending: Optional[Tuple[str, str]] = None

    for item in items:
        nested_label = _nested_label(item)
        if nested_label is not None:
            if pending is not None:
                leftovers.append(pending[1])
                pending = None
            nested_texts = [text for child in item.items for text in child.flatten()]
            skills = [skill for line in _text_lines(nested_texts) for skill in split_skills(line)]
            groups.append(SkillGroup(category=nested_label, skills=skills))
            continue

        for line in _text_lines(item.flatten()):
            category_match = _match_category(line)
            label = _match_label(line) if category_match is None else None

            if pending is not None:
                if category_match is None and label is None:
                    groups.append(SkillGroup(category=pending[0], skills=split_skills(line)))
                    pending = None
                    continue
                # Label with no values line after it
                leftovers.append(pending[1])
                pending = None

            if category_match is not None:
                category, values = category_match
                groups.append(SkillGroup(category=category, skills=split_skills(values)))
            elif label is not None:
                pending = (label, line)
            else:
                leftovers.append(line)

    if pending is not None:
        leftovers.append(pending[1])

    if not groups:
        if not item_texts:
            return []
        _log_debug(f"No skill categories found, grouping {len(item_texts)} items as '{FALLBACK_SKILL_CATEGORY}'")
        return [SkillGroup(category=FALLBACK_SKILL_CATEGORY, skills=item_texts)]

    if leftovers:
        skills = [skill for line in leftovers for skill in split_skills(line)]
        if skills:
            groups.append(SkillGroup(category=FALLBACK_SKILL_CATEGORY, skills=skills))

    return groups
