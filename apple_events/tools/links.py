"""Links between reminders, kept in notes as a `Related:` section.

    Some notes

    Related:
    ID1, ID2, ID3
"""

RELATED_HEADER = "Related:"


def extract_links(notes: str | None) -> list[str]:
    """Reminder IDs listed on the first non-empty line after `Related:`."""
    if not notes:
        return []

    found_related = False
    for line in notes.split("\n"):
        trimmed = line.strip()
        if trimmed == RELATED_HEADER:
            found_related = True
            continue
        if found_related and trimmed:
            return [part.strip() for part in trimmed.split(",") if part.strip()]
    return []


def format_links(ids: list[str]) -> str:
    if not ids:
        return ""
    return f"{RELATED_HEADER}\n{', '.join(ids)}"


def has_link(notes: str | None, reminder_id: str) -> bool:
    return reminder_id in extract_links(notes)
