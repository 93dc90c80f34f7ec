"""Resume section segmentation and regex contact extraction.

Used as the deterministic fallback when the profile extraction call is
unavailable: contact fields come from regexes and the education level is read
from the education section only, so skills like "MS Office" never count as a
degree.
"""

import re

# Canonical section name -> heading regexes
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|path)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"profile",
    ],
    "projects": [r"(?:key|notable|selected|personal)?\s*projects"],
    "certifications": [r"certific(?:ations?|ates?)", r"licen[sc]es?"],
}

_COMPILED: dict[str, re.Pattern] = {
    section: re.compile(rf"^\s*(?:{'|'.join(patterns)})\s*:?\s*$", re.IGNORECASE)
    for section, patterns in SECTION_PATTERNS.items()
}

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]*\w")
# Single line only; digit count is checked separately
PHONE_RE = re.compile(r"\+?[\d \-().]{7,15}\d")
MIN_PHONE_DIGITS = 10


def parse_sections(text: str) -> dict[str, str]:
    """Split resume text into named sections.

    Returns a dict mapping section name -> section text content.
    Unmatched text at the top goes into 'header'. A repeated heading
    appends to the existing section.
    """
    sections: dict[str, list[str]] = {}
    current = "header"

    for line in text.split("\n"):
        stripped = line.strip()
        matched = None
        if stripped:
            for name, pattern in _COMPILED.items():
                if pattern.match(stripped):
                    matched = name
                    break
        if matched:
            current = matched
            sections.setdefault(current, [])
        else:
            sections.setdefault(current, []).append(line)

    return {name: "\n".join(lines).strip() for name, lines in sections.items()}


def _find_phone(text: str) -> str | None:
    for match in PHONE_RE.finditer(text):
        candidate = match.group().strip()
        if sum(ch.isdigit() for ch in candidate) >= MIN_PHONE_DIGITS:
            return candidate
    return None


def extract_contact_info(text: str) -> dict[str, str | None]:
    """First email address and phone number found in the text."""
    email_match = EMAIL_RE.search(text)
    return {
        "email": email_match.group() if email_match else None,
        "phone": _find_phone(text),
    }
