"""
Resume Data Structure

Structured resume content for the PDF builder: a header plus list sections
(education, experience, projects) whose entries carry stable ids, and two
free-text sections. Experience notes, project descriptions and "other" are
markdown; technical knowledge is plain text.

Edits never mutate: every helper returns a new ResumeData.

Serialized keys follow the JSON wire shape (projectLinks), but snake_case
keys are accepted on input so YAML files can use either.
"""

import uuid
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List

from vellum.utils.exceptions import NotFoundError, ValidationError

# Wire name -> attribute name
_FIELD_ALIASES = {"projectLinks": "project_links"}


def new_id() -> str:
    return uuid.uuid4().hex


def parse_project_links(text: str) -> List[str]:
    """
    Split a comma-separated list of project links.

    Example:
        >>> parse_project_links("repo, , demo ")
        ['repo', 'demo']
    """
    return [part.strip() for part in (text or "").split(",") if part.strip()]


@dataclass(frozen=True)
class Header:
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""

    @property
    def contact_parts(self) -> List[str]:
        """Non-empty contact fields in display order."""
        parts = [self.location, self.email, self.phone, self.linkedin, self.github]
        return [part for part in parts if part]


@dataclass(frozen=True)
class Education:
    id: str = field(default_factory=new_id)
    school: str = ""
    degree: str = ""
    start: str = ""
    end: str = ""
    location: str = ""
    gpa: str = ""


@dataclass(frozen=True)
class Experience:
    id: str = field(default_factory=new_id)
    company: str = ""
    title: str = ""
    start: str = ""
    end: str = ""
    location: str = ""
    notes: str = ""
    project_links: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Project:
    id: str = field(default_factory=new_id)
    title: str = ""
    description: str = ""
    link: str = ""


SECTION_TYPES = {
    "education": Education,
    "experience": Experience,
    "projects": Project,
}

TEXT_SECTIONS = ("technical", "other")


def _project_links(value: Any) -> List[str]:
    """
    Normalize projectLinks: a list of strings, or one comma-separated string.

    Raises:
        ValidationError: For any other shape
    """
    if isinstance(value, str):
        return parse_project_links(value)
    if isinstance(value, list) and all(isinstance(link, str) for link in value):
        return list(value)
    raise ValidationError("'projectLinks' must be a list of strings")


def _build_entry(entry_type, raw: Dict[str, Any]):
    """Construct a dataclass from a dict, accepting wire aliases and ignoring unknown keys."""
    known = {f.name for f in fields(entry_type)}
    values = {}
    for key, value in (raw or {}).items():
        name = _FIELD_ALIASES.get(key, key)
        if name not in known or value is None:
            continue
        values[name] = _project_links(value) if name == "project_links" else str(value)
    if not values.get("id"):
        values.pop("id", None)
    return entry_type(**values)


@dataclass(frozen=True)
class ResumeData:
    """
    Complete resume content.

    Attributes:
        header: Name and contact fields
        education: Education entries
        experience: Experience entries (notes are markdown)
        projects: Academic projects (descriptions are markdown)
        technical: Technical knowledge (plain text)
        other: Other information (markdown)
    """

    header: Header = field(default_factory=Header)
    education: List[Education] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    technical: str = ""
    other: str = ""

    @classmethod
    def empty(cls) -> "ResumeData":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeData":
        """
        Build ResumeData from a decoded JSON/YAML mapping.

        Missing sections are empty; entries without an id get a fresh one.

        Raises:
            ValidationError: If the mapping or a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValidationError("Resume data must be a JSON object")

        sections = {}
        for name, entry_type in SECTION_TYPES.items():
            raw_entries = data.get(name) or []
            if not isinstance(raw_entries, list):
                raise ValidationError(f"'{name}' must be a list")
            if not all(isinstance(entry, dict) for entry in raw_entries):
                raise ValidationError(f"Every '{name}' entry must be an object")
            sections[name] = [_build_entry(entry_type, entry) for entry in raw_entries]

        header = data.get("header") or {}
        if not isinstance(header, dict):
            raise ValidationError("'header' must be an object")

        return cls(
            header=_build_entry(Header, header),
            technical=str(data.get("technical") or ""),
            other=str(data.get("other") or ""),
            **sections,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with wire key names (projectLinks)."""
        result = asdict(self)
        for entry in result["experience"]:
            entry["projectLinks"] = entry.pop("project_links")
        return result

    # Editing helpers; each returns a new ResumeData

    def update_header(self, **changes: str) -> "ResumeData":
        return replace(self, header=replace(self.header, **changes))

    def set_text(self, section: str, value: str) -> "ResumeData":
        """Replace a free-text section ("technical" or "other")."""
        if section not in TEXT_SECTIONS:
            raise ValidationError(f"Unknown text section: {section}")
        return replace(self, **{section: value})

    def _entries(self, section: str) -> list:
        if section not in SECTION_TYPES:
            raise ValidationError(f"Unknown list section: {section}")
        return getattr(self, section)

    def add_entry(self, section: str, **values: Any) -> "ResumeData":
        """Append a new entry (blank fields unless given) with a fresh id."""
        entries = self._entries(section)
        return replace(self, **{section: [*entries, SECTION_TYPES[section](**values)]})

    def update_entry(self, section: str, entry_id: str, **changes: Any) -> "ResumeData":
        """
        Change fields of one entry, located by id.

        Raises:
            NotFoundError: If no entry has that id
        """
        entries = self._entries(section)
        if not any(entry.id == entry_id for entry in entries):
            raise NotFoundError(f"No {section} entry with id {entry_id}")
        updated = [replace(entry, **changes) if entry.id == entry_id else entry for entry in entries]
        return replace(self, **{section: updated})

    def remove_entry(self, section: str, entry_id: str) -> "ResumeData":
        """Drop one entry by id (no-op if absent)."""
        remaining = [entry for entry in self._entries(section) if entry.id != entry_id]
        return replace(self, **{section: remaining})


SAMPLE_RESUME = {
    "header": {
        "name": "Jordan Rivera",
        "email": "jordan.rivera@example.com",
        "phone": "+1-555-010-2030",
        "location": "Portland, ME (willing to relocate)",
        "linkedin": "linkedin.com/in/jordan-rivera",
        "github": "github.com/jrivera",
    },
    "education": [
        {
            "school": "Northeastern University",
            "degree": "Master of Science in Data Science",
            "start": "Sep. 2025",
            "end": "June 2027",
            "location": "Portland, ME",
            "gpa": "4.0",
        }
    ],
    "experience": [
        {
            "company": "Hydrus.ai",
            "title": "Front-end Developer",
            "start": "Jan 2025",
            "end": "July 2025",
            "location": "Remote",
            "notes": (
                "- Built real-time analytics dashboards using **React** + Redux\n"
                "- Reduced reporting latency and boosted throughput by 30%"
            ),
            "projectLinks": ["github.com/jrivera/dashboards"],
        }
    ],
    "projects": [
        {
            "title": "Subscriber Analytics",
            "description": "End-to-end ML pipeline for *churn* modeling and visualization.",
        }
    ],
    "technical": "Python, TypeScript, React, FastAPI, PostgreSQL, Docker, scikit-learn",
    "other": "",
}
