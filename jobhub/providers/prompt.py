"""Prompt and response schema sent to the generative job-data providers."""
from __future__ import annotations

from typing import Any

from jobhub.models import SearchFilters

SOURCES_LINE = "LinkedIn, 104 Job Bank, 1111 Job Bank, CakeResume, and Yourator"

_PROMPT = """Find 20-30 CURRENTLY ACTIVE and OPEN job openings in Taiwan based on these criteria:
- Job Title Scope: {job_title}
- Industries: {industries}
- Locations: {locations}
- Experience Levels: {experience_levels}

Search sources MUST include: {sources}.
CRITICAL: Only provide jobs that are confirmed to be currently hiring, with a real,
direct application link. Avoid expired listings and never invent links.

For each job, provide: id, title, company, location, salary (clean numeric range or
clear text in TWD, avoid redundant labels), years of experience required, industry,
source (one of: LinkedIn, 104, 1111, CakeResume, Yourator, Other), description,
requirements (list of strings), postedAt, and link (direct application URL).

SPECIAL REQUIREMENTS:
1. linkedInEmployees: 3 simulated LinkedIn profiles (name, role, url) of people in
   this role at this company.
2. mentorAnalysis: a brief analysis (30-50 words) of the common skills, education
   backgrounds, or traits shared by successful people in this role at this company.
3. companyReviews: a summary of the company's reputation and employee evaluations
   based on public forums (e.g. PTT, Dcard, 求職天眼通). Be objective.

Use Traditional Chinese for all textual content.
{output_rule}"""

ARRAY_OUTPUT_RULE = "Respond with a JSON array of job objects only."
OBJECT_OUTPUT_RULE = (
    'Respond with a single JSON object of the form {"jobs": [ ... ]} and nothing else.'
)

_ANY = "Any"

JOB_FIELDS_REQUIRED: list[str] = [
    "id", "title", "company", "source", "description", "requirements", "link",
    "mentorAnalysis", "companyReviews",
]


def _joined(values: tuple[str, ...]) -> str:
    return ", ".join(values) if values else _ANY


def build_prompt(filters: SearchFilters, output_rule: str = ARRAY_OUTPUT_RULE) -> str:
    """Natural-language request for jobs matching ``filters``.

    Empty fields are sent as "Any" so the provider runs a broad search.
    """
    return _PROMPT.format(
        job_title=filters.job_title.strip() or _ANY,
        industries=_joined(filters.industries),
        locations=_joined(filters.locations),
        experience_levels=_joined(filters.experience_levels),
        sources=SOURCES_LINE,
        output_rule=output_rule,
    )


def _string() -> dict[str, Any]:
    return {"type": "STRING"}


def response_schema() -> dict[str, Any]:
    """Gemini ``responseSchema`` describing an array of jobs."""
    text_fields = [
        "id", "title", "company", "location", "salary", "experience", "industry",
        "source", "description", "postedAt", "link", "mentorAnalysis", "companyReviews",
    ]
    properties: dict[str, Any] = {name: _string() for name in text_fields}
    properties["requirements"] = {"type": "ARRAY", "items": _string()}
    properties["linkedInEmployees"] = {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {"name": _string(), "role": _string(), "url": _string()},
            "required": ["name", "role", "url"],
        },
    }
    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": properties,
            "required": list(JOB_FIELDS_REQUIRED),
        },
    }
