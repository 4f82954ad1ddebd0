"""HTML fragments for the job cards.

Every value here comes from the job-data provider, so it is escaped before
it is dropped into markup rendered with ``unsafe_allow_html``.
"""
from __future__ import annotations

import html

from jobhub.models import Job


def html_block(css_class: str, text: str, tag: str = "div") -> str:
    return f'<{tag} class="{css_class}">{html.escape(text)}</{tag}>'


def meta_line(job: Job) -> str:
    """Location, salary, experience, industry and posting date joined by dots."""
    parts = [m for m in (job.location, job.salary, job.experience, job.industry) if m]
    if job.posted_at:
        parts.append(f"刊登：{job.posted_at}")
    return " · ".join(parts)
