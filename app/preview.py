"""
Model → preview.

build_preview() is a pure function of the résumé data; render_preview_html()
feeds its result through the Jinja2 template. Empty collection sections come
out as None and are left out of the page entirely.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader

from cleaner import expand_username_url
import config

_CSS_PATH = Path(__file__).parent / "static" / "style.css"
env = Environment(loader=FileSystemLoader(Path(__file__).parent / "templates"),
                  autoescape=True, trim_blocks=True, lstrip_blocks=True)

PLACEHOLDERS = {
    "name": "Your Name",
    "degree": "Degree Title",
    "institution": "Institution Name",
    "jobTitle": "Job Title",
    "company": "Company Name",
    "title": "Project Title",
    "year": "Year",
}


def _duration(start: str, end: str) -> str:
    return f"{start}{' - ' + end if end else ''}"


def _personal(p: Dict[str, str]) -> Dict[str, Any]:
    links = []
    if p.get("linkedin"):
        links.append({"id": "preview-linkedin", "label": "LinkedIn Profile",
                      "href": expand_username_url(p["linkedin"], "linkedin.com", "in/")})
    if p.get("github"):
        links.append({"id": "preview-github", "label": "GitHub Profile",
                      "href": expand_username_url(p["github"], "github.com")})
    return {
        "name": p.get("name") or PLACEHOLDERS["name"],
        "email": p.get("email", ""),
        "phone": p.get("phone", ""),
        "address": p.get("address", ""),
        "links": links,
    }


def _education(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]] | None:
    if not entries:
        return None
    blocks = []
    for edu in entries:
        duration = _duration(edu["startYear"], edu["endYear"])
        if edu.get("cgpa"):
            duration += f" • GPA: {edu['cgpa']}"
        blocks.append({
            "id": edu["id"],
            "title": edu["degree"] or PLACEHOLDERS["degree"],
            "subtitle": edu["institution"] or PLACEHOLDERS["institution"],
            "duration": duration,
            "description": "",
            "technologies": "",
        })
    return blocks


def _experience(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]] | None:
    if not entries:
        return None
    return [{
        "id": exp["id"],
        "title": exp["jobTitle"] or PLACEHOLDERS["jobTitle"],
        "subtitle": exp["company"] or PLACEHOLDERS["company"],
        "duration": _duration(exp["startDate"], exp["endDate"]),
        "description": exp["description"],
        "technologies": "",
    } for exp in entries]


def _projects(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]] | None:
    if not entries:
        return None
    return [{
        "id": proj["id"],
        "title": proj["title"] or PLACEHOLDERS["title"],
        "subtitle": "",
        "duration": proj["year"] or PLACEHOLDERS["year"],
        "description": proj["description"],
        "technologies": proj["technologies"],
    } for proj in entries]


def build_preview(data: Dict[str, Any]) -> Dict[str, Any]:
    """Derive the preview view from the model. Never mutates data."""
    return {
        "personal": _personal(data.get("personalInfo", {})),
        "education": _education(data.get("education", [])),
        "experience": _experience(data.get("experience", [])),
        "projects": _projects(data.get("projects", [])),
        "skills": list(data.get("skills", [])) or None,
    }


def render_preview_html(data: dict, inline: bool = True) -> str:
    """Render résumé → HTML.  If inline=True, embed CSS in a <style> tag."""
    css_inline = _CSS_PATH.read_text(encoding="utf-8") if inline else ""
    return env.get_template("preview.html").render(
        v=build_preview(data),
        inline_css=css_inline,
        element_id=config.PREVIEW_ELEMENT_ID,
    )
