"""
Form layout for the dynamic entry lists.

entry_blocks() turns the model into one block per entry, in list order. The
GUI only draws what it gets here, so the set of rendered blocks always equals
the set of model entries and each widget key carries its entry id.
"""
from __future__ import annotations
from typing import Any, Dict, List


# (field, label, placeholder, multiline)
PERSONAL_FORM = [
    ("name", "Full Name", "John Doe", False),
    ("email", "Email", "john.doe@email.com", False),
    ("phone", "Phone", "+1 (555) 123-4567", False),
    ("linkedin", "LinkedIn", "https://linkedin.com/in/johndoe", False),
    ("github", "GitHub", "https://github.com/johndoe", False),
    ("address", "Address", "Seattle, WA", False),
]

ENTRY_FORMS = {
    "education": [
        ("degree", "Degree/Qualification", "Bachelor of Science in Computer Science", False),
        ("institution", "Institution/University", "University of Washington", False),
        ("startYear", "Start Year", "2019", False),
        ("endYear", "End Year", "2023", False),
        ("cgpa", "GPA/CGPA (Optional)", "3.85/4.0", False),
    ],
    "experience": [
        ("jobTitle", "Job Title", "Frontend Developer", False),
        ("company", "Company", "Microsoft", False),
        ("startDate", "Start Date", "July 2023", False),
        ("endDate", "End Date", "Present", False),
        ("description", "Job Description",
         "• Develop responsive web applications using React and TypeScript\n"
         "• Collaborate with UX designers to implement pixel-perfect interfaces\n"
         "• Optimize application performance and ensure cross-browser compatibility", True),
    ],
    "projects": [
        ("title", "Project Title", "E-Learning Platform", False),
        ("description", "Project Description",
         "Built a comprehensive online learning platform with video streaming, "
         "interactive quizzes, and progress tracking", True),
        ("technologies", "Technologies Used", "React, Node.js, MongoDB, AWS, WebRTC", False),
        ("year", "Year/Duration", "2023", False),
    ],
}

HEADINGS = {"education": "Education", "experience": "Experience", "projects": "Project"}


def widget_key(category: str, entry_id: int, field: str) -> str:
    return f"{category}-{entry_id}-{field}"


def remove_key(category: str, entry_id: int) -> str:
    return f"remove-{category}-{entry_id}"


def parse_widget_key(key: str) -> tuple[str, int, str]:
    category, entry_id, field = key.split("-", 2)
    return category, int(entry_id), field


def entry_widget_keys(category: str, entry_id: int) -> List[str]:
    """Every session key the block of one entry owns, remove button included."""
    keys = [widget_key(category, entry_id, field) for field, *_ in ENTRY_FORMS[category]]
    return keys + [remove_key(category, entry_id)]


def entry_blocks(builder, category: str) -> List[Dict[str, Any]]:
    blocks = []
    for entry in builder.entries(category):
        blocks.append({
            "id": entry["id"],
            "heading": f"{HEADINGS[category]} {entry['id']}",
            "remove_key": remove_key(category, entry["id"]),
            "fields": [
                {
                    "name": field,
                    "label": label,
                    "placeholder": placeholder,
                    "multiline": multiline,
                    "value": entry[field],
                    "key": widget_key(category, entry["id"], field),
                }
                for field, label, placeholder, multiline in ENTRY_FORMS[category]
            ],
        })
    return blocks
