# canonical schema (empty lists – entries are created by the form controller)
RESUME_SCHEMA = {
    "personalInfo": {
        "name": "",
        "email": "",
        "phone": "",
        "linkedin": "",
        "github": "",
        "address": "",
    },
    "education": [],
    "experience": [],
    "projects": [],
    "skills": [],
}

PERSONAL_FIELDS = tuple(RESUME_SCHEMA["personalInfo"])

# blank record per entry category (the id is assigned on creation)
ENTRY_FIELDS = {
    "education": ("degree", "institution", "startYear", "endYear", "cgpa"),
    "experience": ("jobTitle", "company", "startDate", "endDate", "description"),
    "projects": ("title", "description", "technologies", "year"),
}

SECTIONS = ("personal", "education", "experience", "projects", "skills")
