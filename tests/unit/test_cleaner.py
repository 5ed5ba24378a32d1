"""Unit tests for shared clean-ups."""

import pytest

from cleaner import clean_resume, clean_skill, expand_username_url, sanitize_file_stem


@pytest.mark.unit
@pytest.mark.parametrize("name,expected", [
    ("Ada Lovelace", "Ada_Lovelace"),
    ("José O'Neil", "Jos__O_Neil"),
    ("", "Resume"),
    ("R2D2", "R2D2"),
])
def test_sanitize_file_stem(name, expected):
    """Test non-alphanumerics become underscores and blank names fall back."""
    assert sanitize_file_stem(name) == expected


@pytest.mark.unit
@pytest.mark.parametrize("token,expected", [
    ("https://www.linkedin.com/in/ada", "https://www.linkedin.com/in/ada"),
    ("linkedin.com/in/ada", "https://linkedin.com/in/ada"),
    ("www.linkedin.com/in/johndoe", "https://www.linkedin.com/in/johndoe"),
    ("in/johndoe", "https://linkedin.com/in/johndoe"),
    ("/in/johndoe", "https://linkedin.com/in/johndoe"),
    ("johndoe", "https://linkedin.com/in/johndoe"),
    ("@ada", "https://linkedin.com/in/ada"),
    ("  ", ""),
    ("", ""),
])
def test_expand_username_url(token, expected):
    """Test pasted URLs keep their path and bare handles expand to profile URLs."""
    assert expand_username_url(token, "linkedin.com", "in/") == expected


@pytest.mark.unit
def test_expand_username_url_without_handle_path():
    """Test hosts with no profile prefix put the handle right after the domain."""
    assert expand_username_url("adal", "github.com") == "https://github.com/adal"
    assert expand_username_url("github.com/adal", "github.com") == "https://github.com/adal"


@pytest.mark.unit
def test_clean_skill():
    """Test skills are trimmed and width-normalised."""
    assert clean_skill("  Ｐython ") == "Python"
    assert clean_skill(None) == ""


@pytest.mark.unit
def test_clean_resume_fills_schema():
    """Test partial snapshots are coerced into the full schema."""
    out = clean_resume({
        "personalInfo": {"name": "Ada", "nickname": "A", "email": None},
        "experience": [{"id": "3", "company": "ACME"}, {"company": "no id"}, {"id": 3}],
    })
    assert out["personalInfo"]["name"] == "Ada"
    assert out["personalInfo"]["email"] == ""
    assert "nickname" not in out["personalInfo"]
    assert out["experience"] == [{
        "id": 3, "jobTitle": "", "company": "ACME", "startDate": "", "endDate": "", "description": "",
    }]
    assert out["education"] == [] and out["projects"] == [] and out["skills"] == []
