"""
Shared clean-ups and schema normalisation.
"""
from __future__ import annotations
import copy, re, unicodedata
from typing import Dict, Any

from schema_resume import RESUME_SCHEMA, PERSONAL_FIELDS, ENTRY_FIELDS

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

# ───────────────────────────────────────── helpers ──
def clean_skill(raw: str) -> str:
    return unicodedata.normalize("NFKC", raw or "").strip()

def expand_username_url(token: str, domain: str, handle_path: str = "") -> str:
    """Profile link for token: URLs and host paths keep their path, bare handles expand."""
    token = (token or "").strip()
    if not token:
        return ""
    if token.lower().startswith(("http://", "https://")):
        return token
    if "." in token.split("/", 1)[0]:  # host given, e.g. www.linkedin.com/in/x
        return f"https://{token}"
    if "/" in token:  # path on the profile host, e.g. in/x
        return f"https://{domain}/{token.lstrip('/')}"
    return f"https://{domain}/{handle_path}{token.lstrip('@')}"

def sanitize_file_stem(name: str) -> str:
    """Every non-alphanumeric character becomes '_'; empty names give 'Resume'."""
    return _NON_ALNUM.sub("_", name or "") or "Resume"

# ───────────────────────────────────────── cleaner ──
def clean_resume(r: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce a loaded snapshot into the canonical schema shape."""
    out = copy.deepcopy(RESUME_SCHEMA)

    # personal info – unknown keys dropped, None → ""
    personal = r.get("personalInfo") or {}
    for key in PERSONAL_FIELDS:
        out["personalInfo"][key] = str(personal.get(key) or "")

    # entries – unique integer ids, every field present
    for cat, fields in ENTRY_FIELDS.items():
        seen = set()
        for e in r.get(cat) or []:
            try:
                entry_id = int(e["id"])
            except (KeyError, TypeError, ValueError):
                continue
            if entry_id in seen:
                continue
            seen.add(entry_id)
            entry = {"id": entry_id}
            entry.update({f: str(e.get(f) or "") for f in fields})
            out[cat].append(entry)

    # skills – trimmed, distinct, order kept
    for s in r.get("skills") or []:
        s = clean_skill(s) if isinstance(s, str) else ""
        if s and s not in out["skills"]:
            out["skills"].append(s)
    return out
