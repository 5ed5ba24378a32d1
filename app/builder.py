"""
Form controller: owns the in-memory résumé model and every mutation on it.

The UI layer constructs exactly one ResumeBuilder per session and calls into
it from widget callbacks. Listeners registered with subscribe() run after
each mutation (the preview hooks in there).
"""

from __future__ import annotations
import copy
import logging
import threading
from typing import Any, Callable, Dict, List

from schema_resume import RESUME_SCHEMA, PERSONAL_FIELDS, ENTRY_FIELDS, SECTIONS
from cleaner import clean_skill, clean_resume
from debounce import Debouncer
import config

log = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class UnknownCategoryError(KeyError):
    """Raised for an entry category other than education/experience/projects."""


class ResumeBuilder:
    def __init__(self, debounce_ms: int | None = None):
        self.resume_data: Dict[str, Any] = copy.deepcopy(RESUME_SCHEMA)
        self.current_section = "personal"
        self.entry_counters = {cat: 0 for cat in ENTRY_FIELDS}
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        wait = config.DEBOUNCE_MS if debounce_ms is None else debounce_ms
        self._debounced_personal = Debouncer(self.set_personal, wait)
        self.load_from_storage()

    # ───────────────────────────────────── listeners ──
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self.resume_data)
        self.save_to_storage()

    # ───────────────────────────────────── navigation ──
    def switch_section(self, section: str) -> bool:
        if section not in SECTIONS:
            return False
        self.current_section = section
        return True

    # ───────────────────────────────────── personal info ──
    def set_personal(self, field: str, value: str) -> bool:
        if field not in PERSONAL_FIELDS:
            return False
        with self._lock:
            self.resume_data["personalInfo"][field] = value
        self._changed()
        return True

    def update_personal(self, field: str, value: str) -> None:
        """Debounced set_personal; only the last value of a burst is applied."""
        if field in PERSONAL_FIELDS:
            self._debounced_personal(field, value)

    def flush(self) -> int:
        """Apply pending debounced updates immediately."""
        return self._debounced_personal.flush()

    def cancel_pending(self) -> None:
        self._debounced_personal.cancel()

    # ───────────────────────────────────── entries ──
    def entries(self, category: str) -> List[Dict[str, Any]]:
        if category not in ENTRY_FIELDS:
            raise UnknownCategoryError(category)
        return self.resume_data[category]

    def add_entry(self, category: str) -> Dict[str, Any]:
        entries = self.entries(category)
        with self._lock:
            self.entry_counters[category] += 1
            entry = {"id": self.entry_counters[category]}
            entry.update({f: "" for f in ENTRY_FIELDS[category]})
            entries.append(entry)
        log.debug("Added %s entry %d", category, entry["id"])
        self._changed()
        return entry

    def add_education(self) -> Dict[str, Any]:
        return self.add_entry("education")

    def add_experience(self) -> Dict[str, Any]:
        return self.add_entry("experience")

    def add_project(self) -> Dict[str, Any]:
        return self.add_entry("projects")

    def get_entry(self, category: str, entry_id: int) -> Dict[str, Any] | None:
        return next((e for e in self.entries(category) if e["id"] == entry_id), None)

    def update_entry(self, category: str, entry_id: int, field: str, value: str) -> bool:
        entry = self.get_entry(category, entry_id)
        if entry is None or field not in ENTRY_FIELDS[category]:
            return False
        with self._lock:
            entry[field] = value
        self._changed()
        return True

    def remove_entry(self, category: str, entry_id: int) -> bool:
        entries = self.entries(category)
        with self._lock:
            kept = [e for e in entries if e["id"] != entry_id]
            removed = len(kept) != len(entries)
            self.resume_data[category] = kept
        if removed:
            log.debug("Removed %s entry %d", category, entry_id)
        self._changed()
        return removed

    # ───────────────────────────────────── skills ──
    def add_skill(self, raw: str) -> bool:
        skill = clean_skill(raw)
        with self._lock:
            if not skill or skill in self.resume_data["skills"]:
                return False
            self.resume_data["skills"].append(skill)
        self._changed()
        return True

    def remove_skill(self, skill: str) -> bool:
        with self._lock:
            skills = self.resume_data["skills"]
            if skill not in skills:
                return False
            self.resume_data["skills"] = [s for s in skills if s != skill]
        self._changed()
        return True

    # ───────────────────────────────────── snapshots ──
    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.resume_data)

    def load(self, data: Dict[str, Any]) -> None:
        """Replace the model; each id counter moves past the highest loaded id."""
        self.cancel_pending()
        with self._lock:
            self.resume_data = clean_resume(data)
            for cat in ENTRY_FIELDS:
                ids = [e["id"] for e in self.resume_data[cat]]
                self.entry_counters[cat] = max([self.entry_counters[cat], *ids])
        self._changed()

    # ───────────────────────────────────── storage (inert) ──
    def load_from_storage(self) -> None:
        log.info("Storage loading skipped; starting with an empty résumé")

    def save_to_storage(self) -> None:
        log.debug("Would save to storage: %s", self.resume_data)
