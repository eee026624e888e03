"""
Dashboard Display Strings.

Locale tables for every human-readable string the dashboard derives.
Indonesian is the default locale; English is provided alongside it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class DisplayStrings:
    """User-facing strings for one locale."""

    overdue_by: str
    due_today: str
    one_day_left: str
    days_left: str
    month_abbreviations: Tuple[str, ...]
    month_names: Tuple[str, ...]
    weekday_abbreviations: Tuple[str, ...]    # Monday first
    untitled_task: str
    save_failed: str
    tasks_done: str


INDONESIAN = DisplayStrings(
    overdue_by="Lewat {days} hari",
    due_today="Tenggat: Hari ini",
    one_day_left="Sisa 1 hari",
    days_left="Sisa {days} hari",
    month_abbreviations=(
        "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
        "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
    ),
    month_names=(
        "Januari", "Februari", "Maret", "April", "Mei", "Juni",
        "Juli", "Agustus", "September", "Oktober", "November", "Desember",
    ),
    weekday_abbreviations=("Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min"),
    untitled_task="(tanpa judul)",
    save_failed="Gagal menyimpan proyek. Silakan coba lagi.",
    tasks_done="{done}/{total} selesai",
)

ENGLISH = DisplayStrings(
    overdue_by="overdue by {days} days",
    due_today="due today",
    one_day_left="1 day left",
    days_left="{days} days left",
    month_abbreviations=(
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
    month_names=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    weekday_abbreviations=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    untitled_task="(untitled)",
    save_failed="Could not save the project. Please try again.",
    tasks_done="{done}/{total} done",
)

LOCALES: Dict[str, DisplayStrings] = {
    "id": INDONESIAN,
    "en": ENGLISH,
}


def get_display_strings(locale: str) -> DisplayStrings:
    """Get the strings for a locale code, falling back to Indonesian."""
    return LOCALES.get((locale or "").lower(), INDONESIAN)
