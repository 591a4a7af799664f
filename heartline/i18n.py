"""UI strings for the two supported languages (English, Hungarian)."""

from __future__ import annotations
from typing import Dict, List

TRANSLATIONS: Dict[str, Dict[str, object]] = {
    "en": {
        "title": "Relationship Timeline",
        "add_event": "Add Event",
        "edit_event": "Edit Event",
        "event_description": "Event Description",
        "satisfaction_score": "Satisfaction Score",
        "date": "Date",
        "month_only": "Month only",
        "specific_day": "Specific day",
        "save": "Save",
        "cancel": "Cancel",
        "update": "Update",
        "events": "Events",
        "no_events": "No events yet. Add your first event above!",
        "edit": "Edit",
        "delete": "Delete",
        "export_data": "Export Data",
        "import_data": "Import Data",
        "print": "Print",
        "view_json": "View JSON",
        "copied": "Copied!",
        "copy_json": "Copy JSON",
        "line_style": "Line Style",
        "curved": "Curved",
        "straight": "Straight",
        "satisfaction_level": "Satisfaction Level",
        "timeline": "Timeline",
        "delete_confirm": "Are you sure you want to delete this event?",
        "import_success": "Data imported successfully!",
        "import_error": "Error importing data. Please check the file format.",
        "score_guide_title": "Score Guide",
        "score_guide": [
            "+8: Extremely Happy",
            "+4: Very Happy",
            "+2: Happy",
            "0: Neutral",
            "-2: Unhappy",
            "-4: Very Unhappy",
            "-8: Extremely Unhappy",
        ],
    },
    "hu": {
        "title": "Kapcsolat Idővonal",
        "add_event": "Esemény Hozzáadása",
        "edit_event": "Esemény Szerkesztése",
        "event_description": "Esemény Leírása",
        "satisfaction_score": "Elégedettségi Pontszám",
        "date": "Dátum",
        "month_only": "Csak hónap",
        "specific_day": "Konkrét nap",
        "save": "Mentés",
        "cancel": "Mégse",
        "update": "Frissítés",
        "events": "Események",
        "no_events": "Még nincsenek események. Add hozzá az elsőt fent!",
        "edit": "Szerkesztés",
        "delete": "Törlés",
        "export_data": "Adatok Exportálása",
        "import_data": "Adatok Importálása",
        "print": "Nyomtatás",
        "view_json": "JSON Megtekintése",
        "copied": "Másolva!",
        "copy_json": "JSON Másolása",
        "line_style": "Vonal Stílus",
        "curved": "Ívelt",
        "straight": "Egyenes",
        "satisfaction_level": "Elégedettségi Szint",
        "timeline": "Idővonal",
        "delete_confirm": "Biztosan törölni szeretnéd ezt az eseményt?",
        "import_success": "Adatok sikeresen importálva!",
        "import_error": "Hiba az importálás során. Kérlek ellenőrizd a fájl formátumát.",
        "score_guide_title": "Pontszám Útmutató",
        "score_guide": [
            "+8: Rendkívül Boldog",
            "+4: Nagyon Boldog",
            "+2: Boldog",
            "0: Semleges",
            "-2: Boldogtalan",
            "-4: Nagyon Boldogtalan",
            "-8: Rendkívül Boldogtalan",
        ],
    },
}


def t(language: str, key: str) -> str:
    table = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    return str(table.get(key, TRANSLATIONS["en"][key]))


def score_guide(language: str) -> List[str]:
    table = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    return list(table["score_guide"])
