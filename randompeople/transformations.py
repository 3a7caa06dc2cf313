#!/usr/bin/env python3
"""
Pandas transformations that turn RandomUser profiles into display rows:
- flatten JSON
- select the columns a profile card shows
- build the page model (settings line, error, one section per client)
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .state import OutcomeSlot, ProfileRecord, Snapshot

# Flattened column -> display key. login.uuid is the stable list key.
PROFILE_COLUMNS = {
    "login.uuid": "id",
    "name.title": "title",
    "name.first": "first_name",
    "name.last": "last_name",
    "gender": "gender",
    "email": "email",
    "location.city": "city",
    "location.country": "country",
    "phone": "phone",
    "picture.medium": "picture",
}

SECTION_TITLES = {
    "requests": "Requests Results",
    "urllib": "Urllib Results",
}


def render_profiles(records: Sequence[ProfileRecord]) -> List[Dict[str, Any]]:
    """Flatten profiles into one dict per person, in the order received."""
    if not records:
        return []

    # json_normalize turns nested dicts into dotted columns (name.first, location.city, ...)
    df = pd.json_normalize(list(records))

    # Columns missing from the payload (e.g. a trimmed ?inc= response) show up as empty.
    df = df.reindex(columns=list(PROFILE_COLUMNS)).rename(columns=PROFILE_COLUMNS)

    # NaN is not JSON; cast to object first so the None values survive.
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def render_profile(record: ProfileRecord) -> Dict[str, Any]:
    return render_profiles([record])[0]


def format_elapsed(elapsed_ms: Optional[float]) -> Optional[str]:
    if elapsed_ms is None:
        return None
    return f"{elapsed_ms:.2f} ms"


def render_section(path: str, slot: OutcomeSlot, status: str) -> Dict[str, Any]:
    elapsed = None if slot.elapsed_ms is None else round(slot.elapsed_ms, 2)
    return {
        "client": path,
        "title": SECTION_TITLES.get(path, f"{path.capitalize()} Results"),
        "status": status,
        "elapsed_ms": elapsed,
        "elapsed": format_elapsed(slot.elapsed_ms),
        "people": render_profiles(slot.records),
    }


def render_page(snapshot: Snapshot) -> Dict[str, Any]:
    """Page model for the UI: settings, buttons state, error and both result sections."""
    return {
        "settings": {
            "gender": snapshot.filter.gender or "all",
            "country": snapshot.filter.country,
        },
        "busy": snapshot.busy,
        "loading": "Loading..." if snapshot.busy else None,
        "error": snapshot.error,
        "sections": [
            render_section(path, slot, snapshot.statuses[path].value)
            for path, slot in snapshot.outcomes.items()
        ],
    }
