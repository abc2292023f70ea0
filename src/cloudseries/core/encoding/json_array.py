"""JSON encoders for match results and series."""

import json
import math
from collections.abc import Iterable
from typing import Any

from cloudseries.core.models import MatchResult, Series


def match_to_dict(match: MatchResult) -> dict[str, Any]:
    """Convert a match result to a JSON-serializable dict."""
    return {"path": match.name, "is_leaf": match.is_leaf}


def series_to_dict(series: Series) -> dict[str, Any]:
    """Convert a series to a JSON-serializable dict.

    Missing values and non-finite floats are rendered as null.
    """
    return {
        "name": series.name,
        "step": series.step,
        "start": series.start,
        "end": series.end,
        "values": [
            v if v is not None and math.isfinite(v) else None for v in series.values
        ],
    }


def encode_matches(matches: Iterable[MatchResult]) -> str:
    """Encode match results as a JSON array."""
    return json.dumps([match_to_dict(m) for m in matches])


def encode_series(series: Iterable[Series]) -> str:
    """Encode series as a JSON array.

    Returns:
        JSON string. "[]" if no series.
    """
    return json.dumps([series_to_dict(s) for s in series])
