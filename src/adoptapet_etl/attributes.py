from __future__ import annotations
from typing import List, Optional, Tuple

from .models import Attribute, PetDetails, TriState

# Declaration order is the output order
ATTRIBUTE_LABELS: Tuple[Tuple[str, str], ...] = (
    ("good_with_cats", "Good with cats"),
    ("good_with_dogs", "Good with dogs"),
    ("good_with_kids", "Good with kids"),
    ("housetrained", "Housetrained"),
    ("shots_current", "Shots current"),
    ("spayed_neutered", "Spayed/Neutered"),
    ("special_needs", "Special needs"),
    ("declawed", "Declawed"),
)

def build_attributes(details: Optional[PetDetails]) -> List[Attribute]:
    """Labels for every flag the upstream reports as 1; unknown and 0 are dropped alike."""
    if details is None:
        return []
    return [
        {"key": key, "display": display}
        for key, display in ATTRIBUTE_LABELS
        if TriState.from_api(details.get(key)) is TriState.TRUE
    ]
