"""
Turn a listing record + optional detail record + photo metadata into the
website's Pet record.

Nothing in here raises on missing or odd upstream data: every derived field
degrades to absent (or a default) instead.
"""
from __future__ import annotations
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .attributes import build_attributes
from .models import ListingPet, Pet, PetDetails, PhotoMetadata
from .text import clean_text, html_to_markdown, sanitize_html
from .urls import default_pet_url, high_res_url, is_placeholder
from .utils import capitalize_first, first_of

UNKNOWN_BREED = "Unknown Type"
SHORT_DESCRIPTION_MAX = 200
SHORT_DESCRIPTION_CUTOFF_RE = re.compile(re.escape("please email"), re.IGNORECASE)

PET_KEYS: Tuple[str, ...] = (
    "id", "name", "type", "breed", "age", "sex", "size", "url", "photoUrl", "photos",
    "description", "descriptionHtml", "descriptionMarkdown", "short_description",
    "color", "attributes",
)

def pet_type(species: Optional[str]) -> str:
    if not species:
        return "Other"
    lowered = species.lower()
    if lowered == "dog":
        return "Dog"
    if lowered == "cat":
        return "Cat"
    return capitalize_first(lowered)

def combine_breeds(primary: Optional[str], secondary: Optional[str]) -> Optional[str]:
    kept = [b for b in (primary, secondary) if b and b.strip() and b.strip() != UNKNOWN_BREED]
    return " / ".join(kept) or None

def expand_sex(sex: Optional[str]) -> Optional[str]:
    if not sex:
        return None
    lowered = sex.lower()
    if lowered == "m":
        return "Male"
    if lowered == "f":
        return "Female"
    return sex

def _usable_photo(url: Optional[str]) -> Optional[str]:
    if url is None or is_placeholder(url):
        return None
    return url

def primary_photo_url(listing: ListingPet, details: Optional[PetDetails]) -> Optional[str]:
    """
    High-res first detail image, else the listing's photo. The chosen URL is
    dropped when it is a '/null' placeholder; the listing photo is not retried.
    """
    def from_details() -> Optional[str]:
        images = (details or {}).get("images") or []
        if not images:
            return None
        return high_res_url(images[0].get("original_url"))

    def from_listing() -> Optional[str]:
        return listing.get("large_results_photo_url") or None

    return _usable_photo(first_of((from_details, from_listing)))

def short_description(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None

    def before_contact() -> Optional[str]:
        m = SHORT_DESCRIPTION_CUTOFF_RE.search(text)
        return text[:m.start()].strip() if m and m.start() > 0 else None

    def truncated() -> Optional[str]:
        if len(text) > SHORT_DESCRIPTION_MAX:
            return text[:SHORT_DESCRIPTION_MAX].strip() + "..."
        return None

    steps: Sequence[Callable[[], Optional[str]]] = (before_contact, truncated, lambda: text)
    return first_of(steps)

def canonical_url(listing: ListingPet, details: Optional[PetDetails]) -> str:
    return (details or {}).get("pet_details_url") or default_pet_url(listing["pet_id"])

def to_pet(
    listing: ListingPet,
    details: Optional[PetDetails] = None,
    photos: Sequence[PhotoMetadata] = (),
) -> Pet:
    """Normalize one animal. Pure: identical inputs give an identical record."""
    raw_description = (details or {}).get("description")
    description = clean_text(raw_description) if raw_description is not None else None
    age = listing.get("age")

    return {
        "id": listing["pet_id"],
        "name": listing["pet_name"],
        "type": pet_type(listing.get("species")),
        "breed": combine_breeds(listing.get("primary_breed"), listing.get("secondary_breed")),
        "age": capitalize_first(age) if age is not None else None,
        "sex": expand_sex(listing.get("sex")),
        "size": listing.get("size"),
        "url": canonical_url(listing, details),
        "photoUrl": primary_photo_url(listing, details),
        "photos": list(photos),
        "description": description,
        "descriptionHtml": sanitize_html(raw_description) if raw_description is not None else None,
        "descriptionMarkdown": html_to_markdown(raw_description) if raw_description is not None else None,
        "short_description": short_description(description),
        "color": (details or {}).get("color"),
        "attributes": build_attributes(details),
    }

def pet_to_json(pet: Pet) -> Dict[str, Any]:
    """Serializable dict in website key order; absent fields and empty lists are left out."""
    out: Dict[str, Any] = {}
    for key in PET_KEYS:
        value = pet.get(key)
        if value is None or (isinstance(value, list) and not value):
            continue
        out[key] = value
    return out

def pets_to_json(pets: List[Pet]) -> List[Dict[str, Any]]:
    return [pet_to_json(p) for p in pets]
