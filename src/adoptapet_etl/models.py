"""
TypedDict models for requests and responses to/from the Adoptapet API,
the image CDN, and the JSON document written for the website.

Includes:
- ListingPet: summary record from /pets_at_shelter
- ShelterResponse: listing envelope
- PetDetails: extended record from /pet_details
- PetDetailsResponse: detail envelope
- CloudinaryInfo: fl_getinfo response from the image CDN
- PhotoMetadata: image dimensions attached to each output pet
- Attribute: derived compatibility/status label
- Pet: output record (keys match the website's JSON)
- PetsData: output document
- TriState: upstream 0/1/absent flag
"""

from __future__ import annotations
from enum import Enum
from typing import Any, List, Optional, TypedDict

# GET /pets_at_shelter (items)
class _ListingRequired(TypedDict):
    pet_id: str
    pet_name: str

class ListingPet(_ListingRequired, total=False):
    species: Optional[str]
    primary_breed: Optional[str]
    secondary_breed: Optional[str]
    age: Optional[str]           # free text, e.g. "puppy"
    sex: Optional[str]           # "m" / "f"
    size: Optional[str]
    large_results_photo_url: Optional[str]

# GET /pets_at_shelter
class ShelterResponse(TypedDict, total=False):
    pets: List[ListingPet]

class PetImage(TypedDict, total=False):
    original_url: Optional[str]

# GET /pet_details (pet)
class PetDetails(TypedDict, total=False):
    pet_details_url: Optional[str]
    description: Optional[str]   # raw HTML
    images: List[PetImage]
    good_with_cats: Optional[int]
    good_with_dogs: Optional[int]
    good_with_kids: Optional[int]
    housetrained: Optional[int]
    shots_current: Optional[int]
    spayed_neutered: Optional[int]
    special_needs: Optional[int]
    declawed: Optional[int]
    color: Optional[str]

# GET /pet_details
class PetDetailsResponse(TypedDict, total=False):
    pet: Optional[PetDetails]

# GET media.adoptapet.com/image/upload/fl_getinfo/{asset_id}
class CloudinaryAssetInfo(TypedDict):
    width: int
    height: int

class CloudinaryInfo(TypedDict):
    input: CloudinaryAssetInfo

PhotoMetadata = TypedDict(
    "PhotoMetadata",
    {"originalUrl": str, "width": int, "height": int, "aspectRatio": float},
)

class Attribute(TypedDict):
    key: str
    display: str

class TriState(Enum):
    UNKNOWN = "unknown"
    FALSE = "false"
    TRUE = "true"

    @classmethod
    def from_api(cls, value: Any) -> "TriState":
        """Absent -> UNKNOWN; exactly 1 (or "1") -> TRUE; anything else -> FALSE."""
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, bool):
            return cls.FALSE
        if value == 1 or (isinstance(value, str) and value.strip() == "1"):
            return cls.TRUE
        return cls.FALSE

# Output record; optional keys are left out rather than set to None
Pet = TypedDict(
    "Pet",
    {
        "id": str,
        "name": str,
        "type": str,
        "breed": Optional[str],
        "age": Optional[str],
        "sex": Optional[str],
        "size": Optional[str],
        "url": str,
        "photoUrl": Optional[str],
        "photos": List[PhotoMetadata],
        "description": Optional[str],
        "descriptionHtml": Optional[str],
        "descriptionMarkdown": Optional[str],
        "short_description": Optional[str],
        "color": Optional[str],
        "attributes": List[Attribute],
    },
    total=False,
)

PetsData = TypedDict("PetsData", {"pets": List[Pet], "updatedAt": str})
