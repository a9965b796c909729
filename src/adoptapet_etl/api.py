"""
Async API wrapper around the Adoptapet search endpoints and the image CDN.

Provides a typed interface for:
- Listing every pet at a shelter (`pets_at_shelter`)
- Fetching details for a single pet (`pet_details`)
- Probing an image's dimensions on the CDN (`image_metadata`)

The listing call is the only one allowed to fail the run. Detail and image
probes degrade to None with a stderr warning.
"""
from __future__ import annotations
import sys
from typing import Any, List, Optional

import httpx

from http_client import HttpClient

from .models import CloudinaryInfo, ListingPet, PetDetails, PetDetailsResponse, PhotoMetadata, ShelterResponse
from .urls import canonical_original_url, metadata_probe_url

LISTING_END_NUMBER = 500

DETAIL_TEXT_FIELDS = ("pet_details_url", "description", "color")

def details_shape_error(pet: Any) -> Optional[str]:
    """Describe the first field that doesn't match PetDetails, or None if the record is usable."""
    if not isinstance(pet, dict):
        return f"pet is {type(pet).__name__}, not an object"
    for field in DETAIL_TEXT_FIELDS:
        value = pet.get(field)
        if value is not None and not isinstance(value, str):
            return f"{field} is {type(value).__name__}, not a string"
    images = pet.get("images")
    if images is None:
        return None
    if not isinstance(images, list):
        return f"images is {type(images).__name__}, not a list"
    for i, image in enumerate(images):
        if not isinstance(image, dict):
            return f"images[{i}] is {type(image).__name__}, not an object"
        url = image.get("original_url")
        if url is not None and not isinstance(url, str):
            return f"images[{i}].original_url is {type(url).__name__}, not a string"
    return None

class AdoptapetAPI:

    def __init__(self, http: HttpClient, api_key: str):
        self.http = http
        self.api_key = api_key

    async def pets_at_shelter(self, shelter_id: str) -> List[ListingPet]:
        resp = await self.http.request(
            "GET",
            "/pets_at_shelter",
            params={
                "key": self.api_key,
                "shelter_id": shelter_id,
                "start_number": 1,
                "end_number": LISTING_END_NUMBER,
                "output": "json",
            },
        )
        payload: ShelterResponse = resp.json()
        return list(payload.get("pets") or [])

    async def pet_details(self, pet_id: str) -> Optional[PetDetails]:
        try:
            resp = await self.http.request(
                "GET",
                "/pet_details",
                params={"key": self.api_key, "pet_id": pet_id, "output": "json"},
            )
        except httpx.HTTPError as e:
            print(f"[warn] pet_details({pet_id}) failed: {e}", file=sys.stderr)
            return None
        try:
            payload: PetDetailsResponse = resp.json()
        except ValueError:
            print(f"[warn] non-JSON details for id {pet_id}: {resp.text[:200]}", file=sys.stderr)
            return None
        if not isinstance(payload, dict):
            print(f"[warn] unexpected details payload for id {pet_id}", file=sys.stderr)
            return None
        pet = payload.get("pet")
        if pet is None:
            return None
        problem = details_shape_error(pet)
        if problem is not None:
            print(f"[warn] malformed details for id {pet_id}: {problem}", file=sys.stderr)
            return None
        return pet or None

    async def image_metadata(self, original_url: str) -> Optional[PhotoMetadata]:
        info_url = metadata_probe_url(original_url)
        cdn_url = canonical_original_url(original_url)
        if info_url is None or cdn_url is None:
            return None
        try:
            resp = await self.http.request("GET", info_url)
            info: CloudinaryInfo = resp.json()
            width = int(info["input"]["width"])
            height = int(info["input"]["height"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            print(f"[warn] image metadata for {original_url} unavailable: {e}", file=sys.stderr)
            return None
        if width <= 0 or height <= 0:
            print(f"[warn] image metadata for {original_url} has no dimensions", file=sys.stderr)
            return None
        return {
            "originalUrl": cdn_url,
            "width": width,
            "height": height,
            "aspectRatio": width / height,
        }
