from __future__ import annotations
import asyncio, json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from http_client import HttpClient

from .api import AdoptapetAPI
from .models import ListingPet, Pet, PetDetails, PhotoMetadata
from .normalize import pets_to_json, to_pet
from .urls import is_placeholder
from .utils import utc_timestamp, validate_iso8601_utc

PetWithDetails = Tuple[ListingPet, Optional[PetDetails]]

def clamp_concurrency(concurrency: int) -> int:
    return max(1, min(32, concurrency))

def original_image_urls(details: Optional[PetDetails]) -> List[str]:
    """Detail image URLs worth probing: present, non-empty, not the '/null' placeholder."""
    if details is None:
        return []
    urls = []
    for image in details.get("images") or []:
        url = image.get("original_url")
        if url and url.strip() and not is_placeholder(url):
            urls.append(url)
    return urls

async def fetch_details_concurrent(api: AdoptapetAPI, listing: Sequence[ListingPet], concurrency: int) -> List[PetWithDetails]:
    """
    Fetch details concurrently for every listed pet, bounded by semaphore.
    Keeps listing order; a failed fetch pairs the pet with None.
    Logs progress every 100 records.
    """
    sem = asyncio.Semaphore(clamp_concurrency(concurrency))

    async def worker(idx: int, pet: ListingPet) -> Tuple[int, Optional[PetDetails]]:
        async with sem:
            return idx, await api.pet_details(pet["pet_id"])

    tasks = [asyncio.create_task(worker(i, pet)) for i, pet in enumerate(listing)]
    details: List[Optional[PetDetails]] = [None] * len(listing)
    done = 0
    for fut in asyncio.as_completed(tasks):
        idx, res = await fut
        details[idx] = res
        done += 1
        if done % 100 == 0 or done == len(listing):
            print(f"Fetched {done}/{len(listing)} details…")
    return list(zip(listing, details))

async def fetch_photos_concurrent(api: AdoptapetAPI, pairs: Sequence[PetWithDetails], concurrency: int) -> List[List[PhotoMetadata]]:
    """
    Probe every usable detail image of every pet, bounded by semaphore.
    Returns one list per pet, in image order, without the probes that failed.
    """
    sem = asyncio.Semaphore(clamp_concurrency(concurrency))

    async def probe(url: str) -> Optional[PhotoMetadata]:
        async with sem:
            return await api.image_metadata(url)

    async def photos_for(details: Optional[PetDetails]) -> List[PhotoMetadata]:
        results = await asyncio.gather(*(probe(url) for url in original_image_urls(details)))
        return [r for r in results if r is not None]

    return list(await asyncio.gather(*(photos_for(details) for _, details in pairs)))

def transform_records(pairs: Sequence[PetWithDetails], photos: Optional[Sequence[Sequence[PhotoMetadata]]] = None) -> List[Pet]:
    if photos is None:
        photos = [[] for _ in pairs]
    return [to_pet(pet, details, pet_photos) for (pet, details), pet_photos in zip(pairs, photos)]

def summarize(pets: Sequence[Pet]) -> Dict[str, int]:
    """Print photo coverage and the Dog/Cat/other breakdown; return the counts."""
    without_photos = [p["name"] for p in pets if not p.get("photoUrl")]
    for name in without_photos:
        print(f"{name} had no photo")
    with_photos = len(pets) - len(without_photos)
    print(f"{len(pets)} pets total, {with_photos} with photos")

    dogs = sum(1 for p in pets if p["type"] == "Dog")
    cats = sum(1 for p in pets if p["type"] == "Cat")
    other = len(pets) - dogs - cats
    print(f"Breakdown: {dogs} dogs, {cats} cats, {other} other")
    return {"total": len(pets), "with_photos": with_photos, "dogs": dogs, "cats": cats, "other": other}

def build_document(pets: Sequence[Pet], now: Optional[datetime] = None) -> Dict[str, Any]:
    updated_at = utc_timestamp(now)
    assert validate_iso8601_utc(updated_at), "updatedAt is not ISO8601 UTC"
    return {"pets": pets_to_json(list(pets)), "updatedAt": updated_at}

def write_output(document: Dict[str, Any], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    return out

async def run_etl(
    api_key: str,
    shelter_id: str,
    output: str | Path,
    base_url: str,
    concurrency: int,
    connect_timeout: float,
    read_timeout: float,
) -> Path:
    """
    Orchestrate ETL:
        1. List pets at the shelter
        2. Fetch details concurrently
        3. Probe photo dimensions concurrently
        4. Normalize records
        5. Write the JSON document
    """
    print(f"""
        ====== Adoptapet ETL (async) ======
        Base URL       : {base_url}
        Shelter        : {shelter_id}
        Output         : {output}
        Concurrency    : {clamp_concurrency(concurrency)}
        Timeouts (s)   : connect={connect_timeout} read={read_timeout}
        ===================================
    """)
    async with HttpClient(
        base_url=base_url,
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    ) as http:
        api = AdoptapetAPI(http, api_key)

        print(f"Fetching pets from Adoptapet for shelter {shelter_id}...")
        listing = await api.pets_at_shelter(shelter_id)
        print(f"Fetched {len(listing)} pets from listing")

        print("Fetching pet details for high-res images...")
        pairs = await fetch_details_concurrent(api, listing, concurrency)

        print("Fetching photo metadata...")
        photos = await fetch_photos_concurrent(api, pairs, concurrency)

    pets = transform_records(pairs, photos)
    summarize(pets)

    path = write_output(build_document(pets), output)
    print(f"Wrote {len(pets)} pets to {path}")
    return path
