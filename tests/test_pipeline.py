import json
from datetime import datetime, timezone

import pytest
import adoptapet_etl.pipeline as pipeline
from adoptapet_etl.pipeline import (
    build_document, fetch_details_concurrent, fetch_photos_concurrent,
    original_image_urls, run_etl, summarize, transform_records, write_output,
)

IMG_A = "https://media.adoptapet.com/image/upload/v1/111"
IMG_B = "https://media.adoptapet.com/image/upload/v1/222.jpg"

class FakeAPI:
    def __init__(self, listing, details, sizes):
        self._listing = listing
        self._details = details
        self._sizes = sizes
        self.probed = []

    async def pets_at_shelter(self, shelter_id: str):
        return list(self._listing)

    async def pet_details(self, pet_id: str):
        return self._details.get(pet_id)

    async def image_metadata(self, url: str):
        self.probed.append(url)
        size = self._sizes.get(url)
        if size is None:
            return None
        w, h = size
        return {"originalUrl": url, "width": w, "height": h, "aspectRatio": w / h}

LISTING = [
    {"pet_id": "1", "pet_name": "Rex", "species": "dog", "sex": "m", "age": "puppy"},
    {"pet_id": "2", "pet_name": "Tom", "species": "cat", "large_results_photo_url": "https://x/2.jpg"},
    {"pet_id": "3", "pet_name": "Hop", "species": "rabbit"},
]
DETAILS = {
    "1": {"images": [{"original_url": IMG_A}, {"original_url": "https://x/null"},
                     {"original_url": None}, {"original_url": IMG_B}],
          "housetrained": 1},
    "2": {"images": [], "description": "<p>Shy</p>"},
}
SIZES = {IMG_A: (800, 600), IMG_B: (600, 900)}

def make_api():
    return FakeAPI(LISTING, DETAILS, SIZES)

def test_original_image_urls_filters_placeholders():
    assert original_image_urls(DETAILS["1"]) == [IMG_A, IMG_B]
    assert original_image_urls(None) == []
    assert original_image_urls({}) == []

@pytest.mark.asyncio
async def test_fetch_details_keeps_listing_order():
    pairs = await fetch_details_concurrent(make_api(), LISTING, concurrency=2)
    assert [p["pet_id"] for p, _ in pairs] == ["1", "2", "3"]
    assert pairs[0][1] is DETAILS["1"]
    assert pairs[2][1] is None

@pytest.mark.asyncio
async def test_fetch_photos_per_pet_in_order():
    api = make_api()
    pairs = await fetch_details_concurrent(api, LISTING, concurrency=4)
    photos = await fetch_photos_concurrent(api, pairs, concurrency=1)
    assert [[p["originalUrl"] for p in ps] for ps in photos] == [[IMG_A, IMG_B], [], []]
    assert "https://x/null" not in api.probed

@pytest.mark.asyncio
async def test_failed_probes_are_dropped():
    api = FakeAPI(LISTING, DETAILS, {IMG_B: (10, 10)})
    pairs = await fetch_details_concurrent(api, LISTING, concurrency=4)
    photos = await fetch_photos_concurrent(api, pairs, concurrency=4)
    assert [p["originalUrl"] for p in photos[0]] == [IMG_B]

@pytest.mark.asyncio
async def test_transform_and_summarize(capsys):
    api = make_api()
    pairs = await fetch_details_concurrent(api, LISTING, concurrency=4)
    photos = await fetch_photos_concurrent(api, pairs, concurrency=4)
    pets = transform_records(pairs, photos)
    assert [p["type"] for p in pets] == ["Dog", "Cat", "Rabbit"]
    assert pets[0]["attributes"] == [{"key": "housetrained", "display": "Housetrained"}]
    assert pets[1]["photoUrl"] == "https://x/2.jpg"
    assert pets[1]["short_description"] == "Shy"

    counts = summarize(pets)
    assert counts == {"total": 3, "with_photos": 2, "dogs": 1, "cats": 1, "other": 1}
    out = capsys.readouterr().out
    assert "Hop had no photo" in out
    assert "Breakdown: 1 dogs, 1 cats, 1 other" in out

def test_transform_without_photos():
    pets = transform_records([(LISTING[0], None)])
    assert pets[0]["photos"] == []

def test_build_document_and_write(tmp_path):
    pets = transform_records([(LISTING[0], None)])
    doc = build_document(pets, now=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    assert doc["updatedAt"] == "2025-01-02T03:04:05Z"
    assert doc["pets"] == [{
        "id": "1", "name": "Rex", "type": "Dog", "age": "Puppy", "sex": "Male",
        "url": "https://www.adoptapet.com/pet/1",
    }]

    path = write_output(doc, tmp_path / "data" / "pets.json")
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == doc

@pytest.mark.asyncio
async def test_run_etl_writes_document(tmp_path, monkeypatch):
    fake = make_api()
    monkeypatch.setattr(pipeline, "AdoptapetAPI", lambda http, api_key: fake)
    out = tmp_path / "pets.json"

    path = await run_etl(
        api_key="k",
        shelter_id="83349",
        output=out,
        base_url="https://api.adoptapet.com/search",
        concurrency=4,
        connect_timeout=1,
        read_timeout=1,
    )

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert set(doc) == {"pets", "updatedAt"}
    assert [p["id"] for p in doc["pets"]] == ["1", "2", "3"]
    assert [p["width"] for p in doc["pets"][0]["photos"]] == [800, 600]
    assert "photos" not in doc["pets"][1]
