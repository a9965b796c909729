"""
Image CDN (Cloudinary, served from media.adoptapet.com) URL derivations.

Every derivation is keyed on the asset id: the last path segment of an
upstream image URL with any extension removed, e.g.

    https://media.adoptapet.com/image/upload/v123/1268757503.jpg -> 1268757503
"""
from __future__ import annotations
from typing import Optional

CDN_UPLOAD_BASE = "https://media.adoptapet.com/image/upload"
HIGH_RES_TRANSFORM = "c_fill,w_800,h_600,g_auto/f_auto,q_auto"
METADATA_PROBE_TRANSFORM = "fl_getinfo"
ORIGINAL_TRANSFORM = "f_auto,q_auto"

PET_PAGE_BASE = "https://www.adoptapet.com/pet"

# Upstream marks "no photo" with URLs ending in /null
PLACEHOLDER_FRAGMENT = "/null"

def extract_asset_id(url: Optional[str]) -> Optional[str]:
    if url is None:
        return None
    url = url.strip()
    if not url:
        return None
    asset_id = url.rsplit("/", 1)[-1].split(".", 1)[0]
    return asset_id or None

def high_res_url(url: Optional[str]) -> Optional[str]:
    """800x600 fill crop. Falls back to the input URL when no asset id can be isolated."""
    if url is None or not url.strip():
        return None
    asset_id = extract_asset_id(url)
    if asset_id is None:
        return url.strip()
    return f"{CDN_UPLOAD_BASE}/{HIGH_RES_TRANSFORM}/{asset_id}"

def metadata_probe_url(url: Optional[str]) -> Optional[str]:
    asset_id = extract_asset_id(url)
    if asset_id is None:
        return None
    return f"{CDN_UPLOAD_BASE}/{METADATA_PROBE_TRANSFORM}/{asset_id}"

def canonical_original_url(url: Optional[str]) -> Optional[str]:
    asset_id = extract_asset_id(url)
    if asset_id is None:
        return None
    return f"{CDN_UPLOAD_BASE}/{ORIGINAL_TRANSFORM}/{asset_id}"

def default_pet_url(pet_id: str) -> str:
    return f"{PET_PAGE_BASE}/{pet_id}"

def is_placeholder(url: str) -> bool:
    return PLACEHOLDER_FRAGMENT in url
