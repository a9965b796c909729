import pytest
from adoptapet_etl.urls import (
    canonical_original_url, default_pet_url, extract_asset_id, high_res_url,
    is_placeholder, metadata_probe_url,
)

URL = "https://media.adoptapet.com/image/upload/v123/1268757503"

def test_high_res_url():
    assert high_res_url(URL) == (
        "https://media.adoptapet.com/image/upload/c_fill,w_800,h_600,g_auto/f_auto,q_auto/1268757503"
    )

@pytest.mark.parametrize("value", [None, "", " ", "\t\n"])
def test_high_res_url_empty(value):
    assert high_res_url(value) is None

def test_asset_id_drops_extension():
    assert extract_asset_id("https://pet-uploads.adoptapet.com/a/b/1268757503.jpg") == "1268757503"
    assert extract_asset_id("  1268757503.v2.png  ") == "1268757503"

@pytest.mark.parametrize("value", [None, "", "   ", "https://example.com/", "https://example.com/.jpg"])
def test_asset_id_missing(value):
    assert extract_asset_id(value) is None

def test_high_res_falls_back_to_input_without_asset_id():
    assert high_res_url("https://example.com/photos/") == "https://example.com/photos/"

def test_metadata_probe_and_original():
    assert metadata_probe_url(URL) == "https://media.adoptapet.com/image/upload/fl_getinfo/1268757503"
    assert canonical_original_url(URL) == "https://media.adoptapet.com/image/upload/f_auto,q_auto/1268757503"
    assert metadata_probe_url("") is None
    assert canonical_original_url("https://example.com/") is None

@pytest.mark.parametrize("url", [
    URL,
    "https://pet-uploads.adoptapet.com/1/2/3/987.jpg",
    "abc.png",
])
def test_derivations_share_asset_id(url):
    asset_id = extract_asset_id(url)
    assert high_res_url(url).endswith("/" + asset_id)
    assert metadata_probe_url(url).endswith("/" + asset_id)
    assert canonical_original_url(url).endswith("/" + asset_id)

def test_default_pet_url():
    assert default_pet_url("42") == "https://www.adoptapet.com/pet/42"

def test_is_placeholder():
    assert is_placeholder("https://media.adoptapet.com/image/upload/null")
    assert not is_placeholder(URL)
