from __future__ import annotations
import argparse, os

DEFAULT_BASE_URL = "https://api.adoptapet.com/search"
DEFAULT_SHELTER_ID = "83349"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fetch pets from Adoptapet API and write to JSON file")
    api_key = os.getenv("ADOPTAPET_API_KEY")
    p.add_argument("--api-key", default=api_key, required=api_key is None,
                   help="Adoptapet API key (env ADOPTAPET_API_KEY)")
    p.add_argument("--shelter-id", default=os.getenv("SHELTER_ID", DEFAULT_SHELTER_ID))
    p.add_argument("-o", "--output", default=os.getenv("OUTPUT_FILE", "data/pets.json"),
                   help="Output JSON file path")
    p.add_argument("--base-url", default=os.getenv("ADOPTAPET_BASE_URL", DEFAULT_BASE_URL))
    p.add_argument("--concurrency", type=int, default=int(os.getenv("CONCURRENCY", "8")))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    return p

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
