"""
Command-line entrypoint for the Adoptapet ETL pipeline.

- Parses CLI args and config
- Runs the pipeline:
    1. List pets at the shelter
    2. Fetch details and photo metadata concurrently
    3. Normalize records
    4. Write the JSON document

Listing failures and unwritable output paths exit with status 1;
KeyboardInterrupt is reported cleanly.
"""
from __future__ import annotations
import asyncio, sys

import httpx

from .config import parse_args
from .pipeline import run_etl

def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        asyncio.run(run_etl(
            api_key=args.api_key,
            shelter_id=args.shelter_id,
            output=args.output,
            base_url=args.base_url,
            concurrency=args.concurrency,
            connect_timeout=args.connect_timeout,
            read_timeout=args.read_timeout,
        ))
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Invalid listing response: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Could not write output: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)

if __name__ == "__main__":
    main()
