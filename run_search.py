"""Convenience script for running a competitor search from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the competitorfinder package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from competitorfinder.config import ClientSettings  # noqa: E402  (import after path setup)
from competitorfinder.ui import ProxyClient, SearchFormController, SearchState  # noqa: E402


async def run(url: str, *, expand: bool, settings: ClientSettings) -> int:
    client = ProxyClient(settings)
    form = SearchFormController(client)
    form.set_url(url)

    try:
        state = await form.submit()
        if state is SearchState.FAILED:
            logging.error("Search failed: %s", form.error)
            return 1

        view = form.render()
        logging.info("Found %d similar companies", len(view.cards))

        output = []
        for card in view.cards:
            entry = card.competitor.model_dump()
            if expand:
                await card.toggle()
                if card.error:
                    entry["error"] = card.error
                elif card.content is not None:
                    entry["content"] = card.content.model_dump(by_alias=True, exclude_none=True)
            output.append(entry)
    finally:
        client.close()

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    """Search for companies similar to the given URL via the running proxy API."""

    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("url", help="Company website to find competitors for")
    parser.add_argument("--expand", action="store_true", help="Fetch page contents for every result")
    parser.add_argument("--api-url", help="Root URL of the proxy API")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    settings = ClientSettings.from_env()
    if args.api_url:
        settings = settings.model_copy(update={"api_url": args.api_url})

    sys.exit(asyncio.run(run(args.url, expand=args.expand, settings=settings)))


if __name__ == "__main__":
    main()
