#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from dugout.data import (
    Credential,
    FantasyClient,
    NetworkQuality,
    PlayerFilter,
    PlayersManager,
    Preferences,
    ScrollMetrics,
    get_settings,
    max_records_for_network,
)
from dugout.data.preferences import JsonFileStorage


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quickstart for the players view model")
    p.add_argument("filter", nargs="?", default="ALL_BATTERS", choices=[f.value for f in PlayerFilter])
    p.add_argument("--search", default="", help="Name search")
    p.add_argument("--network", default="4g", choices=[q.value for q in NetworkQuality])
    p.add_argument("--pages", type=int, default=2, help="Pages to reveal")
    p.add_argument("--prefs", default=None, help="JSON file for stored preferences")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Token from a prior OAuth sign-in
    credential = Credential(
        access_token=os.environ["YAHOO_ACCESS_TOKEN"],
        refresh_token=os.environ.get("YAHOO_REFRESH_TOKEN"),
    )

    def on_sign_out():
        print("Session expired: sign in again")

    client = FantasyClient.from_settings(get_settings(), credential, on_sign_out=on_sign_out)
    prefs = Preferences(JsonFileStorage(args.prefs)) if args.prefs else Preferences()
    manager = PlayersManager(
        client,
        preferences=prefs,
        max_records=max_records_for_network(args.network),
    )

    try:
        profile = await client.user_profile()
        if profile.ok:
            print(f"Signed in as {profile.data.display_name}")

        manager.on_filter_change(args.filter)
        if args.search:
            manager.on_search_change(args.search)
        view = await manager.ensure_loaded()
        if view.error is not None:
            print(f"Error: {view.error}")
            return

        # Simulate scrolling to the bottom once per page
        for _ in range(args.pages - 1):
            manager.reveal_controller.on_scroll(
                ScrollMetrics(scroll_top=1000, scroll_height=1200, viewport_height=600)
            )
            manager.on_rendered()

        view = manager.view
        print(view.summary)
        print(" | ".join(col.title for col in view.columns))
        for player in view.filtered_players:
            print(
                f"#{player.display_rank:<3} (orig {player.original_rank:<4}) "
                + " | ".join(col.cell(player) for col in view.columns[1:])
            )
        print(view.progress)
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
