"""
Pypager Quick Start Example

Features covered:
- Connect a client
- Describe list items and endpoints
- Step through offset and cursor pages
- Collect every page into one list

Run with: API_TOKEN=... python example_quickstart.py
"""

import asyncio
import os
from typing import Optional

from pydantic import BaseModel

from pypager import (
    CursorPage,
    Endpoint,
    NoRemainingPages,
    OffsetPage,
    connect,
    disconnect,
)


# ============================================================================
# 1. DESCRIBE YOUR ITEMS AND ENDPOINTS
# ============================================================================


class Track(BaseModel):
    """A track as it appears in list responses."""

    id: str
    name: str
    duration_ms: Optional[int] = None


class SavedTrack(BaseModel):
    added_at: str
    track: Track


class PlayHistory(BaseModel):
    played_at: str
    track: Track


class RecentlyPlayed(Endpoint):
    """Cursor-paginated endpoint; pages re-request this path with a token."""

    class Settings:
        path = "/me/player/recently-played"


# ============================================================================
# 2. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""

    client = await connect("https://api.spotify.com/v1", token=os.environ["API_TOKEN"])
    print("✅ Connected\n")

    try:
        # ====== OFFSET PAGES ======
        print("1️⃣  OFFSET - First page of saved tracks")
        page = await client.get("/me/tracks", [("limit", 10)], OffsetPage[SavedTrack])
        print(f"   {len(page.items)} of {page.total} saved tracks")

        try:
            second = await page.get_next(client)
            print(f"   Next page starts at offset {second.offset}")
        except NoRemainingPages:
            print("   That was the only page")

        # ====== NULL HOLES ======
        print("\n2️⃣  NULLS - Items the API sent as null")
        holes = [i for i, item in enumerate(page.items) if item is None]
        print(f"   Null positions: {holes or 'none'}")
        print(f"   Present items: {len(page.filtered_items())}")

        # ====== AGGREGATION ======
        print("\n3️⃣  AGGREGATE - Every saved track")
        everything = await page.get_all(client)
        print(f"   Collected {len(everything)} slots")

        # ====== CURSOR PAGES ======
        print("\n4️⃣  CURSOR - Recently played, oldest pages after the first")
        recent = await client.get(
            RecentlyPlayed().endpoint_url(),
            [("limit", 20)],
            CursorPage[PlayHistory, RecentlyPlayed],
        )
        history = await recent.get_remaining(client)
        for entry in history[:5]:
            if entry is not None:
                print(f"   {entry.played_at}  {entry.track.name}")

    finally:
        await disconnect()
        print("\n✅ Disconnected")


if __name__ == "__main__":
    asyncio.run(main())
