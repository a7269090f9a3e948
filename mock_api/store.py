"""In-memory album store and its FastAPI dependency."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import lru_cache
import os
import uuid

SEED_ENV_VAR = "MOCK_API_SEED"
DEFAULT_SEED = {"aus6kwrg": 12, "abcqsrlx": 7}
EPOCH = datetime(2013, 6, 1, tzinfo=timezone.utc)


@dataclass
class AlbumStore:
    """Albums keyed by shortcut, each holding asset records oldest first."""

    albums: dict[str, list[dict]] = field(default_factory=dict)
    hearts: dict[str, dict] = field(default_factory=dict)

    def list_assets(self, album: str) -> list[dict]:
        return list(self.albums.get(album, []))

    def find_asset(self, album: str, key: str) -> dict | None:
        for record in self.albums.get(album, []):
            if key in (record["shortcut"], str(record["id"]), str(record["chute_asset_id"])):
                return record
        return None

    def add_heart(self, album: str, asset: dict) -> dict:
        heart = {
            "id": len(self.hearts) + 1,
            "identifier": uuid.uuid4().hex[:12],
            "asset_id": asset["id"],
            "album": album,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.hearts[heart["identifier"]] = heart
        asset["hearts"] = int(asset.get("hearts") or 0) + 1
        return heart

    def remove_heart(self, identifier: str) -> dict | None:
        heart = self.hearts.pop(identifier, None)
        if heart is None:
            return None
        asset = self.find_asset(heart["album"], str(heart["asset_id"]))
        if asset is not None:
            asset["hearts"] = max(int(asset.get("hearts") or 0) - 1, 0)
        return heart


def seed_store(counts: dict[str, int]) -> AlbumStore:
    """Build a store with ``counts[album]`` generated assets per album."""

    store = AlbumStore()
    next_id = 1000
    for album, count in counts.items():
        records = []
        for index in range(count):
            next_id += 1
            shortcut = f"{album[:4]}{index:03d}"
            records.append(
                {
                    "id": next_id,
                    "chute_asset_id": next_id,
                    "shortcut": shortcut,
                    "type": "image",
                    "url": f"https://media.example.com/{shortcut}",
                    "thumbnail": f"https://media.example.com/{shortcut}/75x75",
                    "caption": f"Asset {index + 1} of {album}",
                    "hearts": index % 4,
                    "created_at": (EPOCH + timedelta(hours=next_id)).isoformat(),
                }
            )
        store.albums[album] = records
    return store


def _parse_seed(raw: str) -> dict[str, int]:
    """Parse ``album:count,album:count``."""
    counts: dict[str, int] = {}
    for chunk in raw.split(","):
        album, _, count = chunk.strip().partition(":")
        if album:
            counts[album] = int(count or 0)
    return counts


@lru_cache(maxsize=1)
def get_store() -> AlbumStore:
    """Shared store, seeded from the environment override or the defaults."""
    env_override = os.environ.get(SEED_ENV_VAR)
    return seed_store(_parse_seed(env_override) if env_override else DEFAULT_SEED)
