from typing import Any
from db.store import KeyValueStore


class BaseRepository:

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    async def _read(self) -> Any | None:
        return await self.store.get(self.key)

    async def _write(self, value: Any) -> None:
        await self.store.set(self.key, value)
