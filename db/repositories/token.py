from chains.dto import TokenEntry
from db import TOKENS_KEY
from db.store import KeyValueStore
from db.repositories.base import BaseRepository


class TokenRepository(BaseRepository):
    def __init__(self, store: KeyValueStore):
        super().__init__(store, TOKENS_KEY)

    async def _read_registry(self) -> dict:
        registry = await self._read()
        return registry if isinstance(registry, dict) else {}

    async def get_all(self) -> dict[str, TokenEntry]:
        registry = await self._read_registry()
        return {
            symbol: TokenEntry.from_record(record)
            for symbol, record in registry.items()
        }

    async def get_by_symbol(self, symbol: str) -> TokenEntry | None:
        tokens = await self.get_all()
        return tokens.get(symbol.lower())

    async def add_token(self, symbol: str, entry: TokenEntry) -> dict[str, TokenEntry]:
        # read-merge-write, a concurrent writer can still win
        registry = await self._read_registry()
        registry[symbol.lower()] = entry.to_record()

        await self._write(registry)
        return await self.get_all()
