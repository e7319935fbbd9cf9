from chains.dto import ChainConfig
from db import CHAIN_KEY
from db.store import KeyValueStore
from db.repositories.base import BaseRepository


class ChainRepository(BaseRepository):
    def __init__(self, store: KeyValueStore):
        super().__init__(store, CHAIN_KEY)

    async def get_config(self) -> ChainConfig | None:
        return ChainConfig.from_record(await self._read())

    async def save(self, config: ChainConfig) -> None:
        await self._write(config.to_record())
