from db.store import KeyValueStore, RedisStore

CHAIN_KEY = "rpc"
TOKENS_KEY = "tokens"
