from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    REDIS_URL: str | None = None
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0

    QSTASH_CURRENT_SIGNING_KEY: str = ""
    QSTASH_NEXT_SIGNING_KEY: str = ""

    WEBHOOK_HOST: str = "0.0.0.0"
    WEBHOOK_PORT: int = 8787
    WEBHOOK_PATH: str = "/"
    WEBHOOK_MAX_BODY_SIZE: int = 1024**2

    RECEIPT_TIMEOUT: int = 120
    RECEIPT_POLL_LATENCY: float = 0.5

    LOG_LEVEL: str = "INFO"

    # Provisioning
    RPC_CHAIN_ID: str = ""
    RPC_CHAIN_NAME: str = ""
    RPC_URL: str = ""
    RPC_TOKEN_SYMBOL: str = ""
    RPC_TOKEN_DECIMALS: str = ""
    RPC_BLOCKEXPLORER_URL: str = ""
    WALLET_PRIVATE_KEY: str = ""

    model_config = SettingsConfigDict(
        env_file=(".env", ".dev.vars"), extra="ignore"
    )

    @property
    def redis_url(self) -> str:
        if self.REDIS_URL:
            return self.REDIS_URL
        return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


settings = Settings()
