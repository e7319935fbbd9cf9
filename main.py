import logging

from aiohttp import web

from config import settings
from db.store import KeyValueStore, RedisStore
from handlers import setup_routes
from handlers.webhook import DISPATCHER_KEY
from services.dispatcher import TransferDispatcher
from services.signature import QStashVerifier, SignatureVerifier

module_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", KeyValueStore)


def create_app(
    store: KeyValueStore | None = None,
    verifier: SignatureVerifier | None = None,
    dispatcher: TransferDispatcher | None = None,
) -> web.Application:
    app = web.Application(client_max_size=settings.WEBHOOK_MAX_BODY_SIZE)

    store = store or RedisStore.from_url(settings.redis_url)
    verifier = verifier or QStashVerifier(
        current_signing_key=settings.QSTASH_CURRENT_SIGNING_KEY,
        next_signing_key=settings.QSTASH_NEXT_SIGNING_KEY,
    )

    app[STORE_KEY] = store
    app[DISPATCHER_KEY] = dispatcher or TransferDispatcher(
        store,
        verifier,
        receipt_timeout=settings.RECEIPT_TIMEOUT,
        poll_latency=settings.RECEIPT_POLL_LATENCY,
    )

    setup_routes(app, settings.WEBHOOK_PATH)
    app.on_cleanup.append(close_store)

    return app


async def close_store(app: web.Application) -> None:
    await app[STORE_KEY].close()


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    module_logger.info(f"Starting transfer dispatcher on {settings.WEBHOOK_HOST}:{settings.WEBHOOK_PORT}")

    web.run_app(
        create_app(),
        host=settings.WEBHOOK_HOST,
        port=settings.WEBHOOK_PORT,
    )


if __name__ == "__main__":
    main()
