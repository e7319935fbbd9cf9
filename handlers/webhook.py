import logging

from aiohttp import web

from enums.dispatch import ErrorKind
from services.dispatcher import TransferDispatcher

routes = web.RouteTableDef()
module_logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Upstash-Signature"
DISPATCHER_KEY = web.AppKey("dispatcher", TransferDispatcher)


async def dispatch_transfer(request: web.Request) -> web.Response:
    dispatcher = request.app[DISPATCHER_KEY]

    try:
        body = await request.read()
    except web.HTTPRequestEntityTooLarge as e:
        module_logger.warning(f"Rejected oversized body: {e.text}")
        return web.Response(text=ErrorKind.VALIDATION.message, status=200)

    signature = request.headers.get(SIGNATURE_HEADER)

    result = await dispatcher.dispatch(body, signature)

    if not result.ok:
        module_logger.info(f"Handled failure ({result.kind.label}): {result.body}")

    # always 200 so the queue does not redeliver
    return web.Response(text=result.body, status=200)


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    return web.Response(text="OK.", status=200)
