from aiohttp import web

from . import webhook


def setup_routes(app: web.Application, path: str = "/") -> None:
    app.router.add_routes(webhook.routes)
    app.router.add_post(path, webhook.dispatch_transfer)
