import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from itemshop.shop import PUBLISHER, ShopPublisher

log = logging.getLogger("itemshop.http")


def create_app(publisher: ShopPublisher | None = None) -> FastAPI:
    app = FastAPI()
    app.state.publisher = publisher or PUBLISHER

    @app.get("/healthz")
    async def healthz():
        return {"ok": True, "published": app.state.publisher.current is not None}

    @app.get("/shop")
    async def shop():
        doc = app.state.publisher.snapshot()
        if doc is None:
            log.info("shop requested before first publish")
            return JSONResponse({"error": "shop not generated yet"}, status_code=503)
        return doc

    return app
