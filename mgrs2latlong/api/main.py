from fastapi import FastAPI

from .. import __version__
from ..logging_setup import configure_logging, logging_middleware
from .routes import router


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="mgrs2latlong", version=__version__)
    app.middleware("http")(logging_middleware)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(router)
    return app


app = create_app()
