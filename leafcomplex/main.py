"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from leafcomplex import __version__
from leafcomplex.config import settings
from leafcomplex.engine.pipeline import register_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.leafcomplex_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="LeafComplex",
        description="Leaf-shape complexity analysis — morphology, DiegoPaths and Thornfiddle entropy",
        version=__version__,
    )

    # Import all transform modules to trigger registration
    register_transforms()

    from leafcomplex.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
