from fastapi import FastAPI

from app.api.routes import router
from app.config.settings import Settings
from app.processor.processor import Processor, build_processor


def create_app(settings: Settings, processor: Processor | None = None) -> FastAPI:
    """Build the FastAPI application around one shared Processor."""
    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.processor = processor if processor is not None else build_processor(settings)
    app.include_router(router)
    return app
