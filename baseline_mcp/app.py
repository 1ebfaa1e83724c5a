from fastapi import FastAPI
from loguru import logger

from baseline_mcp.api.router import router
from baseline_mcp.configuration import ConfigProvider, get_config_provider, setup_config_store
from baseline_mcp.mcp import SERVER_INFO


def create_app() -> FastAPI:
    app = FastAPI(title=SERVER_INFO.name, version=SERVER_INFO.version)
    app.include_router(router)

    @app.on_event("startup")
    async def startup():
        try:
            logger.info("Starting up application...")
            setup_config_store()

            provider: ConfigProvider = get_config_provider()
            if not provider.is_configured():
                raise RuntimeError("Configuration setup failed")

            logger.info("Application startup completed successfully")

        except Exception as e:
            logger.error(f"Failed to start application: {e}")
            raise

    return app

