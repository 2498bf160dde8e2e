import logging

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    api_version: str = "1.0"
    api_prefix: str = ""
    default_language: str = "en"

    logging_level: str = "INFO"
    sql_echo: bool = False
    create_tables: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}


def configure_logging(settings: Settings | None = None):
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
        root.addHandler(handler)

    lvl = str(getattr(settings, 'logging_level', 'INFO')).strip().upper()
    numeric = getattr(logging, lvl, None)
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)

    logger.info("Logging configured; root level=%s", logging.getLevelName(root.level))

    for logger_name in ['uvicorn', 'uvicorn.error']:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    if root.level <= logging.DEBUG:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO)
    else:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)


settings = Settings()
