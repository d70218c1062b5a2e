"""Server entry point for the chatdesk API"""

import sys

import uvicorn
from dotenv import load_dotenv

from chatdesk.core.config import load_settings
from chatdesk.utils.exceptions import ConfigError
from chatdesk.utils.logger import get_logger, setup_logger
from chatdesk_web.main import create_app

logger = get_logger(__name__)


def main() -> None:
    # Load environment variables from .env file BEFORE reading settings
    load_dotenv()

    try:
        settings = load_settings(load_env_file=False)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logger(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        file_path=settings.logging.file_path,
        max_bytes=settings.logging.max_bytes,
        backup_count=settings.logging.backup_count,
    )

    app = create_app(settings)
    logger.info("Serving chat API", host=settings.server.host, port=settings.server.port)

    # The store lives in process memory, so a single worker is required
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logging.level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
