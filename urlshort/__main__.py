from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from .config import settings
from .errors import RedirectConfigError
from .logging_utils import setup_logging
from .main import create_app

logger = logging.getLogger("urlshort")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="urlshort", description="Redirect request paths to configured URLs.")
    parser.add_argument("-fileName", "--file-name", dest="file_name", default=settings.FILE_NAME,
                        help="a file to be parsed")
    parser.add_argument("-t", "--type", dest="file_type", default=settings.FILE_TYPE,
                        help="type of the file to parse: json, yaml or sqlite")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = settings.model_copy(
        update={"FILE_NAME": args.file_name, "FILE_TYPE": args.file_type, "HOST": args.host, "PORT": args.port}
    )
    setup_logging(
        service_name="urlshort",
        log_dir=cfg.LOG_DIR,
        level=cfg.LOG_LEVEL,
        retention_days=cfg.LOG_RETENTION_DAYS,
    )

    try:
        app = create_app(cfg)
    except RedirectConfigError as e:
        logger.error({"event": "startup.failed", "error": str(e)})
        return 1

    logger.info({"event": "server.starting", "host": cfg.HOST, "port": cfg.PORT})
    uvicorn.run(app, host=cfg.HOST, port=cfg.PORT, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
