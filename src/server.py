"""HTTP server entrypoint.

  python -m src.server

Runs the FastAPI app under uvicorn on HOST:PORT (default 0.0.0.0:5000).

Logging: Uses structured JSON logging.
Set LOG_FORMAT=pretty for development-friendly output.
"""

import os
import sys

# Force unbuffered output so container log shippers see lines immediately
sys.stdout = os.fdopen(sys.stdout.fileno(), "w", buffering=1)
sys.stderr = os.fdopen(sys.stderr.fileno(), "w", buffering=1)

from src.utils.logging import configure_logging, get_logger, log  # noqa: E402

configure_logging()

MODULE = "server"
logger = get_logger()

import uvicorn  # noqa: E402

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))


def main():
    log.info(logger, MODULE, "serve_start", "Starting server", host=HOST, port=PORT)
    # log_config=None keeps uvicorn from replacing our handlers
    uvicorn.run("src.api.app:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
