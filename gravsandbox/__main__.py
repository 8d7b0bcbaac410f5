"""
Serve the HTTP front end:
    python -m gravsandbox
Host and port come from GRAVSANDBOX_HOST / GRAVSANDBOX_PORT, the log level
from GRAVSANDBOX_LOG_LEVEL.
"""

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(level=os.getenv("GRAVSANDBOX_LOG_LEVEL", "INFO").upper())
    uvicorn.run(
        "gravsandbox.main:create_app",
        factory=True,
        host=os.getenv("GRAVSANDBOX_HOST", "127.0.0.1"),
        port=int(os.getenv("GRAVSANDBOX_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
