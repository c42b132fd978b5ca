"""Process entry point: ``bitscope`` or ``python -m bitscope``."""

import uvicorn

from bitscope.app import app
from bitscope.config import settings


def main() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
