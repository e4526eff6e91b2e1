import logging

import uvicorn

from notecards import app
from notecards.config import settings

if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
