import logging

import uvicorn

from gourmet.api.api_run import app
from gourmet.utilities import config


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_url = f"http://localhost:{config.APP_PORT}"
    logging.getLogger("gourmet_app").info("MyGourmet running on %s (Press CTRL+C to quit)", local_url)
    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT)
