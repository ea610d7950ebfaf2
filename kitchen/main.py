import logging

import uvicorn

from kitchen.api.api_run import app
from kitchen.utilities.config import APP_HOST, APP_PORT, DATA_DIR, LOG_LEVEL


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger("kitchen_app")
    logger.info("Ledger data directory: %s", DATA_DIR)
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Kitchen Ledger API on http://localhost:{APP_PORT}/docs (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())
