"""
tabiplan – main application entry point

* Flask app serving the itinerary planner JSON API under ``/planner``.
* Suggestions run on a small thread pool; the browser polls
  ``/planner/api/suggestions`` while one is loading.
"""

import logging

from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
from tabiplan.api.config import get_port  # noqa: E402
from tabiplan.app import create_app  # noqa: E402

app = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting planner on http://localhost:%d/planner", port)
    app.run(host="0.0.0.0", port=port, debug=False, threaded=True)

__all__ = ["app"]
