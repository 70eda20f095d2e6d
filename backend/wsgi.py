import logging
import os

from dotenv import load_dotenv

load_dotenv()
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

try:
    from backend.wordwiz.server import create_app
except ImportError:  # pragma: no cover
    from wordwiz.server import create_app

app, socketio = create_app()
