"""
Run with:   python main.py
Or `uvicorn main:app --port 8000` if you prefer the CLI.
"""

import dotenv
import uvicorn

# Load environment variables from .env file and override existing ones
dotenv.load_dotenv(override=True)

from tracescope.config import get_settings  # noqa: E402
from tracescope.server import create_app  # noqa: E402

settings = get_settings()
app = create_app(settings=settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.app_env == "local",
        log_level=settings.uvicorn_log_level,
    )
