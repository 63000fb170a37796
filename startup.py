import os
import sys

import uvicorn

# Add the src directory to Python path so the app runs from a plain checkout
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, "src"))

from consultscribe.core.config import get_settings  # noqa: E402


def main() -> None:
    settings = get_settings()
    port = int(os.environ.get("PORT", settings.port))
    uvicorn.run(
        "consultscribe.app:app",
        host=settings.host,
        port=port,
        log_level=settings.logging.level.lower(),
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    main()
