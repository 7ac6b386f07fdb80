"""Launch the media gallery FastAPI server."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from media_gallery.config import GalleryConfig
from media_gallery.server import create_app


def _load_env_files() -> None:
    """Load environment variables from .env files if present."""

    for filename in (".env.local", ".env"):
        env_path = Path(filename)
        if env_path.exists():
            load_dotenv(env_path, override=False)


def main() -> None:
    _load_env_files()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
    )
    config = GalleryConfig.from_env()
    app = create_app(config)
    logging.getLogger("media_gallery").info("Videos directory: %s", config.media_root.resolve())
    uvicorn.run(app, host=config.host, port=config.port, reload=False)


if __name__ == "__main__":
    main()
