"""
netviz - Settings Module
========================

Usage:
    from netviz.settings import settings

    radius = settings.NODE_HIT_RADIUS
    if settings.DEBUG:
        ...
"""

import os
from pathlib import Path
from dotenv import load_dotenv


def _flag(name, default):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    def __init__(self):
        self.ENV = os.getenv('NETVIZ_ENV', 'development')

        # .env.<env> next to the package first, then the project root
        package_dir = Path(__file__).parent
        env_file = package_dir / f'.env.{self.ENV}'
        if not env_file.exists():
            env_file = package_dir.parent / '.env'
        if env_file.exists():
            load_dotenv(env_file)

        # Canvas
        self.CANVAS_WIDTH = int(os.getenv('CANVAS_WIDTH', 900))
        self.CANVAS_HEIGHT = int(os.getenv('CANVAS_HEIGHT', 520))
        self.CLICK_GRID_STEP = int(os.getenv('CLICK_GRID_STEP', 10))
        self.NODE_HIT_RADIUS = float(os.getenv('NODE_HIT_RADIUS', 25))
        self.NODE_DRAW_RADIUS = float(os.getenv('NODE_DRAW_RADIUS', 20))

        # Animation / input timing
        self.ANIMATION_INTERVAL_MS = int(os.getenv('ANIMATION_INTERVAL_MS', 800))
        self.DOUBLE_CLICK_MS = int(os.getenv('DOUBLE_CLICK_MS', 400))

        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

        # Server
        self.DEBUG = _flag('DEBUG', 'true' if self.ENV == 'development' else 'false')
        self.HOST = os.getenv('HOST', '127.0.0.1')
        self.PORT = int(os.getenv('PORT', 8050))

        # Export
        self.REPORT_FILENAME = os.getenv('REPORT_FILENAME', 'network_log.docx')


settings = Settings()
