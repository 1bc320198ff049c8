from .app import build_http_app
from .config import HttpConfig

__all__ = ["HttpConfig", "build_http_app"]
