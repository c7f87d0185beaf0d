import platform
import time
from typing import Any, Dict

from scorecard.config import get_settings
from scorecard.metrics import BUILD_VERSION, GIT_SHA


async def health() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "env": {
            "require_api_key": settings.require_api_key,
            "rounds_dir": str(settings.rounds_dir),
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
