"""Server startup - serves the API with uvicorn."""
import sys
from pathlib import Path

import uvicorn

src_dir = Path(__file__).parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from utils.config import load_config  # noqa: E402

config = load_config()
print(f"[start.py] Starting on {config['host']}:{config['port']}", flush=True)
uvicorn.run("api.server:app", host=config["host"], port=config["port"], log_level=config["log_level"].lower())
