import os
from dotenv import load_dotenv
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def load_env() -> None:
    """Load ENV_FILE (relative to the project root) or ./.env if present."""
    env_file = os.getenv("ENV_FILE")
    if env_file:
        load_dotenv(BASE_DIR / env_file)
    else:
        load_dotenv()
