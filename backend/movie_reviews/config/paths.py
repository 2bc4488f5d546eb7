from pathlib import Path


ROOT_DIR = Path(__file__).parent.parent.parent.parent

ENV_PATH = ROOT_DIR / ".env"
