from pathlib import Path

# Repo-root conventional directories/files (overrideable via CLI)
CONFIG_DIR = Path("configs")
SERVICE_CONFIG_FILE = CONFIG_DIR / "service.yaml"

TEMPLATES_DIR = Path(__file__).parent / "rendering" / "templates"

DEFAULT_SUBSCRIPTION_ID = "firehose-a"
DEFAULT_PORT = 8080
REPORT_ROUTE = "/messages"
