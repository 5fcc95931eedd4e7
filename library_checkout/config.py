import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Data files
    catalog_file: str = os.getenv("LIBRARY_CATALOG_FILE", "catalog.txt")
    checkout_file: str = os.getenv("LIBRARY_CHECKOUT_FILE", "myCheckouts.txt")

    # Application
    app_name: str = os.getenv("APP_NAME", "Library Checkout System")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()


settings = Settings()
