import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Storage files
    books_file: str = os.getenv("LIBRARY_BOOKS_FILE", "books.txt")
    members_file: str = os.getenv("LIBRARY_MEMBERS_FILE", "members.txt")

    # Logging
    log_level: str = os.getenv("LIBRARY_LOG_LEVEL", "WARNING").upper()

    # CLI
    output_mode: str = os.getenv("LIBRARY_CLI_OUTPUT", "plain").lower()
    app_name: str = os.getenv("APP_NAME", "Library Management System")


settings = Settings()
