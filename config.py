import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# --- Load environment variables ---
load_dotenv()

IRS_W4_URL = "https://www.irs.gov/pub/irs-pdf/fw4.pdf"


@dataclass(frozen=True)
class Settings:
    source_pdf_url: str
    fetch_timeout: float
    download_filename: str
    allowed_origins: List[str]
    log_level: str


@lru_cache()
def get_settings() -> Settings:
    allowed_raw = os.getenv("ALLOWED_ORIGINS", "*")
    return Settings(
        source_pdf_url=os.getenv("W4_SOURCE_URL", IRS_W4_URL),
        fetch_timeout=float(os.getenv("W4_FETCH_TIMEOUT", "15")),
        download_filename=os.getenv("W4_DOWNLOAD_FILENAME", "W4-2026-TaxFlow.pdf"),
        allowed_origins=[o.strip() for o in allowed_raw.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
