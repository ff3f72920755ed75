"""Centralized configuration: all env vars and Text-TV page tables in one place."""

import os

SERVER_NAME = "svt-texttv-mcp"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = (
    "MCP server for SVT Text-TV - Swedish teletext news, sports, weather, and TV schedules"
)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # HTTP front-end
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "10000"))

        # texttv.nu upstream
        self.texttv_app_id: str = os.getenv("TEXTTV_APP_ID", SERVER_NAME)
        self.texttv_api_base: str = os.getenv("TEXTTV_API_BASE", "https://api.texttv.nu/api")
        self.texttv_timeout: float = float(os.getenv("TEXTTV_TIMEOUT", "10"))

        # Seconds between background sweeps of expired cache entries
        self.cache_sweep_interval: float = float(os.getenv("CACHE_SWEEP_INTERVAL", "60"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of settings that are out of range."""
        problems = []
        if not 0 < self.port < 65536:
            problems.append(f"PORT={self.port}")
        if self.texttv_timeout <= 0:
            problems.append(f"TEXTTV_TIMEOUT={self.texttv_timeout}")
        if self.cache_sweep_interval <= 0:
            problems.append(f"CACHE_SWEEP_INTERVAL={self.cache_sweep_interval}")
        if not self.texttv_app_id:
            problems.append("TEXTTV_APP_ID is empty")
        return problems


settings = Settings()


# --- Cache TTLs (seconds), roughly the upstream refresh cadence ---
CACHE_TTL_PAGE = 15          # single pages, subpages, news and sports ranges
CACHE_TTL_SEARCH = 30
CACHE_TTL_CATEGORY = 30
CACHE_TTL_WEATHER = 60
CACHE_TTL_TV_SCHEDULE = 300

# --- Page numbers ---
PAGE_MIN = 100
PAGE_MAX = 899

NEWS_PAGES = {
    "main": 100,
    "domestic_start": 101,
    "domestic_end": 103,
    "foreign_start": 104,
    "foreign_end": 109,
    "full_start": 100,
    "full_end": 130,
}

SPORTS_PAGES = {
    "main": 300,
    "results": 301,
    "football_start": 330,
    "football_end": 339,
    "hockey_start": 340,
    "hockey_end": 349,
    "full_start": 300,
    "full_end": 399,
}

WEATHER_PAGES = {
    "national": 400,
    "stockholm": 402,
    "gothenburg": 403,
    "malmo": 404,
    "forecasts_start": 400,
    "forecasts_end": 420,
}

TV_SCHEDULE_PAGES = {
    "svt1": 600,
    "svt2": 650,
    "svt1_start": 600,
    "svt1_end": 619,
    "svt2_start": 650,
    "svt2_end": 669,
}

# Browse/search categories: id -> page range and labels (Swedish, English)
CATEGORIES = {
    "news": {"start": 100, "end": 199, "label": "Nyheter", "label_en": "News"},
    "sports": {"start": 300, "end": 399, "label": "Sport", "label_en": "Sports"},
    "weather": {"start": 400, "end": 499, "label": "Väder", "label_en": "Weather"},
    "tv_schedule": {"start": 500, "end": 699, "label": "TV-tablå", "label_en": "TV Schedule"},
    "other": {"start": 700, "end": 899, "label": "Övrigt", "label_en": "Other"},
}

NEWS_CATEGORIES = ("main", "domestic", "foreign")
SPORTS_CATEGORIES = ("main", "football", "hockey", "results")
WEATHER_REGIONS = ("national", "stockholm", "gothenburg", "malmo")
TV_CHANNELS = ("svt1", "svt2", "both")


def get_category_for_page(page_num: int) -> str:
    """Map a page number to its browse category id."""
    for category, info in CATEGORIES.items():
        if info["start"] <= page_num <= info["end"]:
            return category
    return "other"


def news_pages_for_category(category: str) -> tuple[int, int]:
    if category == "main":
        return NEWS_PAGES["main"], NEWS_PAGES["main"]
    if category == "domestic":
        return NEWS_PAGES["domestic_start"], NEWS_PAGES["domestic_end"]
    if category == "foreign":
        return NEWS_PAGES["foreign_start"], NEWS_PAGES["foreign_end"]
    return NEWS_PAGES["full_start"], NEWS_PAGES["full_end"]


def sports_pages_for_category(category: str) -> tuple[int, int]:
    if category == "main":
        return SPORTS_PAGES["main"], SPORTS_PAGES["main"]
    if category == "football":
        return SPORTS_PAGES["football_start"], SPORTS_PAGES["football_end"]
    if category == "hockey":
        return SPORTS_PAGES["hockey_start"], SPORTS_PAGES["hockey_end"]
    if category == "results":
        return SPORTS_PAGES["results"], SPORTS_PAGES["results"]
    return SPORTS_PAGES["full_start"], SPORTS_PAGES["full_end"]


def weather_page_for_region(region: str) -> int:
    if region in WEATHER_REGIONS:
        return WEATHER_PAGES[region]
    return WEATHER_PAGES["national"]


def tv_schedule_pages_for_channel(channel: str) -> tuple[int, int]:
    if channel == "svt1":
        return TV_SCHEDULE_PAGES["svt1_start"], TV_SCHEDULE_PAGES["svt1_end"]
    if channel == "svt2":
        return TV_SCHEDULE_PAGES["svt2_start"], TV_SCHEDULE_PAGES["svt2_end"]
    return TV_SCHEDULE_PAGES["svt1_start"], TV_SCHEDULE_PAGES["svt2_end"]
