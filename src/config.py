"""Global configuration constants for the project.

Defines paths, filenames, external URLs and display thresholds used by the
language page pipeline.
"""

from __future__ import annotations

import datetime
from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
SRC_DIR: Path = PROJECT_ROOT / "src"
LOG_DIR: Path = PROJECT_ROOT / "logs"

# Logging
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME_GENERATE_PAGES: str = "generate_language_pages.log"

# Input / output defaults
RECORDS_DIR: Path = PROJECT_ROOT / "database" / "things"
FEATURES_CATALOG_PATH: Path = PROJECT_ROOT / "database" / "features.pldb"
OUTPUT_PAGES_DIR: Path = PROJECT_ROOT / "output" / "languages"
RECORD_FILE_SUFFIX: str = ".pldb"
PAGE_FILE_SUFFIX: str = ".scroll"
PAGE_TEMPLATE_PATH: Path = SRC_DIR / "templates" / "language_page.scroll"

# Read once per process so every page in a batch agrees on ages.
CURRENT_YEAR: int = datetime.date.today().year

# Site and source links
SITE_ROOT_URL: str = "https://pldb.com/"
VIEW_SOURCE_URL_FORMAT: str = (
    "https://github.com/breck7/pldb/blob/main/database/things/{id}.pldb"
)
EDIT_URL_FORMAT: str = "https://build.pldb.com/edit/{id}"
PAGE_GENERATOR_NAME: str = "language_pages"
PAGE_GENERATOR_URL: str = "https://github.com/breck7/pldb/tree/main/code"
PERMALINK_FORMAT: str = "{id}.html"

# Display thresholds
MIN_JOBS_TO_SHOW: int = 10
MIN_USERS_TO_SHOW: int = 10
ABBREVIATE_USERS_FROM: int = 1000
DESCRIPTION_SENTENCES: int = 3
STACK_OVERFLOW_SURVEY_YEAR: str = "2021"
UBUNTU_RELEASE: str = "jammy"

# Labels for record types; unknown types display their raw id.
TYPE_NAMES: dict[str, str] = {
    "pl": "programming language",
    "esolang": "esoteric programming language",
    "dataNotation": "data notation",
    "textMarkup": "text markup language",
    "queryLanguage": "query language",
    "stylesheetLanguage": "stylesheet language",
    "grammarLanguage": "grammar language",
    "template": "template language",
    "visual": "visual programming language",
    "protocol": "protocol",
    "library": "library",
    "os": "operating system",
    "editor": "editor",
    "compiler": "compiler",
    "vm": "virtual machine",
    "binaryDataFormat": "binary data format",
    "assembly": "assembly language",
}

# Types ranked on the language leaderboard.
LANGUAGE_TYPES: frozenset[str] = frozenset(
    {
        "pl",
        "esolang",
        "dataNotation",
        "textMarkup",
        "queryLanguage",
        "stylesheetLanguage",
        "grammarLanguage",
        "template",
        "visual",
        "assembly",
    }
)

# Quick-link icons, keyed in display order.
QUICK_LINK_ICONS: dict[str, str] = {
    "home": '<svg class="icon" aria-label="home"><use href="#home"/></svg>',
    "github": '<svg class="icon" aria-label="github"><use href="#github"/></svg>',
    "wikipedia": (
        '<svg class="icon" aria-label="wikipedia"><use href="#wikipedia"/></svg>'
    ),
    "reddit": '<svg class="icon" aria-label="reddit"><use href="#reddit"/></svg>',
    "twitter": '<svg class="icon" aria-label="twitter"><use href="#twitter"/></svg>',
    "email": '<svg class="icon" aria-label="email"><use href="#email"/></svg>',
}
