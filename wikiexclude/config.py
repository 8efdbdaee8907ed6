# wikiexclude/config.py
from __future__ import annotations

# Site configuration
DEFAULT_MAIN_PAGE = "Main Page"
DEFAULT_ARTICLE_PATH = "/wiki/"
DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"

# HTTP configuration
DEFAULT_UA = "wikiexclude/0.1 (https://github.com/wikiexclude/wikiexclude)"
DEFAULT_TIMEOUT = 10.0

# Exclusion rules
# Backwards compatibility: "*" in a query pattern means "any non-empty value"
WILDCARD_PATTERN = "*"
WILDCARD_REGEX = ".+"
OPTIONS_KEY = "exclude"

# Namespace ids (MediaWiki core)
NS_MEDIA = -2
NS_SPECIAL = -1
NS_MAIN = 0
NS_TALK = 1
NS_USER = 2
NS_USER_TALK = 3
NS_PROJECT = 4
NS_PROJECT_TALK = 5
NS_FILE = 6
NS_FILE_TALK = 7
NS_MEDIAWIKI = 8
NS_MEDIAWIKI_TALK = 9
NS_TEMPLATE = 10
NS_TEMPLATE_TALK = 11
NS_HELP = 12
NS_HELP_TALK = 13
NS_CATEGORY = 14
NS_CATEGORY_TALK = 15

DEFAULT_NAMESPACES: dict[str, int] = {
    "Media": NS_MEDIA,
    "Special": NS_SPECIAL,
    "Talk": NS_TALK,
    "User": NS_USER,
    "User talk": NS_USER_TALK,
    "Project": NS_PROJECT,
    "Project talk": NS_PROJECT_TALK,
    "File": NS_FILE,
    "File talk": NS_FILE_TALK,
    "Image": NS_FILE,
    "Image talk": NS_FILE_TALK,
    "MediaWiki": NS_MEDIAWIKI,
    "MediaWiki talk": NS_MEDIAWIKI_TALK,
    "Template": NS_TEMPLATE,
    "Template talk": NS_TEMPLATE_TALK,
    "Help": NS_HELP,
    "Help talk": NS_HELP_TALK,
    "Category": NS_CATEGORY,
    "Category talk": NS_CATEGORY_TALK,
}

# Namespaces where "A/B" is a subpage of "A"
DEFAULT_SUBPAGE_NAMESPACES = frozenset(
    {
        NS_TALK,
        NS_USER,
        NS_USER_TALK,
        NS_PROJECT,
        NS_PROJECT_TALK,
        NS_FILE_TALK,
        NS_MEDIAWIKI,
        NS_MEDIAWIKI_TALK,
        NS_TEMPLATE_TALK,
        NS_HELP,
        NS_HELP_TALK,
        NS_CATEGORY_TALK,
    }
)

# Title limits (bytes)
MAX_TITLE_LENGTH = 255
MAX_SPECIAL_TITLE_LENGTH = 512

# Canonical special page name -> known aliases (English core subset)
DEFAULT_ALIASES: dict[str, list[str]] = {
    "Contributions": ["Contribs"],
    "CreateAccount": ["Create_account"],
    "Preferences": [],
    "Random": ["RandomPage"],
    "RecentChanges": ["Recent_changes"],
    "Search": [],
    "SpecialPages": ["Special_pages"],
    "Upload": [],
    "Userlogin": ["Login", "Log_in"],
    "Userlogout": ["Logout", "Log_out"],
    "Watchlist": [],
}
