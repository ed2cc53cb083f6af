from .repos import ProfileRepoPort
from .scraper import ScraperPort

__all__ = [
    "ProfileRepoPort",
    "ScraperPort",
]
