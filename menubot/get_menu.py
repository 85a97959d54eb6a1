import logging
import re
from datetime import date
from typing import Iterable, List, NamedTuple, Sequence
from urllib.parse import unquote, urljoin

import requests
from bs4 import BeautifulSoup

from .menu_dates import get_week_marker, get_weekday_markers

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 20


class MenuLinkNotFoundError(RuntimeError):
    pass


class MenuLink(NamedTuple):
    text: str
    href: str


def find_menu_link(links: Sequence[MenuLink], week_marker: str, weekday_markers: Iterable[str]) -> str:
    """Return the href of the first link naming both the week and the weekday.

    Matching is done on the lower-cased, URL-decoded href. Raises
    MenuLinkNotFoundError listing every candidate when nothing matches.
    """
    week_marker = week_marker.lower()
    # _u4 must not match _u42
    week_pattern = re.compile(re.escape(week_marker) + r"(?!\d)")
    weekday_markers = [marker.lower() for marker in weekday_markers]

    for link in links:
        candidate = unquote(link.href).lower()
        if week_pattern.search(candidate) and any(marker in candidate for marker in weekday_markers):
            return link.href

    listing = "\n".join(f"  - {link.href} ({link.text or 'no text'})" for link in links) or "  <no links>"
    raise MenuLinkNotFoundError(
        f"No menu link containing '{week_marker}' and one of {weekday_markers} "
        f"among {len(links)} links:\n{listing}"
    )


class MenuScraper:
    def __init__(self, url):
        self.url = url
        self.soup = None

    def get_soup(self):
        response = requests.get(self.url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return BeautifulSoup(response.content, "html.parser")

    @staticmethod
    def clean_text(text):
        return re.sub(r"\s+", " ", text.strip())

    def get_links(self) -> List[MenuLink]:
        if self.soup is None:
            logger.info("Fetching menu listing %s", self.url)
            self.soup = self.get_soup()

        return [
            MenuLink(self.clean_text(a.get_text()), urljoin(self.url, a["href"]))
            for a in self.soup.find_all("a", href=True)
        ]

    def get_menu_link(self, day: date) -> str:
        links = self.get_links()
        logger.info("Found %d links on %s", len(links), self.url)
        link = find_menu_link(links, get_week_marker(day), get_weekday_markers(day))
        logger.info("Menu link for %s: %s", day.isoformat(), link)
        return link
