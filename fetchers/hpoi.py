# fetchers/hpoi.py
import os
from urllib.parse import urlencode, urljoin

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from core.html_query import Document, Node
from core.logger import get_logger
from core.models import CATEGORY_LABELS, Feed, FeedItem, category_label
from core.render import build_item_description

logger = get_logger(__name__)

ROOT_URL = "https://www.hpoi.net"

USER_AGENT = os.getenv(
    "HPOI_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
PROXY_URL = os.getenv("HPOI_PROXY_URL", "").strip()
TIMEOUT = int(os.getenv("HPOI_TIMEOUT", "30"))
FETCH_ATTEMPTS = max(1, int(os.getenv("HPOI_FETCH_ATTEMPTS", "1")))

ITEM_SELECTOR = ".collect-hobby-list-small"
OWNER_SELECTOR = ".hpoi-collect-head .info p"

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT})
if PROXY_URL:
    SESSION.proxies.update({"http": PROXY_URL, "https": PROXY_URL})


def build_url(user_id: str, caty: str) -> str:
    query = urlencode({"order": "actionDate", "view": 2, "favState": caty})
    return f"{ROOT_URL}/user/{user_id}/hobby?{query}"


def _absolute(url: str) -> str:
    return urljoin(ROOT_URL + "/", url)


@retry(
    wait=wait_exponential_jitter(initial=1, max=30),
    stop=stop_after_attempt(FETCH_ATTEMPTS),
    retry=retry_if_exception_type(requests.RequestException),
    reraise=True,
)
def _fetch(url: str) -> str:
    r = SESSION.get(url, timeout=TIMEOUT)
    r.raise_for_status()
    return r.text


def _build_item(node: Node, label: str) -> FeedItem:
    name = node.text(".name")
    href = node.require_attr(".name", "href")
    # /s/ is the small thumbnail, /n/ the normal size
    image_url = _absolute(node.require_attr("img", "src")).replace("/s/", "/n/")

    return FeedItem(
        title=f"{label}: {name}",
        link=_absolute(href),
        description=build_item_description(
            image_url, node.text(".pay"), node.text(".score")
        ),
    )


def parse_feed(html: str, caty: str, url: str) -> Feed:
    """
    Turn a hobby-collection page into a Feed.

    Raises UnknownCategoryError for an unknown caty and MarkupError when an
    entry lacks its link or thumbnail.
    """
    label = category_label(caty)
    doc = Document(html)

    items = tuple(_build_item(node, label) for node in doc.find_all(ITEM_SELECTOR))
    owner = doc.text(OWNER_SELECTOR)

    return Feed(
        title=f"{owner}的手办 - {label}",
        link=url,
        item=items,
        allow_empty=True,
    )


def extract(user_id: str, caty: str) -> Feed:
    """Fetch a user's hobby collection for one favorite state."""
    category_label(caty)
    url = build_url(user_id, caty)
    logger.info("Fetching Hpoi collection for user %s (%s) at %s", user_id, caty, url)

    html = _fetch(url)
    feed = parse_feed(html, caty, url)

    logger.info("Hpoi: found %d items for %s", len(feed.item), url)
    return feed


ROUTE = {
    "namespace": "hpoi",
    "path": "/user/:user_id/:caty",
    "categories": ["program-update"],
    "example": "/hpoi/user/116297/buy",
    "parameters": {"user_id": "用户ID", "caty": "类别, 见下表"},
    "features": {
        "requireConfig": False,
        "requirePuppeteer": False,
        "antiCrawler": False,
        "supportBT": False,
        "supportPodcast": False,
        "supportScihub": False,
    },
    "name": "用户动态",
    "maintainers": ["DIYgod", "luyuhuang"],
    "handler": extract,
    "description": (
        "| " + " | ".join(CATEGORY_LABELS.values()) + " |\n"
        "| " + " | ".join("----" for _ in CATEGORY_LABELS) + " |\n"
        "| " + " | ".join(CATEGORY_LABELS.keys()) + " |"
    ),
}
