import argparse
import json
import os
import random
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

from core.errors import FeedError
from core.logger import get_logger
from core.models import Feed
from fetchers import get_route

logger = get_logger(__name__)

POLL_MINUTES = int(os.getenv("POLL_MINUTES", "60"))
MODE = os.getenv("MODE", "daemon").lower()  # "daemon" or "once"
CONFIG_PATH = os.getenv("CONFIG_PATH", "/data/config.json")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "/data/feeds")

ROUTE_NAME = "hpoi/user"


def jitter_sleep_minutes(minutes: int) -> None:
    base = max(1, minutes)
    jitter = random.uniform(-0.1 * base, 0.1 * base)
    total = base + jitter
    logger.info("Sleeping %.1f minutes before next cycle.", total)
    time.sleep(total * 60)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.error("Config file not found at %s", path)
        raise SystemExit(1)
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg: Dict[str, Any] = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Failed to load config.json at %s: %s", path, e)
        raise SystemExit(1)

    if not isinstance(cfg, dict) or "feeds" not in cfg:
        logger.error("config.json must be an object with a 'feeds' key.")
        raise SystemExit(1)

    if not isinstance(cfg["feeds"], list) or not cfg["feeds"]:
        logger.error("config.json 'feeds' must be a non-empty list.")
        raise SystemExit(1)

    return cfg


def output_path(user_id: str, caty: str, output_dir: str = OUTPUT_DIR) -> str:
    safe = "".join(ch if ch.isalnum() or ch in "._-" else "_" for ch in user_id)
    return os.path.join(output_dir, f"hpoi_{safe}_{caty}.json")


def write_feed(feed: Feed, path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(feed.to_dict(), f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)


def _feed_key(entry: Dict[str, Any]) -> Optional[Tuple[str, str]]:
    if not isinstance(entry, dict):
        return None
    user_id = str(entry.get("user_id", "")).strip()
    caty = str(entry.get("caty", "")).strip()
    if not user_id or not caty:
        return None
    return user_id, caty


def process_feed(entry: Dict[str, Any], output_dir: str = OUTPUT_DIR) -> bool:
    key = _feed_key(entry)
    if key is None:
        logger.error("Invalid feed entry (missing user_id/caty): %s", entry)
        return False

    user_id, caty = key
    if not entry.get("enabled", True):
        logger.info("Feed %s:%s is disabled; skipping.", user_id, caty)
        return False

    handler = get_route(ROUTE_NAME)["handler"]
    feed = handler(user_id, caty)

    path = output_path(user_id, caty, output_dir)
    write_feed(feed, path)
    logger.info("Wrote %d items for %s:%s to %s", len(feed.item), user_id, caty, path)
    return True


def run_once(config_path: str = CONFIG_PATH, output_dir: str = OUTPUT_DIR) -> int:
    cfg = load_config(config_path)
    failures = 0

    for entry in cfg["feeds"]:
        try:
            process_feed(entry, output_dir)
        except Exception as e:
            failures += 1
            logger.exception("Failed to build feed %s: %s", entry, e)

    return 1 if failures else 0


def run_daemon(config_path: str = CONFIG_PATH, output_dir: str = OUTPUT_DIR) -> None:
    logger.info("Starting daemon; poll every %d minutes.", POLL_MINUTES)
    last_run_map: Dict[Tuple[str, str], float] = {}

    while True:
        try:
            cfg = load_config(config_path)
            feeds: List[Dict[str, Any]] = cfg["feeds"]
            now = time.time()

            for entry in feeds:
                key = _feed_key(entry)
                if key is None:
                    logger.error("Invalid feed entry: %s", entry)
                    continue

                poll_val = entry.get("poll_minutes")
                try:
                    poll_minutes = int(poll_val) if poll_val is not None else POLL_MINUTES
                except (TypeError, ValueError):
                    poll_minutes = POLL_MINUTES
                poll_minutes = max(1, poll_minutes)

                last_ts = last_run_map.get(key)
                if last_ts:
                    elapsed = (now - last_ts) / 60
                    if elapsed < poll_minutes:
                        logger.debug(
                            "Skip %s:%s (%.1f < %d minutes).",
                            key[0], key[1], elapsed, poll_minutes,
                        )
                        continue

                try:
                    process_feed(entry, output_dir)
                except Exception as e:
                    logger.exception("Error processing %s:%s: %s", key[0], key[1], e)
                finally:
                    last_run_map[key] = time.time()

        except SystemExit:
            logger.error("Config unusable; retrying next cycle.")
        except Exception as e:
            logger.exception("Unhandled error in daemon loop: %s", e)

        jitter_sleep_minutes(POLL_MINUTES)


def run_single(user_id: str, caty: str) -> int:
    handler = get_route(ROUTE_NAME)["handler"]
    try:
        feed = handler(user_id, caty)
    except (FeedError, requests.RequestException) as e:
        logger.error("Failed to build feed for %s:%s: %s", user_id, caty, e)
        return 1

    json.dump(feed.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Build Hpoi collection feeds.")
    parser.add_argument("user_id", nargs="?", help="Hpoi user ID")
    parser.add_argument("caty", nargs="?", help="want, preorder, buy, care or resell")
    args = parser.parse_args(argv)

    if args.user_id:
        if not args.caty:
            parser.error("caty is required with user_id")
        return run_single(args.user_id, args.caty)

    if MODE == "once":
        return run_once()
    run_daemon()
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        raise SystemExit(2)
