import argparse
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress
from datetime import date, datetime
from typing import List, Optional, Sequence

from .config import Config
from .get_menu import MenuScraper
from .make_images import ImageConverter, get_image_converter
from .menu_dates import get_page_indices, get_weekday_name
from .menu_pdf import download_pdf, extract_pages, save_pdf
from .slack import SlackAPI

logger = logging.getLogger(__name__)


def _get_scraper(config: Config) -> MenuScraper:
    if config.use_browser:
        from .get_menu_playwright import MenuScraper as BrowserMenuScraper
        return BrowserMenuScraper(config.menu_url)
    return MenuScraper(config.menu_url)


def upload_artifacts(slack: SlackAPI, paths: Sequence[str]) -> List[str]:
    """Upload every artifact concurrently; permalinks come back in artifact order."""
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=len(paths)) as executor:
        return list(executor.map(slack.upload_file, paths))


def format_message(permalinks: Sequence[str]) -> str:
    # an empty label keeps only the file previews visible in Slack
    return "".join(f"<{permalink}| >" for permalink in permalinks)


def _remove_file(path: str) -> None:
    with suppress(FileNotFoundError):
        os.remove(path)


def remove_files(paths: Sequence[str]) -> List[str]:
    # The extracted document can itself be the artifact, so drop duplicates first.
    unique_paths = list(dict.fromkeys(os.path.abspath(path) for path in paths if path))
    if not unique_paths:
        return []
    with ThreadPoolExecutor(max_workers=len(unique_paths)) as executor:
        list(executor.map(_remove_file, unique_paths))
    return unique_paths


def run(
    config: Config,
    today: date,
    scraper: Optional[MenuScraper] = None,
    slack: Optional[SlackAPI] = None,
    converter: Optional[ImageConverter] = None,
) -> List[str]:
    indices = get_page_indices(today, config)
    if not indices:
        logger.info("No menu configured for %s, nothing to post", get_weekday_name(today))
        return []

    scraper = scraper or _get_scraper(config)
    slack = slack or SlackAPI(config.slack_token, config.slack_channel_id)
    converter = converter or get_image_converter(config)

    logger.info("Locating menu link for %s", today.isoformat())
    link = scraper.get_menu_link(today)

    logger.info("Getting pdf file from link...")
    menu_bytes = download_pdf(link)

    logger.info("Extracting pages %s from pdf...", indices)
    day_menu_bytes = extract_pages(menu_bytes, indices)

    pdf_path = save_pdf(day_menu_bytes, config.output_dir, today)
    artifacts = []
    try:
        artifacts = converter.convert(pdf_path)

        logger.info("Uploading %d file(s) to Slack...", len(artifacts))
        permalinks = upload_artifacts(slack, artifacts)
        slack.post_message(format_message(permalinks))
        logger.info("Menu posted to %s", config.slack_channel_id)
    finally:
        removed = remove_files([pdf_path, *artifacts])
        logger.info("Removed %d local file(s)", len(removed))

    return permalinks


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Post today's lunch menu to Slack")
    parser.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Run as if today were this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="dotenv file to load before reading the environment",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = Config.from_env(args.env_file)
        run(config, args.date or date.today())
    except Exception:
        logger.exception("Menu run failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
