import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_MENU_URL = "https://www.nooncph.dk/ugens-menuer"
TRUTHY = {"1", "true", "yes"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUTHY


def _days(value: Optional[str]) -> Tuple[str, ...]:
    return tuple(day.strip().lower() for day in (value or "").split(",") if day.strip())


@dataclass(frozen=True)
class Config:
    slack_token: str
    slack_channel_id: str
    language: str = "en"
    full_noon_days: Tuple[str, ...] = ()
    # None means every day that is not a full noon day is a green noon day
    green_noon_days: Optional[Tuple[str, ...]] = None
    convert_to_image: bool = False
    menu_url: str = DEFAULT_MENU_URL
    use_browser: bool = False
    output_dir: str = "."

    REQUIRED_ENV = {
        "SLACK_TOKEN": "slack_token",
        "SLACK_CHANNEL_ID": "slack_channel_id",
    }

    @property
    def is_danish(self) -> bool:
        return self.language == "da"

    @classmethod
    def from_env(cls, env_path: Optional[str] = ".env") -> "Config":
        if env_path:
            load_dotenv(env_path)

        missing = [name for name in cls.REQUIRED_ENV if not os.getenv(name)]
        if missing:
            raise ValueError(f"Missing config: {', '.join(missing)}")

        green_raw = os.getenv("GREEN_NOON_DAYS")
        return cls(
            slack_token=os.getenv("SLACK_TOKEN"),
            slack_channel_id=os.getenv("SLACK_CHANNEL_ID"),
            language=(os.getenv("LANGUAGE") or "en").strip().lower(),
            full_noon_days=_days(os.getenv("FULL_NOON_DAYS")),
            green_noon_days=_days(green_raw) if green_raw is not None else None,
            convert_to_image=_flag(os.getenv("CONVERT_TO_IMAGE")),
            menu_url=os.getenv("MENU_URL") or DEFAULT_MENU_URL,
            use_browser=_flag(os.getenv("MENU_USE_BROWSER")),
            output_dir=os.getenv("OUTPUT_DIR") or ".",
        )
