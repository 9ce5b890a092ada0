import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")

DEFAULT_USER_AGENT = (
	"Mozilla/5.0 (iPhone; CPU iPhone OS 9_1 like Mac OS X) AppleWebKit/601.1.46 "
	"(KHTML, like Gecko) Version/9.0 Mobile/13B143 Safari/601.1"
)
# Mobile UA so the listing pages come back in the mobile layout.
DEFAULT_MOBILE_USER_AGENT = DEFAULT_USER_AGENT
DEFAULT_BLOG_URL_TEMPLATE = "https://{blog_id}.tumblr.com"


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


USER_AGENT = get_str_env("USER_AGENT", DEFAULT_USER_AGENT)
MOBILE_USER_AGENT = get_str_env("MOBILE_USER_AGENT", DEFAULT_MOBILE_USER_AGENT)
PROXY_URL = get_optional_str_env("PROXY_URL")
HTTP_TIMEOUT = get_float_env("HTTP_TIMEOUT", 30.0)
BLOG_URL_TEMPLATE = get_str_env("TUMBLRCRAWL_BLOG_URL_TEMPLATE", DEFAULT_BLOG_URL_TEMPLATE)
MAX_WORKERS = get_optional_int_env("TUMBLRCRAWL_MAX_WORKERS")
