"""
Disk cache for reduced log messages using joblib.Memory.

Reduction depends only on the markup string, so its result can be stored on
disk and shared by every process rendering the same emote data. Set
EMOTEPARSER_CACHE to a directory to turn it on; it is off when unset or set
to "0", "false" or "".
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from decouple import config as env_config
from joblib import Memory

from .condition_texts import ConditionTexts
from .parsing import parse_message
from .reducer import reduce_message

logger = logging.getLogger(__name__)

DISABLED_VALUES = ("0", "false", "")


def get_cache_dir() -> Optional[Path]:
    """Directory named by EMOTEPARSER_CACHE, or None while caching is off."""
    setting = env_config("EMOTEPARSER_CACHE", default="0")
    if setting.lower() in DISABLED_VALUES:
        return None
    return Path(setting).expanduser()


def _make_memory() -> Memory:
    cache_dir = get_cache_dir()
    if cache_dir is None:
        # no-op Memory, calls go straight through
        return Memory(location=None, verbose=0)
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        return Memory(location=str(cache_dir), verbose=0)
    except (PermissionError, OSError) as e:
        logger.warning(f"Cannot use cache directory {cache_dir}, caching disabled: {e}")
        return Memory(location=None, verbose=0)


memory = _make_memory()


def reduce_markup(markup: str) -> ConditionTexts:
    """Parse and reduce markup in one step."""
    return reduce_message(parse_message(markup))


_cached_reduce_markup = memory.cache(reduce_markup)


def cached_reduce(markup: str) -> ConditionTexts:
    """Like reduce_markup, but served from the disk cache when enabled.

    Errors are never cached; a failing markup string is re-parsed each call.
    """
    return _cached_reduce_markup(markup)


def clear_cache():
    """Drop every stored reduction. A no-op while caching is off."""
    cache_dir = get_cache_dir()
    if cache_dir is None:
        logger.info("Reduction cache is off, nothing to clear")
        return
    if not cache_dir.exists():
        logger.info(f"No reduction cache at {cache_dir}")
        return
    try:
        shutil.rmtree(cache_dir)
        logger.info(f"Removed reduction cache {cache_dir}")
    except OSError as e:
        logger.warning(f"Could not remove reduction cache {cache_dir}: {e}")
