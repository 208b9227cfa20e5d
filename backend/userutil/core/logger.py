# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

All log settings (levels, rotation, format …) live in  etc/logging.conf.
:func:`configure_logging` resolves the log-file path, patches it into the
config text, and applies it via the standard-library fileConfig loader.

userutil is a library, so importing it never touches the host's logging.
Only entry points (bin/ scripts, the Alembic env) call configure_logging().

Import the ready-made logger anywhere:
    from userutil.core.logger import logger
"""

import configparser as _cp
import logging
import logging.config
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
# project root: backend/userutil/core/logger.py  →  ../../../
_PROJECT_ROOT  = Path(__file__).resolve().parent.parent.parent.parent
_LOG_DIR       = _PROJECT_ROOT / "log"
_LOG_FILE      = _LOG_DIR / "app.log"
_LOGGING_CONF  = _PROJECT_ROOT / "etc" / "logging.conf"


def configure_logging(conf_path: Path = _LOGGING_CONF, log_file: Path = _LOG_FILE) -> bool:
    """
    Apply *conf_path* to the process.  Returns False (and changes nothing)
    when the file is absent, e.g. when installed without etc/.
    """
    if not conf_path.is_file():
        return False

    # logging.conf uses %(log_file)s as a placeholder.  We read the raw text,
    # replace it with the real absolute path, then feed the result to
    # fileConfig via a ConfigParser-compatible object.
    log_file.parent.mkdir(parents=True, exist_ok=True)

    raw = conf_path.read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", str(log_file))

    # RawConfigParser is required: the format strings contain %(asctime)s
    # etc. which ConfigParser would try to interpolate and fail on.
    parser = _cp.RawConfigParser()
    parser.read_string(raw)

    logging.config.fileConfig(parser, disable_existing_loggers=False)
    return True


# ---------------------------------------------------------------------------
# Module-level handle
# ---------------------------------------------------------------------------
logger = logging.getLogger("userutil")
logger.addHandler(logging.NullHandler())
