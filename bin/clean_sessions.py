# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Maintenance script – sweeps expired sessions.

userutil never schedules its own sweeps.  Run this from cron (or any other
scheduler) at whatever interval suits the deployment:
    */10 * * * *  python bin/clean_sessions.py

The database and table names come from etc/app.conf / USERUTIL_* variables.
Exit status is 0 on success and 1 if the sweep hit a storage error.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/clean_sessions.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from userutil import UserUtil                     # noqa: E402
from userutil.core.config import Settings         # noqa: E402
from userutil.core.logger import configure_logging  # noqa: E402


def clean(cfg=None) -> int:
    util = UserUtil.from_settings(cfg)
    util.init()
    try:
        result = util.clean_session()
    finally:
        util.engine.dispose()

    if not result.ok:
        print("[clean_sessions] sweep failed – see log/app.log for details.")
        return 1

    print(f"[clean_sessions] removed {result.value} expired session(s).")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(clean(Settings()))
