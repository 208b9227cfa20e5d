# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Alembic environment – wires the migration engine to the database configured
for userutil.

The URL comes from ``sqlalchemy.url`` in the Alembic config when set (tests
and one-off runs), otherwise from the library's Settings class, so there is a
single source of truth for the connection string.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup – make sure ``backend/`` is importable so that
# ``from userutil.core.config import settings`` works without an install.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from alembic import context
from sqlalchemy import create_engine

from userutil.core.config import settings
from userutil.core.logger import configure_logging
from userutil.models import build_models

# Default-named mappings, so ``alembic revision --autogenerate`` can diff them
target_metadata = build_models().metadata

database_url = context.config.get_main_option("sqlalchemy.url") or settings.database_url

# Callers that own logging (tests, an embedding app) can opt out with
#     cfg.attributes["configure_logger"] = False
if context.config.attributes.get("configure_logger", True):
    configure_logging()


# ---------------------------------------------------------------------------
# Online mode (the default – uses a live DB connection)
# ---------------------------------------------------------------------------
def run_migrations_online():
    connectable = create_engine(database_url)
    with connectable.connect() as conn:
        context.configure(
            connection=conn,
            target_metadata=target_metadata,
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


# ---------------------------------------------------------------------------
# Offline mode (generates SQL without a live connection)
# ---------------------------------------------------------------------------
def run_migrations_offline():
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
