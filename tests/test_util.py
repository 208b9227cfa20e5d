from __future__ import annotations

import importlib
import importlib.util
import logging
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from userutil import Outcome, UserUtil
from userutil.core.config import Settings

from conftest import HASH, FakeClock

ROOT = Path(__file__).resolve().parent.parent


def _alembic_config(url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "backend" / "migrations"))
    cfg.set_main_option("sqlalchemy.url", url)
    # the test run owns logging
    cfg.attributes["configure_logger"] = False
    return cfg


def _load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, ROOT / "bin" / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_operations_before_init_fail_softly(engine) -> None:
    util = UserUtil(engine)
    assert util.create_user("alice", HASH).outcome is Outcome.STORAGE_ERROR
    assert util.check_session(b"x").outcome is Outcome.STORAGE_ERROR


def test_falsy_options_fall_back_to_defaults(engine) -> None:
    util = UserUtil(engine, users_table_name="", sessions_table_name=None, session_expires=0)
    assert util.users_table_name == "Users"
    assert util.sessions_table_name == "Sessions"
    assert util.session_expires == 3600


def test_init_creates_both_tables(util, engine) -> None:
    assert {"Users", "Sessions"} <= set(inspect(engine).get_table_names())
    columns = {c["name"] for c in inspect(engine).get_columns("Sessions")}
    assert columns == {"ID", "UserID", "Token", "Expire_at"}
    indexed = {tuple(ix["column_names"]) for ix in inspect(engine).get_indexes("Sessions")}
    assert ("Token",) in indexed


def test_init_is_repeatable(util, engine) -> None:
    util.create_user("alice", HASH)
    again = UserUtil(engine)
    again.init()
    assert again.get_id("alice").ok


def test_init_failure_exits_process(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")
    util = UserUtil(engine)
    with pytest.raises(SystemExit) as exc:
        util.init()
    assert exc.value.code == 1


def test_from_settings(tmp_path) -> None:
    cfg = Settings(
        database_url=f"sqlite:///{tmp_path / 'app.db'}",
        users_table_name="People",
        session_expires=120,
        reject_disabled=False,
    )
    util = UserUtil.from_settings(cfg, clock=FakeClock(1000))
    util.init()
    try:
        assert util.create_user("alice", HASH).ok
        alice = util.get_id("alice").value
        util.disable_user(alice)
        token = util.create_session(alice, HASH).value
        assert util.get_session_info(token).value.expire_at == 1120
        assert "People" in inspect(util.engine).get_table_names()
    finally:
        util.engine.dispose()


def test_migration_matches_models(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = _alembic_config(url)
    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        assert {"Users", "Sessions"} <= set(inspect(engine).get_table_names())
        index_names = {ix["name"] for ix in inspect(engine).get_indexes("Sessions")}
        assert {"ix_Sessions_Token", "ix_Sessions_UserID", "ix_Sessions_Expire_at"} <= index_names

        util = UserUtil(engine, clock=FakeClock())
        util.init()
        assert util.create_user("alice", HASH).ok
        assert util.create_user("alice", HASH).outcome is Outcome.CONFLICT
        alice = util.get_id("alice").value
        assert util.get_user_info(alice).value.disabled is False
        token = util.create_session(alice, HASH).value
        assert util.check_session(token).value is True
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert "Users" not in tables and "Sessions" not in tables
    finally:
        engine.dispose()


def test_clean_sessions_script(tmp_path, capsys) -> None:
    url = f"sqlite:///{tmp_path / 'cron.db'}"
    seeded = UserUtil(create_engine(url), clock=FakeClock(1000))
    seeded.init()
    seeded.create_user("alice", HASH)
    alice = seeded.get_id("alice").value
    seeded.create_session(alice, HASH)
    seeded.create_session(alice, HASH)
    seeded.engine.dispose()

    script = _load_script("clean_sessions")
    assert script.clean(Settings(database_url=url)) == 0
    assert "removed 2 expired session(s)" in capsys.readouterr().out

    assert script.clean(Settings(database_url=url)) == 0
    assert "removed 0 expired session(s)" in capsys.readouterr().out


def test_import_leaves_host_logging_alone() -> None:
    import userutil.core.logger as logger_module

    root = logging.getLogger()
    host = logging.StreamHandler()
    saved_level = root.level
    root.addHandler(host)
    root.setLevel(logging.DEBUG)
    try:
        importlib.reload(logger_module)
        assert host in root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.removeHandler(host)
        root.setLevel(saved_level)


def test_configure_logging_writes_to_log_file(tmp_path) -> None:
    from userutil.core.logger import configure_logging

    assert configure_logging(tmp_path / "absent.conf") is False

    conf = tmp_path / "logging.conf"
    conf.write_text(
        "[loggers]\nkeys=root\n\n"
        "[handlers]\nkeys=file\n\n"
        "[formatters]\nkeys=plain\n\n"
        "[logger_root]\nlevel=INFO\nhandlers=file\n\n"
        "[handler_file]\nclass=FileHandler\nlevel=INFO\nformatter=plain\n"
        "args=('%(log_file)s', 'a', 'utf-8')\n\n"
        "[formatter_plain]\nformat=%(name)s: %(message)s\n",
        encoding="utf-8",
    )
    log_file = tmp_path / "log" / "app.log"

    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        assert configure_logging(conf, log_file) is True
        logging.getLogger("userutil").info("sweep done")
        for handler in root.handlers:
            handler.flush()
        assert "userutil: sweep done" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])
