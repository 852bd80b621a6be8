"""Alembic environment for the local backend's tables (run through `flask db ...`)."""
import logging
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from flask import current_app

import feedback_app.models  # noqa: F401 (every table must be on the metadata)

config = context.config
if config.config_file_name and Path(config.config_file_name).exists():
    fileConfig(config.config_file_name)
log = logging.getLogger("alembic.env")

migrate_ext = current_app.extensions["migrate"]
engine = migrate_ext.db.engine
metadata = migrate_ext.db.metadata
config.set_main_option(
    "sqlalchemy.url", engine.url.render_as_string(hide_password=False).replace("%", "%%")
)

# SQLite cannot ALTER most things in place
COMMON_OPTS = {"target_metadata": metadata, "compare_type": True, "render_as_batch": True}


def _drop_empty_autogenerate(ctx, revision, directives):
    if getattr(config.cmd_opts, "autogenerate", False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []
        log.info("Schema unchanged; no revision written.")


def run_offline():
    context.configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True, **COMMON_OPTS)
    with context.begin_transaction():
        context.run_migrations()


def run_online():
    opts = dict(migrate_ext.configure_args)
    opts.setdefault("process_revision_directives", _drop_empty_autogenerate)
    opts.update(COMMON_OPTS)
    with engine.connect() as connection:
        context.configure(connection=connection, **opts)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
