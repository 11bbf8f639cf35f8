from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from alembic.script import ScriptDirectory
from alembic.util import CommandError

from authable.install.config import BuiltIn, InstallConfig, Revision
from authable.install.errors import InstallError
from authable.install.schema import model_fields, model_name
from authable.install.templates import camelize, create_file, render, underscore

logger = logging.getLogger(__name__)

FieldsOf = Callable[[str], set[str]]

MIGRATION_FILE = re.compile(r"^(\d{14})_\w+\.py$")

UUID = "postgresql.UUID(as_uuid=True)"
STRING = "sa.String()"
JSONB = "postgresql.JSONB()"


def references(table: str) -> str:
    return f'{UUID}, sa.ForeignKey("{table}.id", ondelete="CASCADE")'


USER_FIELDS: dict[str, str] = {
    "id": f"{UUID}, primary_key=True",
    "email": STRING,
    "password": STRING,
    "settings": JSONB,
    "priv_settings": JSONB,
}
USER_CONSTRAINTS: dict[str, str] = {
    "email": 'op.create_index(op.f("ix_{table}_email"), "{table}", ["email"], unique=True)',
}

TOKEN_FIELDS: dict[str, str] = {
    "id": f"{UUID}, primary_key=True",
    "name": STRING,
    "value": STRING,
    "expires_at": "sa.Integer()",
    "details": JSONB,
    "user_id": references("users"),
}
TOKEN_CONSTRAINTS: dict[str, str] = {
    "user_id": 'op.create_index(op.f("ix_{table}_user_id"), "{table}", ["user_id"], unique=False)',
    "value": 'op.create_index(op.f("ix_{table}_value_name"), "{table}", ["value", "name"], unique=True)',
}

CLIENT_FIELDS: dict[str, str] = {
    "id": f"{UUID}, primary_key=True",
    "name": STRING,
    "secret": STRING,
    "redirect_url": STRING,
    "settings": JSONB,
    "priv_settings": JSONB,
    "user_id": references("users"),
}
CLIENT_CONSTRAINTS: dict[str, str] = {
    "user_id": 'op.create_index(op.f("ix_{table}_user_id"), "{table}", ["user_id"], unique=False)',
    "secret": 'op.create_index(op.f("ix_{table}_secret"), "{table}", ["secret"], unique=True)',
    "name": 'op.create_index(op.f("ix_{table}_name"), "{table}", ["name"], unique=True)',
}

APP_FIELDS: dict[str, str] = {
    "id": f"{UUID}, primary_key=True",
    "scope": STRING,
    "user_id": references("users"),
    "client_id": references("clients"),
}
APP_CONSTRAINTS: dict[str, str] = {
    "client_id": 'op.create_index(op.f("ix_{table}_user_id_client_id"), "{table}", ["user_id", "client_id"], unique=True)',
}

TIMESTAMP_COLUMNS = (
    'sa.Column("inserted_at", sa.DateTime(), nullable=False)',
    'sa.Column("updated_at", sa.DateTime(), nullable=False)',
)

MIGRATION_TEMPLATE = '''"""$message

Module: $module
Revision ID: $revision
Revises: $revises
Create Date: $create_date

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "$revision"
down_revision: Union[str, Sequence[str], None] = $down_revision
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
$change


def downgrade() -> None:
    pass
'''


@dataclass(frozen=True)
class Role:
    name: str
    attr: str
    table: str
    fields: dict[str, str]
    constraints: dict[str, str]


USER = Role("user", "resource_owner", "users", USER_FIELDS, USER_CONSTRAINTS)
TOKEN = Role("token", "token_store", "tokens", TOKEN_FIELDS, TOKEN_CONSTRAINTS)
CLIENT = Role("client", "client", "clients", CLIENT_FIELDS, CLIENT_CONSTRAINTS)
APP = Role("app", "app", "apps", APP_FIELDS, APP_CONSTRAINTS)

ROLES = (USER, TOKEN, CLIENT, APP)


# ---- field / constraint filtering -----------------------------------------


def reject_if_exists_in_schema(
    spec: dict[str, str], existing: set[str]
) -> dict[str, str]:
    return {name: expr for name, expr in spec.items() if name not in existing}


def missing_constraints(
    constraints: dict[str, str], fields_to_add: dict[str, str]
) -> dict[str, str]:
    return {key: stmt for key, stmt in constraints.items() if key in fields_to_add}


def constraint_statements(constraints: dict[str, str], table: str) -> list[str]:
    return [stmt.format(table=table) for stmt in constraints.values()]


# ---- change bodies ---------------------------------------------------------


def create_change(table: str, fields: dict[str, str], constraints: list[str]) -> str:
    lines = ["    op.create_table(", f'        "{table}",']
    lines += [f'        sa.Column("{name}", {expr}),' for name, expr in fields.items()]
    lines += [f"        {column}," for column in TIMESTAMP_COLUMNS]
    lines.append("    )")
    lines += [f"    {stmt}" for stmt in constraints]
    return "\n".join(lines)


def alter_change(table: str, fields: dict[str, str], constraints: list[str]) -> str:
    lines = [
        f'    op.add_column("{table}", sa.Column("{name}", {expr}))'
        for name, expr in fields.items()
    ]
    lines += [f"    {stmt}" for stmt in constraints]
    return "\n".join(lines)


# ---- rendering -------------------------------------------------------------


def migration_module(repo: str, mig_name: str) -> str:
    return f"{repo}.Migrations.{camelize(mig_name)}"


def _revision_literal(revision: Revision) -> str:
    if revision is None:
        return "None"
    if isinstance(revision, tuple):
        return "(" + ", ".join(f'"{rev}"' for rev in revision) + ")"
    return f'"{revision}"'


def _revises_line(revision: Revision) -> str:
    if revision is None:
        return ""
    if isinstance(revision, tuple):
        return ", ".join(revision)
    return revision


def _create_date(revision: str) -> str:
    # seconds may run past 59 once the counter is bumped
    r = revision
    return f"{r[0:4]}-{r[4:6]}-{r[6:8]} {r[8:10]}:{r[10:12]}:{r[12:14]}"


def render_migration(config: InstallConfig, mig_name: str, change: str) -> str:
    revision = str(config.timestamp)
    return render(
        MIGRATION_TEMPLATE,
        {
            "message": mig_name.replace("_", " "),
            "module": migration_module(config.repo, mig_name),
            "revision": revision,
            "revises": _revises_line(config.down_revision),
            "down_revision": _revision_literal(config.down_revision),
            "create_date": _create_date(revision),
            "change": change,
        },
    )


def do_gen_migration(config: InstallConfig, mig_name: str, change: str) -> InstallConfig:
    file_path = config.migrations_dir / f"{config.timestamp}_{underscore(mig_name)}.py"
    create_file(file_path, render_migration(config, mig_name, change), force=config.force)
    return replace(
        config,
        timestamp=config.timestamp + 1,
        down_revision=str(config.timestamp),
    )


# ---- generators ------------------------------------------------------------


def gen_migration(
    config: InstallConfig, role: Role, fields_of: FieldsOf = model_fields
) -> InstallConfig:
    source = getattr(config, role.attr)

    if isinstance(source, BuiltIn):
        change = create_change(
            role.table,
            role.fields,
            constraint_statements(role.constraints, role.table),
        )
        return do_gen_migration(config, f"create_{role.name}", change)

    name = model_name(source.identifier)
    table = f"{underscore(name)}s"

    field_adds = reject_if_exists_in_schema(role.fields, fields_of(source.identifier))
    if not field_adds:
        logger.info("%s already has every %s field; no migration needed", source.identifier, role.name)
        return config

    constraint_adds = missing_constraints(role.constraints, field_adds)
    change = alter_change(table, field_adds, constraint_statements(constraint_adds, table))
    return do_gen_migration(config, f"add_authable_fields_to_{name}", change)


def gen_user_migration(config: InstallConfig, fields_of: FieldsOf = model_fields) -> InstallConfig:
    return gen_migration(config, USER, fields_of)


def gen_token_migration(config: InstallConfig, fields_of: FieldsOf = model_fields) -> InstallConfig:
    return gen_migration(config, TOKEN, fields_of)


def gen_client_migration(config: InstallConfig, fields_of: FieldsOf = model_fields) -> InstallConfig:
    return gen_migration(config, CLIENT, fields_of)


def gen_app_migration(config: InstallConfig, fields_of: FieldsOf = model_fields) -> InstallConfig:
    return gen_migration(config, APP, fields_of)


# ---- existing migrations ---------------------------------------------------


def existing_timestamps(migrations_dir: Path) -> list[int]:
    stamps = []
    for path in migrations_dir.glob("*.py"):
        m = MIGRATION_FILE.match(path.name)
        if m:
            stamps.append(int(m.group(1)))
    return stamps


def head_revisions(migrations_dir: Path) -> Revision:
    try:
        script = ScriptDirectory(
            str(migrations_dir.parent), version_locations=[str(migrations_dir)]
        )
        heads = script.get_heads()
    except (CommandError, SyntaxError, ImportError) as exc:
        raise InstallError(f"could not read migrations in {migrations_dir}: {exc}") from exc

    if not heads:
        return None
    if len(heads) == 1:
        return heads[0]
    return tuple(sorted(heads))


def seed_revision(config: InstallConfig) -> InstallConfig:
    """Move the timestamp past existing migrations and chain onto their head(s)."""
    migrations_dir = config.migrations_dir
    if not migrations_dir.is_dir():
        return config

    stamps = existing_timestamps(migrations_dir)
    seed = max([config.timestamp, *(stamp + 1 for stamp in stamps)])
    if seed != config.timestamp:
        logger.info("timestamp %s collides with existing migrations; using %s", config.timestamp, seed)

    return replace(config, timestamp=seed, down_revision=head_revisions(migrations_dir))
