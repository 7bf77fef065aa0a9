import sys
from pathlib import Path

# Get the project root directory
project_root = Path(__file__).parents[1].absolute()
sys.path.insert(0, str(project_root))

from employee_console.core.config import settings

from alembic import context
from sqlalchemy import engine_from_config, pool

# Import Base and register every model with Base.metadata
from employee_console.db.base import Base
from employee_console.db.models import (  # noqa: F401
    HeadCategory,
    SubCategory,
    MicroCategory,
    AuthUser,
    AuthSession,
    Employee,
    State,
    City,
    Vendor,
    Lead,
    LeadPurchase,
    VendorPlan,
)

# This is the Alembic Config object
config = context.config

# Update sqlalchemy.url value from settings
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata

# micro_category_meta is managed by migrations only, its layout varies
IGNORED_TABLES = {"micro_category_meta"}


def include_object(object, name, type_, reflected, compare_to):
    return not (type_ == "table" and name in IGNORED_TABLES)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            compare_type=True,  # Detects column type changes
            compare_server_default=True,  # Detects default value changes
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
