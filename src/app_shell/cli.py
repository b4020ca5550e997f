import argparse
import getpass
import logging
import sys
from pathlib import Path

import uvicorn

from src.adapters.auth.crypto import Argon2AuthAdapter
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.app_shell.config import Settings, load_settings
from src.app_shell.telemetry import configure_logging
from src.core.errors import StoreError

logger = logging.getLogger("cli")


def get_settings(config_dir: str | None) -> Settings:
    try:
        return load_settings(Path(config_dir) if config_dir else None)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration: %s", e)
        sys.exit(1)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    applied = SQLiteMigrator(settings.database.path).run_migrations()
    print(f"Applied {len(applied)} migrations.")


def handle_create_user(settings: Settings, args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("Password must not be empty.")
        sys.exit(1)

    repo = SQLiteUserRepo(settings.database.path)
    try:
        user_id = repo.save(args.username, Argon2AuthAdapter().hash_password(password))
    except StoreError as e:
        logger.error("Could not create user %s: %s", args.username, e)
        sys.exit(1)
    print(f"User '{args.username}' created ({user_id}).")


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    from src.api.main import create_app

    if not args.no_migrate:
        SQLiteMigrator(settings.database.path).run_migrations()

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=settings.application.host,
        port=settings.application.port,
        log_config=None,  # Keep our logging configuration
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Newsletter service CLI")
    parser.add_argument("--config-dir", help="Directory holding base.yaml and <environment>.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument(
        "--no-migrate", action="store_true", help="Skip applying pending migrations"
    )

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Create a publisher account")
    user_parser.add_argument("username")
    user_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args(argv)
    settings = get_settings(args.config_dir)
    configure_logging(settings.logging.level)

    if args.command == "serve":
        handle_serve(settings, args)
    elif args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "create-user":
        handle_create_user(settings, args)


if __name__ == "__main__":
    main()
