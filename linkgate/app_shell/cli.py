import argparse
import json
import logging
import sys
from pathlib import Path
from urllib.parse import parse_qsl

from linkgate.adapters.random_source import SystemRandomSource
from linkgate.adapters.sqlite.link_store import SQLiteLinkStore
from linkgate.adapters.sqlite.migrator import MigrationError, SQLiteMigrator
from linkgate.api.deps import Settings, get_settings
from linkgate.components.resolver import ResolverConfig, build_key
from linkgate.core.ports.store import LinkStoreError
from linkgate.core.services.resolution import ResolutionEngine
from linkgate.domain.entities import ResolutionRequest
from linkgate.rules.loader import load_rules
from linkgate.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_rules_or_exit(settings: Settings) -> Rules:
    try:
        return load_rules(settings.rules_path)
    except FileNotFoundError:
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    migrations_dir = args.migrations_dir or str(settings.migrations_dir)
    migrator = SQLiteMigrator(settings.db_path, migrations_dir)

    if args.check:
        status = migrator.status()
        if status.ready:
            print("Database is up to date.")
            return
        for name in status.pending:
            print(f"Pending migration: {name}")
        for table in status.missing_tables:
            print(f"Missing table: {table}")
        sys.exit(1)

    Path(settings.db_path).parent.mkdir(parents=True, exist_ok=True)
    try:
        applied = migrator.run_migrations()
    except MigrationError as e:
        logger.error("%s", e)
        sys.exit(1)
    if applied:
        print(f"Applied {len(applied)} migration(s) to {settings.db_path}.")
    else:
        print("Database is up to date.")


def handle_put(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules_or_exit(settings)
    slug = args.slug if rules.links.case_sensitive else args.slug.lower()

    value: dict[str, str] = {"url": args.url}
    if args.title:
        value["title"] = args.title
    if args.description:
        value["description"] = args.description
    if args.image:
        value["image"] = args.image

    key = build_key(slug, ResolverConfig.from_rules(rules.links))
    try:
        SQLiteLinkStore(settings.db_path).put(key, value, expires_at=args.expires_at)
    except LinkStoreError as e:
        logger.error("Could not write %s: %s", key, e)
        sys.exit(1)
    print(f"Stored {key} -> {args.url}")


def handle_resolve(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules_or_exit(settings)
    engine = ResolutionEngine(
        store=SQLiteLinkStore(settings.db_path),
        random_port=SystemRandomSource(),
        rules=rules,
    )
    request = ResolutionRequest(
        path=args.path,
        user_agent=args.ua,
        locale=args.locale,
        query=tuple(parse_qsl(args.query, keep_blank_values=True)),
        url=f"http://localhost{args.path}",
    )

    try:
        outcome = engine.resolve(request)
    except LinkStoreError as e:
        logger.error("Link store unavailable: %s", e)
        sys.exit(1)

    report: dict[str, object] = {
        "outcome": outcome.kind.value,
        "slug": outcome.decision.slug,
    }
    if outcome.decision.reason is not None:
        report["reason"] = outcome.decision.reason.value
    if outcome.client_class is not None:
        report["client"] = outcome.client_class.value
    if outcome.response is not None:
        report["status"] = outcome.response.status_code
        report["location"] = outcome.response.location
    print(json.dumps(report, indent=2))


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run(
        "linkgate.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Linkgate CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Apply database migrations")
    migrate_parser.add_argument("--migrations-dir", help="Directory holding *.sql migrations")
    migrate_parser.add_argument(
        "--check", action="store_true", help="Report pending migrations and exit 1 if any"
    )

    # put
    put_parser = subparsers.add_parser("put", help="Store a link record")
    put_parser.add_argument("slug", help="Short link slug")
    put_parser.add_argument("url", help="Destination URL")
    put_parser.add_argument("--title", help="Preview title")
    put_parser.add_argument("--description", help="Preview description")
    put_parser.add_argument("--image", help="Preview image URL")
    put_parser.add_argument("--expires-at", type=int, help="Expiry as a unix timestamp")

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Dry-run a request path")
    resolve_parser.add_argument("path", help="Request path, e.g. /promo")
    resolve_parser.add_argument("--ua", default="", help="User-Agent to classify")
    resolve_parser.add_argument("--locale", help="Visitor locale code")
    resolve_parser.add_argument("--query", default="", help="Query string without '?'")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    settings = get_settings()

    if args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "put":
        handle_put(settings, args)
    elif args.command == "resolve":
        handle_resolve(settings, args)
    elif args.command == "serve":
        handle_serve(settings, args)


if __name__ == "__main__":
    main()
