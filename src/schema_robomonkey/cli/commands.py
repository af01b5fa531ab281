from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
import asyncpg
from dotenv import load_dotenv

from schema_robomonkey.config import RendererConfig, load_renderer_config
from schema_robomonkey.db.executor import AsyncpgExecutor
from schema_robomonkey.db_introspect.schema_renderer import SchemaRenderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-robomonkey",
        description="Schema RoboMonkey - render a database catalog into a schema snapshot"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    render = sub.add_parser("render", help="Render the database schema as JSON")
    render.add_argument("--config", help="Path to YAML config file")
    render.add_argument("--dsn", help="Database URL (overrides config)")
    render.add_argument("--schema", help="Schema to render (default: current_schema())")
    render.add_argument("--output", "-o", help="Write JSON to this file instead of stdout")
    render.add_argument("--sort", action="store_true",
                        help="Sort object names for deterministic output")

    ping = sub.add_parser("ping", help="Test database connection")
    ping.add_argument("--config", help="Path to YAML config file")
    ping.add_argument("--dsn", help="Database URL (overrides config)")

    return parser


def _resolve_config(args: argparse.Namespace) -> RendererConfig:
    if args.dsn and not args.config:
        config = RendererConfig.model_validate({"database": {"dsn": args.dsn}})
    else:
        config = load_renderer_config(args.config)
        if args.dsn:
            config = config.model_copy(
                update={"database": config.database.model_copy(update={"dsn": args.dsn})}
            )

    if getattr(args, "schema", None):
        config = config.model_copy(
            update={"database": config.database.model_copy(update={"schema_name": args.schema})}
        )
    if getattr(args, "sort", False):
        config = config.model_copy(
            update={"rendering": config.rendering.model_copy(update={"sort_objects": True})}
        )
    return config


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
        logging.basicConfig(
            level=getattr(logging, config.logging.level),
            format=config.logging.format,
            handlers=[logging.StreamHandler(sys.stderr)]
        )
        logger.debug(f"Configuration: {config.log_redacted()}")

        if args.cmd == "render":
            asyncio.run(render_schema(config, args.output))
        elif args.cmd == "ping":
            asyncio.run(db_ping(config))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def render_schema(config: RendererConfig, output: str | None = None) -> None:
    """Render the configured schema and write it as JSON.

    Args:
        config: Renderer configuration
        output: Optional output file path; stdout when omitted
    """
    pool = await asyncpg.create_pool(
        config.database.dsn,
        min_size=1,
        max_size=max(config.database.pool_size, config.rendering.max_concurrent_fetches),
    )
    try:
        renderer = await SchemaRenderer.create(
            AsyncpgExecutor(pool),
            database_name=config.database.schema_name,
            config=config.rendering,
        )
        schema = await renderer.render_database_schema()
    finally:
        await pool.close()

    document = json.dumps(schema.to_document(), indent=2)
    if output:
        Path(output).write_text(document + "\n", encoding="utf-8")
        print(f"✓ Wrote schema to {output}", file=sys.stderr)
    else:
        print(document)


async def db_ping(config: RendererConfig) -> None:
    """Test database connection and report the active schema."""
    conn = await asyncpg.connect(dsn=config.database.dsn)
    try:
        renderer = await SchemaRenderer.create(
            AsyncpgExecutor(conn), database_name=config.database.schema_name
        )
        version = await conn.fetchval("SHOW server_version")
        print(f"✓ Connected (PostgreSQL {version}), schema: {renderer.database_name}")
    finally:
        await conn.close()


if __name__ == "__main__":
    run()
