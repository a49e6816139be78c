"""
Waymark CLI - Command-line interface for the preview engine.

Usage:
    waymark walk <project_id> [steps...]   Simulate a visit (steps: index, -1, scan)
    waymark resolve <payload>              Resolve scanned code content
    waymark code <location_id>             Print the code content for a location
    waymark serve                          Run the HTTP API

Add --demo to use the built-in demo project instead of the data API.
"""

import argparse
import asyncio
import sys

from .errors import WaymarkError


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Waymark - Location Experience Preview Engine",
        prog="waymark",
    )
    parser.add_argument("--demo", action="store_true", help="Use the built-in demo project")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    walk_parser = subparsers.add_parser("walk", help="Simulate a visit")
    walk_parser.add_argument("project_id", type=int, help="Project to preview")
    walk_parser.add_argument(
        "steps", nargs="*", help="Location indices (-1 for homescreen) or 'scan'"
    )

    resolve_parser = subparsers.add_parser("resolve", help="Resolve scanned code content")
    resolve_parser.add_argument("payload", help="Bare id, JSON record or scanner URL")

    code_parser = subparsers.add_parser("code", help="Print code content for a location")
    code_parser.add_argument("location_id", type=int, help="Location id")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    if args.command == "walk":
        asyncio.run(cmd_walk(args))
    elif args.command == "resolve":
        asyncio.run(cmd_resolve(args))
    elif args.command == "code":
        asyncio.run(cmd_code(args))
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _gateway(args):
    if args.demo:
        from .demo import create_demo_gateway
        return create_demo_gateway()

    from .gateway import GatewayConfig, RestGateway
    return RestGateway(GatewayConfig.from_settings())


async def cmd_walk(args):
    """Simulate a visit through a project."""
    from .session import SessionManager, PreviewStatus

    manager = SessionManager(_gateway(args))
    session = await manager.open_session(args.project_id)
    if session.status != PreviewStatus.READY:
        print(f"Error: {session.error}")
        sys.exit(1)

    print(f"Previewing: {session.project.title}")
    for i, loc in enumerate(session.locations):
        print(f"  [{i}] {loc.location_name} ({loc.location_trigger.value}, {loc.score_points} pts)")

    for step in args.steps:
        if step == "scan":
            result = session.scan()
        else:
            try:
                index = int(step)
            except ValueError:
                print(f"Error: Unknown step: {step}")
                sys.exit(1)
            result = session.select(index)

        if not result.success:
            print(f"Error: {result.error}")
            sys.exit(1)
        for change in result.changes:
            print(f"- {change}")

    stats = session.stats()
    print(f"\nPoints: {stats.points} / {stats.max_points}")
    print(f"Locations Visited: {stats.visited_count} / {stats.location_count}")


async def cmd_resolve(args):
    """Resolve scanned code content."""
    from .resolver import CodeResolver

    try:
        intent = await CodeResolver(_gateway(args)).resolve(args.payload)
    except WaymarkError as e:
        print(f"Error ({e.error_code.value}): {e.message}")
        sys.exit(1)

    print(f"Project: {intent.project_id}")
    print(f"Location: {intent.initial_location.id} {intent.initial_location.location_name}")


async def cmd_code(args):
    """Print the code content for a location."""
    from .config import get_settings
    from .resolver import code_url, encode_payload

    try:
        location = await _gateway(args).get_location(args.location_id)
    except WaymarkError as e:
        print(f"Error ({e.error_code.value}): {e.message}")
        sys.exit(1)

    print(encode_payload(location))
    print(code_url(location, get_settings().PUBLIC_BASE_URL))


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    if args.demo:
        from .api import APIService, create_app
        from .config import get_settings

        settings = get_settings()
        service = APIService(
            gateway=_gateway(args),
            public_base_url=settings.PUBLIC_BASE_URL,
            session_max_age=settings.SESSION_MAX_AGE,
        )
        app = create_app(service=service, settings=settings)
        uvicorn.run(app, host=args.host, port=args.port)
    else:
        uvicorn.run("waymark.api.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
