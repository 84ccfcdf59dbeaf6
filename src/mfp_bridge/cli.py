"""Command-line entry point."""

import argparse
import asyncio
import sys

from mfp_bridge.app_logging import configure_logging
from mfp_bridge.config import Settings, validate_cookie
from mfp_bridge.containers import AppContainer, build_container
from mfp_bridge.errors import MfpError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mfp-bridge", description="MyFitnessPal diary bridge"
    )
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Start the tool server")
    serve.add_argument(
        "--read-only",
        action="store_true",
        help="Run in read-only mode (disable write operations)",
    )
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    commands.add_parser("check", help="Test the connection and fetch today's diary")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)

    if args.command == "check":
        return asyncio.run(_check(settings))
    return _serve(
        settings,
        read_only=getattr(args, "read_only", False),
        host=getattr(args, "host", "127.0.0.1"),
        port=getattr(args, "port", 8000),
    )


def _serve(settings: Settings, *, read_only: bool, host: str, port: int) -> int:
    import uvicorn

    from mfp_bridge.api.app import create_app

    if read_only:
        settings = settings.model_copy(update={"mfp_read_only": True})
    try:
        container = build_container(settings)
    except MfpError as exc:
        print(f"Failed to start server: {exc}", file=sys.stderr)
        return 1
    uvicorn.run(create_app(container), host=host, port=port)
    return 0


async def _check(settings: Settings) -> int:
    if not validate_cookie(settings.mfp_cookie):
        print("Error: MFP_COOKIE environment variable is not set.", file=sys.stderr)
        print("Set it with: export MFP_COOKIE='your_cookie_here'", file=sys.stderr)
        return 1

    print("Testing connection...")
    container = build_container(settings)
    try:
        return await _run_check(container)
    except MfpError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await container.close_resources()


async def _run_check(container: AppContainer) -> int:
    if not await container.mfp_client.validate_session():
        print(
            "Session is invalid or expired. Please update your MFP_COOKIE.",
            file=sys.stderr,
        )
        return 1
    print("Session is valid\n")

    print("Fetching today's diary...")
    diary = await container.diary_service.get_diary()
    print(f"Date: {diary.date}")
    print(f"Total calories: {diary.totals.calories:g}")
    print(f"Goal: {diary.goals.calories:g}")
    print(f"Remaining: {diary.remaining.calories:g}\n")
    print("Meals:")
    for meal in diary.meals:
        print(
            f"  {meal.name}: {len(meal.entries)} entries, "
            f"{meal.totals.calories:g} cal"
        )

    print("\nFetching goals...")
    goals = await container.goals_service.get_goals()
    print(f"Daily calorie goal: {goals.calories:g}")
    print(f"Carbs: {goals.carbs.grams:g}g ({goals.carbs.percentage}%)")
    print(f"Fat: {goals.fat.grams:g}g ({goals.fat.percentage}%)")
    print(f"Protein: {goals.protein.grams:g}g ({goals.protein.percentage}%)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
