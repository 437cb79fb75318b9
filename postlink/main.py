import argparse
import asyncio
import sys
from pathlib import Path

import httpx
import uvicorn

from postlink.config.settings import Settings
from postlink.logging.logger import Log
from postlink.service.api import build_app
from postlink.uploader.exceptions import ValidationError
from postlink.uploader.orchestrator import build_orchestrator


def serve(settings: Settings) -> None:
    """Run the group resolution service."""
    app = build_app(settings)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


async def upload(settings: Settings, files: list[Path], category: str) -> int:
    """Upload files through the orchestrator; return the process exit code."""
    async with httpx.AsyncClient(
        base_url=settings.uploader_service_url,
        timeout=settings.uploader_timeout_seconds,
    ) as http_client:
        orchestrator = build_orchestrator(settings, http_client)
        try:
            tasks = orchestrator.select_files(files, category)
        except ValidationError as exc:
            Log.error(str(exc))
            return 2
        batch = await orchestrator.upload_all(tasks, category)

    for result in batch.results:
        print(f"OK      {result.file_name} -> {result.group}")
    for failure in batch.failures:
        print(f"FAILED  {failure.file_name}: {failure.reason}")
    return 0 if batch.all_success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="postlink")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("serve", help="run the group resolution service")

    upload_parser = commands.add_parser("upload", help="upload documents")
    upload_parser.add_argument("files", nargs="+", type=Path)
    upload_parser.add_argument("--category", "-c", required=True)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> dispatch command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "serve":
        serve(settings)
        return 0
    return asyncio.run(upload(settings, args.files, args.category))


if __name__ == "__main__":
    sys.exit(main())
