"""Command-line interface for editmend."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from pathlib import Path
import signal
import sys

from rich.console import Console

from editmend.core.agents.edit_fixer import EditApplyError, RequestContext, apply_edit
from editmend.core.session import EditMendSession
from editmend.core.utils.logging import configure_logging

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


async def run_fix_async(
    session: EditMendSession,
    file_path: Path,
    old_string: str,
    new_string: str,
    error: str,
    instruction: str,
    prompt_id: str | None = None,
    write: bool = False,
) -> int:
    """Ask the model to repair one failed edit.

    Args:
        session: Session providing the provider and corrector
        file_path: File the edit was meant for
        old_string: Original search text
        new_string: Original replacement text
        error: Error reported by the failed edit
        instruction: What the edit was meant to achieve
        prompt_id: Correlation id (a fallback id is used if None)
        write: Apply the corrected edit to the file

    Returns:
        Exit code (0 corrected, 1 no correction or apply failure, 2 usage error)
    """
    if not session.app_config.llm_api_key:
        err_console.print("[red]ERROR: OPENAI_API_KEY environment variable not set[/red]")
        return 2

    try:
        content = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        err_console.print(f"[red]ERROR: {file_path} is not valid UTF-8: {e}[/red]")
        return 2

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    # Signal handlers need a Unix event loop running in the main thread
    with contextlib.suppress(NotImplementedError, RuntimeError):
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)

    try:
        edit = await session.edit_corrector.correct_edit(
            instruction,
            old_string,
            new_string,
            error,
            content,
            session.llm_provider,
            cancel_event,
            context=RequestContext(prompt_id=prompt_id),
        )
    finally:
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.remove_signal_handler(signal.SIGINT)

    usage = session.llm_provider.get_token_usage()
    logger.debug(f"Token usage: total={usage.total_tokens}")

    if edit is None:
        err_console.print("[yellow]No correction available, original edit error stands[/yellow]")
        return 1

    console.print_json(edit.model_dump_json(by_alias=True))

    if not write:
        return 0

    try:
        new_content = apply_edit(content, edit)
    except EditApplyError as e:
        err_console.print(f"[red]ERROR: Could not apply corrected edit: {e}[/red]")
        return 1

    if new_content != content:
        file_path.write_text(new_content, encoding="utf-8")
        err_console.print(f"[green]Updated {file_path}[/green]")

    return 0


def run_fix(args: argparse.Namespace) -> None:
    """Run fix command (sync wrapper)."""
    file_path = Path(args.file)
    if not file_path.is_file():
        err_console.print(f"[red]ERROR: File not found: {file_path}[/red]")
        sys.exit(2)

    session = EditMendSession(app_config=args.app_config)
    log_config = session.app_config.logging
    configure_logging(
        level=log_config.level,
        format_string=log_config.format,
        structured=log_config.structured,
    )

    exit_code = asyncio.run(
        run_fix_async(
            session,
            file_path=file_path,
            old_string=args.old,
            new_string=args.new,
            error=args.error,
            instruction=args.instruction,
            prompt_id=args.prompt_id,
            write=args.write,
        )
    )
    sys.exit(exit_code)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="editmend",
        description="editmend - LLM-assisted repair of failed search/replace edits",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    fix = sub.add_parser("fix", help="Repair a failed search/replace edit")
    fix.add_argument("--file", required=True, help="File the edit was meant for")
    fix.add_argument("--old", required=True, help="Original search text")
    fix.add_argument("--new", required=True, help="Original replacement text")
    fix.add_argument("--error", required=True, help="Error reported by the failed edit")
    fix.add_argument("--instruction", required=True, help="What the edit was meant to achieve")
    fix.add_argument("--prompt-id", default=None, help="Correlation id for the request")
    fix.add_argument(
        "--app-config",
        default="config.json",
        help="Path to app config JSON/YAML (default: config.json)",
    )
    fix.add_argument(
        "--write",
        action="store_true",
        help="Apply the corrected edit to the file",
    )

    return p


def main() -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args()

    if args.cmd == "fix":
        run_fix(args)


if __name__ == "__main__":
    main()
