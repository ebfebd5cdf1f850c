"""
Log inspection commands.
"""

import typer
from datetime import datetime
from typing import Optional
from rich.console import Console
from rich.syntax import Syntax
from rexport.logging import get_logger, setup_logging
from rexport.logging.config import LogConfig, get_log_file_path, get_log_directory
from rexport.utils.console import create_table, error, info, warning
from rexport.constants import LOG_APP_NAME, LOG_FILE_NAME, LOG_LINES_TO_SHOW

app = typer.Typer(help="Inspect rexport logs")
console = Console()


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of lines to show"
    ),
    level: Optional[str] = typer.Option(
        None, "--level", help="Filter by log level (DEBUG, INFO, WARNING, ERROR)"
    ),
    job: Optional[str] = typer.Option(
        None, "--job", help="Only show lines for one job (e.g. export_repo_42)"
    ),
) -> None:
    """Show recent log entries"""
    setup_logging()
    logger = get_logger("rexport.commands.logs")

    try:
        log_file = get_log_file_path()

        if not log_file.exists():
            warning(f"No log file found. Run some {LOG_APP_NAME} jobs to generate logs.")
            return

        with open(log_file, "r", encoding="utf-8") as f:
            all_lines = f.readlines()

        if level:
            all_lines = [line for line in all_lines if f" {level.upper()} " in line]
        if job:
            all_lines = [line for line in all_lines if job in line]

        display_lines = all_lines[-lines:] if all_lines else []
        if not display_lines:
            info("No log entries found matching the criteria.")
            return

        logger.debug(f"Displaying {len(display_lines)} log line(s)")
        syntax = Syntax("".join(display_lines), "log", theme="monokai", line_numbers=False)
        console.print(syntax)

    except OSError as e:
        logger.error(f"Failed to show logs: {e}")
        error(f"Failed to show logs: {e}")
        raise typer.Exit(1)


@app.command("info")
def log_info() -> None:
    """Show log configuration and file information"""
    setup_logging()

    config = LogConfig()
    log_file = get_log_file_path(config)
    log_dir = get_log_directory()

    table = create_table(f"{LOG_APP_NAME} Log Information", ["Setting", "Value"])
    table.add_row("Log Directory", str(log_dir))
    table.add_row("Log File", str(log_file))
    table.add_row("Rotation", "Daily at midnight")
    table.add_row("Retention Days", str(config.log_retention_days))

    if log_file.exists():
        stat = log_file.stat()
        table.add_row("Current Size", f"{stat.st_size / 1024:.1f} KB")
        modified = datetime.fromtimestamp(stat.st_mtime)
        table.add_row("Last Modified", modified.strftime("%Y-%m-%d %H:%M:%S"))
    else:
        table.add_row("Current Size", "File not found")

    table.add_row("Rotated Files", str(len(list(log_dir.glob(f"{LOG_FILE_NAME}.log.*")))))
    console.print(table)
