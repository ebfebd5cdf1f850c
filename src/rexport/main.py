import typer
from rexport.commands import config, key, logs
from rexport.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]rexport[/bold blue] - repository export job orchestrator",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(config.app, name="config")
app.add_typer(key.app, name="key")
app.add_typer(logs.app, name="logs")


def main():
    setup_logging()
    logger = get_logger("rexport.main")
    logger.debug("rexport CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {e}")
        raise


if __name__ == "__main__":
    main()
