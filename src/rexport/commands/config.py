"""
Orchestrator settings commands.
"""

import typer
from rexport.logging import get_logger
from rexport.utils.config_store import ConfigStore, ExportConfig
from rexport.utils.console import display_panel, error, success

app = typer.Typer(help="Show and change rexport settings", no_args_is_help=True)
logger = get_logger("rexport.commands.config")


@app.command("show")
def show_config() -> None:
    """Show the effective settings (file and environment combined)"""
    store = ConfigStore()
    values = store.as_dict()
    content = "\n".join(f"{key}: {value}" for key, value in values.items())
    display_panel(content, f"Settings ({store.settings_file})")


@app.command("set")
def set_config(
    key: str = typer.Argument(..., help=f"One of: {', '.join(ExportConfig.keys())}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Persist one setting to the settings file"""
    store = ConfigStore()
    try:
        store.set_value(key, value)
    except (KeyError, ValueError) as e:
        error(e.args[0] if e.args else str(e))
        raise typer.Exit(1)

    logger.info(f"Setting '{key}' updated")
    success(f"{key} = {value}")
