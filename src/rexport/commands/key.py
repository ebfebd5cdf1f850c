"""
Payload encryption key management.
"""

import typer
from rexport.exporter.crypto import EncryptionError, JWEEncrypter
from rexport.logging import get_logger
from rexport.utils.config_store import ConfigStore
from rexport.utils.console import error, info, success, warning

app = typer.Typer(help="Manage the job payload encryption key", no_args_is_help=True)
logger = get_logger("rexport.commands.key")


@app.command("generate")
def generate_key(
    force: bool = typer.Option(
        False, "--force", help="Replace an existing key (in-flight jobs become undecodable)"
    ),
) -> None:
    """Generate a payload key and store it in the system keyring"""
    store = ConfigStore()
    if store.get_payload_key() and not force:
        warning("A payload key is already stored. Use --force to replace it.")
        raise typer.Exit(1)

    store.store_payload_key(JWEEncrypter.generate_key())
    logger.info("Generated new payload encryption key")
    success("Payload encryption key stored in the system keyring")


@app.command("status")
def key_status() -> None:
    """Check that a usable payload key is stored (the key is never printed)"""
    store = ConfigStore()
    key_json = store.get_payload_key()
    if not key_json:
        error("No payload key stored. Run 'rexport key generate'.")
        raise typer.Exit(1)

    try:
        JWEEncrypter.from_key_json(key_json)
    except EncryptionError as e:
        error(f"Stored payload key is unusable: {e}")
        raise typer.Exit(1)

    info("Payload key is present and valid")
