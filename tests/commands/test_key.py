import pytest
import typer

from rexport.commands.key import generate_key, key_status
from rexport.exporter.crypto import JWEEncrypter


@pytest.fixture
def store(mocker):
    store = mocker.Mock()
    mocker.patch("rexport.commands.key.ConfigStore", return_value=store)
    return store


def test_generate_key_stores_new_key(mocker, store):
    store.get_payload_key.return_value = None
    success = mocker.patch("rexport.commands.key.success")

    generate_key(force=False)

    store.store_payload_key.assert_called_once()
    stored = store.store_payload_key.call_args[0][0]
    JWEEncrypter.from_key_json(stored)
    success.assert_called_once()


def test_generate_key_refuses_to_overwrite(mocker, store):
    store.get_payload_key.return_value = "{}"
    mocker.patch("rexport.commands.key.warning")

    with pytest.raises(typer.Exit):
        generate_key(force=False)

    store.store_payload_key.assert_not_called()


def test_generate_key_force(mocker, store):
    store.get_payload_key.return_value = "{}"
    mocker.patch("rexport.commands.key.success")

    generate_key(force=True)

    store.store_payload_key.assert_called_once()


def test_key_status_missing(mocker, store):
    store.get_payload_key.return_value = None
    error = mocker.patch("rexport.commands.key.error")

    with pytest.raises(typer.Exit):
        key_status()

    error.assert_called_once()


def test_key_status_invalid(mocker, store):
    store.get_payload_key.return_value = "{broken"
    mocker.patch("rexport.commands.key.error")

    with pytest.raises(typer.Exit):
        key_status()


def test_key_status_ok(mocker, store):
    store.get_payload_key.return_value = JWEEncrypter.generate_key()
    info = mocker.patch("rexport.commands.key.info")

    key_status()

    info.assert_called_once()
