"""
Payload codec for export jobs.

Job data is stored by the engine as plain text, so an export request is
turned into: base64( encrypt( canonical JSON ) ). The JSON document is
versioned so the request layout can evolve while older jobs are in flight.
"""

import base64
import binascii
import json
from dataclasses import asdict

from rexport.constants import PAYLOAD_VERSION
from rexport.exporter.crypto import Encrypter, EncryptionError
from rexport.exporter.errors import DecodeFailure, DecodingError, EncodingError
from rexport.exporter.models import ExportRequest, TargetAccount


class PayloadCodec:
    def __init__(self, encrypter: Encrypter):
        self.encrypter = encrypter

    def encode(self, request: ExportRequest) -> str:
        """Serialize, encrypt and base64-wrap an export request."""
        try:
            document = {"version": PAYLOAD_VERSION, "request": asdict(request)}
            text = json.dumps(document, sort_keys=True, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise EncodingError(f"failed to serialize job input: {e}") from e

        try:
            encrypted = self.encrypter.encrypt(text.strip())
        except EncryptionError as e:
            raise EncodingError(f"failed to encrypt job input: {e}") from e

        return base64.b64encode(encrypted).decode("ascii")

    def decode(self, data: str) -> ExportRequest:
        """Reverse of encode; the DecodingError reason says which stage failed."""
        try:
            encrypted = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodingError(
                DecodeFailure.MALFORMED_BASE64,
                f"failed to base64 decode job input: {e}",
            ) from e

        try:
            decrypted = self.encrypter.decrypt(encrypted)
        except EncryptionError as e:
            raise DecodingError(
                DecodeFailure.DECRYPTION, f"failed to decrypt job input: {e}"
            ) from e

        try:
            return _request_from_document(json.loads(decrypted))
        except (ValueError, TypeError, KeyError) as e:
            raise DecodingError(
                DecodeFailure.MALFORMED_PAYLOAD,
                f"failed to unmarshal job input json: {e}",
            ) from e


def _request_from_document(document) -> ExportRequest:
    if not isinstance(document, dict):
        raise ValueError("job input is not a JSON object")

    if "version" not in document:
        # Flat layout written before payloads were versioned
        body = document
    elif document["version"] == PAYLOAD_VERSION:
        body = document["request"]
    else:
        raise ValueError(f"unsupported payload version {document['version']!r}")

    target = body["target"]
    if not isinstance(target, dict):
        raise ValueError("target account is not a JSON object")

    is_public = body.get("is_public", False)
    if not isinstance(is_public, bool):
        raise ValueError(f"is_public must be a JSON boolean, got {is_public!r}")

    return ExportRequest(
        uid=str(body["uid"]),
        id=int(body["id"]),
        description=str(body.get("description", "")),
        is_public=is_public,
        target=TargetAccount(
            account_id=str(target["account_id"]),
            org_identifier=str(target["org_identifier"]),
            project_identifier=str(target["project_identifier"]),
            token=str(target["token"]),
        ),
    )
