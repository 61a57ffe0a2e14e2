"""Decoding of the opaque client id issued by the reg-suit GitHub app."""

import base64
import binascii
import logging
import zlib
from dataclasses import dataclass

from .exceptions import ConfigurationValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedClientId:
    """Repository coordinates carried inside a client id."""

    owner: str
    repository: str
    installation_id: str


def decode_client_id(client_id: str) -> DecodedClientId:
    """Decode a base64, raw-deflated ``<marker>/<repo>/<installation>/<owner>`` id.

    Raises:
        ConfigurationValidationError: If the id is not decodable or does not
            contain exactly four segments
    """
    try:
        deflated = base64.b64decode(client_id, validate=True)
        text = zlib.decompress(deflated, -zlib.MAX_WBITS).decode("utf-8")
    except (binascii.Error, zlib.error, UnicodeDecodeError) as e:
        logger.error(f"Invalid client ID: {client_id}")
        raise ConfigurationValidationError(f"Invalid client ID: {client_id}") from e

    parts = text.split("/")
    if len(parts) != 4:
        logger.error(f"Invalid client ID: {client_id}")
        raise ConfigurationValidationError(
            f"Invalid client ID: {client_id}",
            details={"segments": len(parts)},
        )

    repository, installation_id, owner = parts[1:]
    return DecodedClientId(
        owner=owner, repository=repository, installation_id=installation_id
    )
