import logging
import os
import re
from typing import Optional
from urllib.parse import quote_from_bytes
from urllib.parse import unquote_to_bytes

from gcloud.aio.datastore_keys.constants import DATASET_ENV_VARS
from gcloud.aio.datastore_keys.exceptions import InvalidArgument
from gcloud.aio.datastore_keys.exceptions import InvalidEncoding


log = logging.getLogger(__name__)

# unreserved characters and %XX escapes, nothing else
_PERCENT_ENCODED = re.compile(r'(?:[A-Za-z0-9_.~-]|%[0-9A-Fa-f]{2})*')


def get_default_dataset() -> Optional[str]:
    for env_var in DATASET_ENV_VARS:
        dataset = os.environ.get(env_var)
        if dataset:
            log.debug('using dataset %r from $%s', dataset, env_var)
            return dataset

    return None


def ensure_utf8(value: str, field: str) -> None:
    # lone surrogates are valid str but cannot be written to the wire
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidArgument(f'{field} is not valid unicode: {value!r}') from e


def percent_encode(data: bytes) -> str:
    return quote_from_bytes(data, safe='')


def percent_decode(text: str) -> bytes:
    """
    Strict inverse of `percent_encode`.

    `urllib.parse.unquote_to_bytes` leaves malformed escapes in place, which
    would let garbage through to the protobuf parser; reject it here instead.
    """
    if not isinstance(text, str):
        raise InvalidEncoding(
            f'url-safe key must be a str, not {type(text).__name__}')

    if not _PERCENT_ENCODED.fullmatch(text):
        log.debug('rejecting malformed url-safe key %r', text)
        raise InvalidEncoding(f'{text!r} is not a valid url-safe key')

    return unquote_to_bytes(text)
