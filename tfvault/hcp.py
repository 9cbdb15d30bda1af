## Used to get the Terraform token secret from HashiCorp Vault

import logging
from collections.abc import Mapping

import hvac
import requests

from tfvault.errors import RetrievalError
from tfvault.token_helper import resolve_token


def secret_path(base_path, hostname):
    return f"{base_path}/{hostname}"


def get_vault_client(config, token):
    """Create an hvac client from the environment settings and the resolved token."""
    if config.skip_verify:
        verify = False
    elif config.ca_cert:
        verify = config.ca_cert
    else:
        verify = True

    cert = None
    if config.client_cert and config.client_key:
        cert = (config.client_cert, config.client_key)

    return hvac.Client(
        url=config.address,
        token=token,
        namespace=config.namespace,
        verify=verify,
        cert=cert,
        timeout=config.timeout,
    )


def read_secret_token(client, path):
    """Read the secret at `path` and return the `token` field of its KV v2 data.

    Returns None when the secret has no nested `data` mapping, so the caller
    answers with an empty credentials object instead of failing.
    """
    try:
        secret = client.read(path)
    except hvac.exceptions.Forbidden as e:
        raise RetrievalError(f"Permission denied. Check if the token has read access to {path}: {e}") from e
    except (hvac.exceptions.VaultError, requests.exceptions.RequestException) as e:
        raise RetrievalError(f"failed to read secret from Vault at {path}: {e}") from e

    if not isinstance(secret, Mapping):
        raise RetrievalError(f"no secret data returned from path={path}")

    secret_data = secret.get('data')
    kv_data = secret_data.get('data') if isinstance(secret_data, Mapping) else None
    if not isinstance(kv_data, Mapping):
        logging.debug(f"Secret at {path} has no data mapping, got {type(kv_data).__name__}")
        return None

    token = kv_data.get('token')
    token = '' if token is None else str(token)
    if token == '':
        raise RetrievalError(f"no secret data at {path} does not contain a token attribute or it is empty")
    return token


def fetch_token(config, base_path, hostname):
    # Token resolution comes first so a missing token never reaches the network
    vault_token = resolve_token(config)
    path = secret_path(base_path, hostname)
    logging.debug(f"Reading secret from Vault at {path}")
    client = get_vault_client(config, vault_token)
    return read_secret_token(client, path)
