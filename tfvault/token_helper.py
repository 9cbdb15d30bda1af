## Finds the Vault token: environment first, then the token file left by `vault login`

import logging
from pathlib import Path

from tfvault.errors import AuthResolutionError

TOKEN_FILE_NAME = '.vault-token'


def token_file_path():
    return Path.home() / TOKEN_FILE_NAME


def token_from_environment(config):
    """Token taken from VAULT_TOKEN when the config was read."""
    return config.token or None


def token_from_cache(config):
    """Token stored by Vault's internal token helper in ~/.vault-token."""
    path = token_file_path()
    try:
        with open(path, 'r') as token_file:
            token = token_file.read().strip()
    except FileNotFoundError:
        logging.debug(f"No cached Vault token at {path}")
        return None
    except OSError as e:
        raise AuthResolutionError(f"failed to get token from token helper: {e}") from e
    return token or None


DEFAULT_PROVIDERS = (token_from_environment, token_from_cache)


def resolve_token(config, providers=DEFAULT_PROVIDERS):
    for provider in providers:
        token = provider(config)
        if token:
            logging.debug(f"Vault token supplied by {provider.__name__}")
            return token
    raise AuthResolutionError("failed to get token from environment or credential helper")
