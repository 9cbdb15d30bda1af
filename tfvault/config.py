## Reads the Vault client settings from the environment

import os
import re
import logging
from dataclasses import dataclass
from typing import Optional

from tfvault.errors import ConfigError

DEFAULT_VAULT_ADDR = 'https://127.0.0.1:8200'
DEFAULT_TIMEOUT = 60

_TRUE_VALUES = ('1', 't', 'true', 'y', 'yes', 'on')
_FALSE_VALUES = ('0', 'f', 'false', 'n', 'no', 'off')
_DURATION_RE = re.compile(r'^(\d+)(s|m|h)?$')
_DURATION_UNITS = {None: 1, 's': 1, 'm': 60, 'h': 3600}


@dataclass(frozen=True)
class VaultConfig:
    address: str = DEFAULT_VAULT_ADDR
    token: str = ''
    namespace: Optional[str] = None
    ca_cert: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None
    skip_verify: bool = False
    timeout: int = DEFAULT_TIMEOUT


def parse_bool(name, value):
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"failed to read environment: could not parse {name}={value!r} as a boolean")


def parse_timeout(name, value):
    """Accept plain seconds ("30") or a single-unit duration ("30s", "2m", "1h")."""
    match = _DURATION_RE.match(value.strip())
    if not match:
        raise ConfigError(f"failed to read environment: could not parse {name}={value!r} as a duration")
    return int(match.group(1)) * _DURATION_UNITS[match.group(2)]


def read_vault_config(environ=None):
    """Read Vault client settings from environment variables."""
    env = os.environ if environ is None else environ

    skip_verify = False
    if env.get('VAULT_SKIP_VERIFY'):
        skip_verify = parse_bool('VAULT_SKIP_VERIFY', env['VAULT_SKIP_VERIFY'])

    timeout = DEFAULT_TIMEOUT
    if env.get('VAULT_CLIENT_TIMEOUT'):
        timeout = parse_timeout('VAULT_CLIENT_TIMEOUT', env['VAULT_CLIENT_TIMEOUT'])

    config = VaultConfig(
        address=env.get('VAULT_ADDR') or DEFAULT_VAULT_ADDR,
        token=(env.get('VAULT_TOKEN') or '').strip(),
        namespace=env.get('VAULT_NAMESPACE') or None,
        ca_cert=env.get('VAULT_CACERT') or None,
        client_cert=env.get('VAULT_CLIENT_CERT') or None,
        client_key=env.get('VAULT_CLIENT_KEY') or None,
        skip_verify=skip_verify,
        timeout=timeout,
    )
    logging.debug(f"Vault address: {config.address}, namespace: {config.namespace}, timeout: {config.timeout}s")
    return config


def read_base_path():
    return os.getenv('TF_TOKEN_VAULT_PATH', '')


def read_log_level():
    level_name = os.getenv('TF_TOKEN_VAULT_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(level_name)
    # getLevelName returns "Level X" for unknown names
    if not isinstance(level, int):
        return logging.WARNING
    # Fatal diagnostics are logged at ERROR and must always reach stderr
    return min(level, logging.ERROR)
