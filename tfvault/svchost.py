## Terraform service hostname normalization ("for display" and "for comparison" forms)

import re
import logging

import idna

from tfvault.errors import HostnameFormatError

DEFAULT_PORT = 443
MAX_PORT = 65535

# ASCII full stop plus the ideographic and fullwidth forms IDNA treats as dots
LABEL_SEPARATORS = re.compile('[.\u3002\uff0e\uff61]')


def split_port(given):
    colon = given.find(':')
    if colon == -1:
        return given, ''
    return given[:colon], given[colon:]


def normalize_port_portion(portion):
    """Normalize a ":NNN" suffix. The default port 443 collapses to ""."""
    if portion == '':
        return portion
    if not portion.startswith(':'):
        raise HostnameFormatError("port portion is missing its initial colon")
    digits = portion[1:]
    if not digits or not digits.isascii() or not digits.isdigit():
        raise HostnameFormatError("port portion contains non-digit characters")
    port = int(digits)
    if port == DEFAULT_PORT:
        return ''
    if port > MAX_PORT:
        raise HostnameFormatError("port number is greater than 65535")
    return f":{port}"


def for_display(given):
    """Return the human-readable Unicode form of a hostname.

    Never fails: an unparseable port is dropped and a host that cannot be
    converted comes back as given.
    """
    host, port_portion = split_port(given)
    try:
        port_portion = normalize_port_portion(port_portion)
    except HostnameFormatError:
        port_portion = ''

    try:
        ascii_host = idna.encode(host, uts46=True, std3_rules=False, transitional=False)
        display = idna.decode(ascii_host)
    except UnicodeError:
        return host + port_portion
    return display + port_portion


def for_comparison(given):
    """Return the ASCII form used to compare hostnames for equality.

    Raises HostnameFormatError when the hostname is not acceptable as a
    service hostname.
    """
    host, port_portion = split_port(given)
    port_portion = normalize_port_portion(port_portion)

    if host == '':
        raise HostnameFormatError("empty string is not a valid hostname")

    labels = LABEL_SEPARATORS.split(host)
    if len(labels) > 1 and labels[-1] == '':
        labels = labels[:-1]
    for label in labels:
        if label == '':
            raise HostnameFormatError("hostname contains empty label (two consecutive periods)")
        # Punycode must come in as Unicode so configuration stays readable
        if label.startswith('xn--'):
            raise HostnameFormatError(
                f"hostname label {label!r} specified in punycode format; "
                "service hostnames must be given in unicode"
            )

    try:
        ascii_host = idna.encode(host, uts46=True, std3_rules=True, transitional=False)
    except UnicodeError as e:
        raise HostnameFormatError(str(e)) from e
    return ascii_host.decode('ascii') + port_portion


def generate_token_map(hostname, token):
    """Build the credentials mapping for `hostname`, keyed by its comparison form.

    The key is derived by converting to the display form and back, so it is
    the canonical form even when the caller sent punycode. A None token gives
    an empty mapping.
    """
    display_host = for_display(hostname)
    try:
        wanted_host = for_comparison(display_host)
    except HostnameFormatError as e:
        raise HostnameFormatError(f"failed to convert hostname: {e}") from e
    logging.debug(f"Hostname {hostname!r} displays as {display_host!r}, compares as {wanted_host!r}")

    if token is None:
        return {}
    return {wanted_host: token}
