## Terraform credentials helper that reads host tokens from HashiCorp Vault
##
## Terraform runs this as `terraform-credentials-vault get <hostname>` and
## expects {"token": "..."} on stdout, or {} when there is nothing stored.

import sys
import json
import logging
import argparse

from tfvault import version_string
from tfvault.config import read_base_path, read_log_level, read_vault_config
from tfvault.errors import CredentialsHelperError, UsageError
from tfvault.hcp import fetch_token
from tfvault.svchost import generate_token_map

USAGE = (
    "Usage: terraform-credentials-vault --vault-path <base secrets kv path> get <hostname>\n"
    "\nThis is a Terraform credentials helper, not intended to be run directly from a shell.\n"
)


class HelperArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def usage_and_exit(message=None):
    if message:
        logging.error(message)
    # Usage text goes out verbatim, without the log record prefix
    sys.stderr.write(USAGE)
    sys.exit(1)


def log_and_exit(message):
    logging.error(message)
    sys.exit(1)


def build_parser():
    parser = HelperArgumentParser(prog='terraform-credentials-vault', add_help=False)
    parser.add_argument('--vault-path', default=read_base_path(), help="base kv2 path to search")
    parser.add_argument('--version', action='version', version=version_string())
    parser.add_argument('values', nargs='*')
    return parser


def parse_args(argv):
    try:
        args = build_parser().parse_args(argv)
    except UsageError as e:
        usage_and_exit(str(e))

    if not args.vault_path:
        usage_and_exit("--vault-path or TF_TOKEN_VAULT_PATH not set.")
    if len(args.values) < 2:
        usage_and_exit()
    return args


def write_result(result):
    sys.stdout.write(json.dumps(result, separators=(',', ':'), ensure_ascii=False))
    sys.stdout.write("\n")


def get_credentials(vault_path, hostname):
    # Terraform sends the hostname already in its "for comparison" form; a
    # caller that doesn't will simply not match below.
    config = read_vault_config()
    token = fetch_token(config, vault_path, hostname)
    creds = generate_token_map(hostname, token)

    if hostname not in creds:
        # No stored credentials for a host is not an error
        return {}
    return {"token": creds[hostname]}


def main(argv=None):
    logging.basicConfig(level=read_log_level(), format='%(asctime)s [%(levelname)s] - %(message)s')

    args = parse_args(sys.argv[1:] if argv is None else argv)
    verb, hostname = args.values[0], args.values[1]

    if verb != 'get':
        log_and_exit(f"The 'vault' credentials helper is not able to {verb} credentials.")

    try:
        result = get_credentials(args.vault_path, hostname)
    except CredentialsHelperError as e:
        log_and_exit(f"Unable to get credentials for {hostname}: {e}")

    write_result(result)
    sys.exit(0)


if __name__ == '__main__':
    main()
