"""
Command-line interface for the OCI Storage SDK
Provides API key generation, fingerprinting, connection checks and temporary URLs
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import load_connection_from_env, load_connection_from_file
from .crypto.rsa_keys import (
    DEFAULT_KEY_SIZE,
    compute_fingerprint,
    generate_rsa_key_pair,
    load_private_key,
    public_key_from_private,
)
from .exceptions import ConfigurationError, OciStorageSDKError, ServerCommunicationError
from .storage import create_client

PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='oci-storage',
        description='OCI Object Storage SDK command-line interface'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'OCI Storage Python SDK {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_keygen_parser(subparsers)
    setup_fingerprint_parser(subparsers)
    setup_validate_parser(subparsers)
    setup_presign_parser(subparsers)

    return parser


def _add_connection_arguments(parser):
    parser.add_argument('--config', help='JSON connection file (default: OCI_* environment variables)')
    parser.add_argument('--connection', help='Connection name inside the configuration file')


def setup_keygen_parser(subparsers):
    """Setup key generation subcommand."""
    keygen_parser = subparsers.add_parser('keygen', help='Generate an RSA API key pair')
    keygen_parser.add_argument(
        '--output-dir',
        default='.',
        help='Directory for the key files (default: current directory)'
    )
    keygen_parser.add_argument(
        '--name',
        default='oci_api_key',
        help='Base file name; writes <name>.pem and <name>_public.pem (default: oci_api_key)'
    )
    keygen_parser.add_argument(
        '--key-size',
        type=int,
        default=DEFAULT_KEY_SIZE,
        help=f'RSA key size in bits (default: {DEFAULT_KEY_SIZE})'
    )
    keygen_parser.add_argument(
        '--passphrase',
        help='Encrypt the private key with this passphrase'
    )
    keygen_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite existing key files'
    )


def setup_fingerprint_parser(subparsers):
    """Setup fingerprint subcommand."""
    fingerprint_parser = subparsers.add_parser('fingerprint', help='Print the API key fingerprint of a private key')
    fingerprint_parser.add_argument('key_path', help='Path to the PEM private key')
    fingerprint_parser.add_argument('--passphrase', help='Passphrase of an encrypted key')


def setup_validate_parser(subparsers):
    """Setup configuration validation subcommand."""
    validate_parser = subparsers.add_parser('validate', help='Validate connection configuration and key material')
    _add_connection_arguments(validate_parser)
    validate_parser.add_argument(
        '--test-connection',
        action='store_true',
        help='Also list the bucket to check credentials against the service'
    )


def setup_presign_parser(subparsers):
    """Setup temporary URL subcommand."""
    presign_parser = subparsers.add_parser('presign', help='Print a temporary URL for an object')
    _add_connection_arguments(presign_parser)
    presign_parser.add_argument('path', help='Object path')
    presign_parser.add_argument(
        '--expires-in',
        type=int,
        help='Lifetime in seconds (default: configured default expiry)'
    )


def _write_key_file(path: Path, content: bytes, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, 'wb') as f:
        f.write(content)
    os.chmod(path, mode)


def _load_settings(args):
    if args.config:
        return load_connection_from_file(args.config, args.connection)
    return load_connection_from_env()


def handle_keygen_command(args) -> int:
    """Handle key generation command."""
    if args.key_size < 2048:
        print("Error: Key size must be at least 2048 bits", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir).expanduser()
    private_path = output_dir / f"{args.name}.pem"
    public_path = output_dir / f"{args.name}_public.pem"

    if not args.force:
        existing = [str(p) for p in (private_path, public_path) if p.exists()]
        if existing:
            print(f"Error: Key file already exists: {', '.join(existing)} (use --force)", file=sys.stderr)
            return 1

    passphrase = args.passphrase.encode('utf-8') if args.passphrase else None
    private_pem, public_pem = generate_rsa_key_pair(args.key_size, passphrase)

    output_dir.mkdir(parents=True, exist_ok=True)
    _write_key_file(private_path, private_pem, PRIVATE_KEY_MODE)
    _write_key_file(public_path, public_pem, PUBLIC_KEY_MODE)

    print(f"✓ Private key written to {private_path}")
    print(f"✓ Public key written to {public_path}")
    print(f"Fingerprint: {compute_fingerprint(public_pem)}")
    print("Upload the public key to your OCI user's API keys to activate it.")
    return 0


def handle_fingerprint_command(args) -> int:
    """Handle fingerprint command."""
    try:
        pem = Path(args.key_path).expanduser().read_bytes()
    except OSError as e:
        print(f"Error reading key file: {e}", file=sys.stderr)
        return 1

    passphrase = args.passphrase.encode('utf-8') if args.passphrase else None
    private_key = load_private_key(pem, passphrase)
    print(compute_fingerprint(public_key_from_private(private_key)))
    return 0


def handle_validate_command(args) -> int:
    """Handle configuration validation command."""
    settings = _load_settings(args)

    settings.identity.key_provider.validate()
    private_key = settings.identity.key_provider.resolve().load_private_key()
    actual = compute_fingerprint(public_key_from_private(private_key))

    print("✓ Configuration is valid")
    print(json.dumps(settings.config.summary(), indent=2))

    if actual.lower() != settings.identity.fingerprint.lower():
        print(
            f"✗ Fingerprint mismatch: configured {settings.identity.fingerprint}, key has {actual}",
            file=sys.stderr
        )
        return 1
    print(f"✓ Key fingerprint matches: {actual}")

    if args.test_connection:
        with create_client(settings) as client:
            if not client.test_connection():
                print("✗ Connection test failed", file=sys.stderr)
                return 1
        print("✓ Connection test succeeded")

    return 0


def handle_presign_command(args) -> int:
    """Handle temporary URL command."""
    settings = _load_settings(args)
    with create_client(settings) as client:
        temporary_url = client.create_temporary_url(args.path, expires_in=args.expires_in)

    print(temporary_url.url)
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    handlers = {
        'keygen': handle_keygen_command,
        'fingerprint': handle_fingerprint_command,
        'validate': handle_validate_command,
        'presign': handle_presign_command,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except ServerCommunicationError as e:
        print(f"Server communication error: {e}", file=sys.stderr)
        return 1
    except OciStorageSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
