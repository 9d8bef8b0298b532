"""Command-line client for creating dynamic namespaces on the Platform API.

This module serves as a CLI wrapper around dynns.core services.
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dynns import __version__
from dynns.config.settings import load_oauth_credentials, load_settings
from dynns.core import vault
from dynns.core.exceptions import NamespaceClientError
from dynns.core.metadata import NAME_FROM_MANIFEST, merge
from dynns.core.payload import assemble
from dynns.core.platform import PlatformClient, create_namespace
from dynns.core.sources import load_extra_properties, load_manifest
from dynns.core.validators import DEFAULT_TTL, validate_ttl

LOG_LEVEL_ENV_VAR = "DYNNS_LOG_LEVEL"

logger = logging.getLogger("dynns")


def _ttl(value: str) -> str:
    try:
        return validate_ttl(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dynns", description="Platform API Namespace Client")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="increase log output (-v info, -vv debug)")

    sub = parser.add_subparsers(dest="cmd")

    cr = sub.add_parser("create", help="Create Dynamic Namespace")
    cr.add_argument("productkey", help="product key, prepended to namespace name")
    cr.add_argument("name", help=f"namespace name, appended as suffix to product key "
                                 f"('{NAME_FROM_MANIFEST}' reads it from the manifest)")
    cr.add_argument("--ttl", type=_ttl, default=DEFAULT_TTL,
                    help="ttl for namespace. valid values are 1-24h or 1-7d")
    cr.add_argument("-s", "--strip-prefix", action="store_true",
                    help="strip prefix from namespace name if it is already prepended")
    cr.add_argument("-l", "--labels", action="append", default=[],
                    help="label as key=value, or a block of 'key: value' lines (repeatable)")
    cr.add_argument("-a", "--annotation", dest="annotations", action="append", default=[],
                    help="annotation as key=value (repeatable)")
    cr.add_argument("--metadata-from-manifest", dest="manifest",
                    help="read name, labels and annotations from a manifest's metadata. "
                         "value prefixed with '@' is treated as a filename.")
    svc = cr.add_mutually_exclusive_group()
    svc.add_argument("--vault-service-account", dest="svcac", action="append", default=[],
                     help="add an additional service account for vault access")
    svc.add_argument("--vault-service-account-raw", dest="svcac_raw",
                     help="service accounts for vault access. comma-separated raw list of values.")
    cr.add_argument("--extra-data", dest="extra_data",
                    help="provide extra params to api by reading in yaml/json. "
                         "value prefixed with '@' is treated as a filename.")
    cr.add_argument("-d", "--dry-run", action="store_true",
                    help="print the payload instead of calling the API")
    cr.add_argument("--hostname", help="hostname of API, otherwise read from PLATFORM_API_HOSTNAME env var")
    cr.add_argument("--cluster", help="cluster name, otherwise read from PLATFORM_API_CLUSTER env var")
    cr.add_argument("--tenant", help="tenant info for auth, otherwise read from PLATFORM_API_TENANT env var")
    return parser


def run_create(args: argparse.Namespace) -> None:
    """Parse, merge, assemble and submit a namespace request."""
    manifest = load_manifest(args.manifest) if args.manifest else None
    metadata = merge(
        manifest,
        args.labels,
        args.annotations,
        name=args.name,
        product_key=args.productkey,
        strip_prefix=args.strip_prefix,
    )
    settings = load_settings(args.hostname, args.cluster, args.tenant)
    accounts = vault.build(args.svcac_raw, args.svcac)
    extra = load_extra_properties(args.extra_data)

    request = assemble(
        args.productkey,
        args.ttl,
        settings.cluster,
        metadata.name,
        labels=metadata.labels,
        annotations=metadata.annotations,
        vault_service_accounts=accounts,
        extra_properties=extra,
    )

    if args.dry_run:
        print("Would submit the following payload to the API:")
        print(request.to_json(pretty=True))
        print("Dry-run, not calling API!", file=sys.stderr)
        return

    creds = load_oauth_credentials()
    client = PlatformClient(
        settings.hostname,
        token_url_template=settings.token_url_template,
        timeout=settings.request_timeout,
    )
    client.authenticate(settings.tenant, creds.client_id, creds.client_secret, creds.scope)
    print(create_namespace(client, request))


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.cmd:
        parser.print_help()
        return

    if args.name == NAME_FROM_MANIFEST and not args.manifest:
        parser.error(f"--metadata-from-manifest is required when name is '{NAME_FROM_MANIFEST}'")

    try:
        run_create(args)
    except NamespaceClientError as e:
        logger.debug("%s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
