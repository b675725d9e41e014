# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from peerhub.adapters.bundle import BundleFormatError, bundle_filename, dump_bundle
from peerhub.app import add_peer, create_group, export_peers, import_peers, list_groups, list_peers
from peerhub.config import configure_logging
from peerhub.domain.model import PeerStatus
from peerhub.domain.transfer import ImportOutcome, SnapshotError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from peerhub.domain.transfer import ImportReport

log = logging.getLogger(__name__)

STDIO_PATH: Final[str] = "-"

EXIT_OK: Final[int] = 0
EXIT_FATAL: Final[int] = 1
EXIT_INVALID_INPUT: Final[int] = 2
EXIT_RECORDS_FAILED: Final[int] = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage a WireGuard peer inventory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every record")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export all peers to a JSON bundle")
    export.add_argument(
        "--output",
        type=str,
        help="Target file, '-' for stdout (default: wireguard-peers-YYYY-MM-DD.json)",
    )

    import_ = subparsers.add_parser("import", help="Import peers from a JSON bundle")
    import_.add_argument("path", type=str, help="Bundle file to import, '-' for stdin")

    peer = subparsers.add_parser("peer", help="Manage single peers")
    peer_sub = peer.add_subparsers(dest="peer_command", required=True)
    peer_add = peer_sub.add_parser("add", help="Add one peer")
    peer_add.add_argument("name", type=str)
    peer_add.add_argument("--public-key", type=str, help="Generated when omitted")
    peer_add.add_argument("--private-key", type=str)
    peer_add.add_argument("--allowed-ips", type=str)
    peer_add.add_argument("--dns", type=str)
    peer_add.add_argument("--keepalive", type=int, help="Persistent keepalive in seconds")
    peer_add.add_argument("--group", type=str, help="Name of an existing group")
    peer_add.add_argument(
        "--status",
        type=PeerStatus,
        choices=list(PeerStatus),
        default=PeerStatus.DISCONNECTED,
    )
    peer_sub.add_parser("list", help="List all peers")

    group = subparsers.add_parser("group", help="Manage peer groups")
    group_sub = group.add_subparsers(dest="group_command", required=True)
    group_create = group_sub.add_parser("create", help="Create a group")
    group_create.add_argument("name", type=str)
    group_create.add_argument("--color", type=str, help="Hex colour (default: #3b82f6)")
    group_create.add_argument("--description", type=str)
    group_sub.add_parser("list", help="List all groups")

    return parser.parse_args(list(argv))


def _read_payload(path: str) -> bytes:
    if path == STDIO_PATH:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _run_export(output: str | None) -> int:
    bundle = export_peers()
    text = dump_bundle(bundle)
    if output == STDIO_PATH:
        print(text)
        return EXIT_OK
    target = Path(output or bundle_filename(bundle.exported_at))
    target.write_text(text + "\n", encoding="utf-8")
    log.info("Exported %s peers to %s", bundle.peers_count, target)
    return EXIT_OK


def _print_report(report: ImportReport) -> None:
    for result in report.results:
        if result.success:
            print(f"imported  {result.name}")
        else:
            print(f"failed    {result.name}: {result.error}")


def _import_exit_code(report: ImportReport) -> int:
    outcome = report.outcome
    if outcome is ImportOutcome.EMPTY:
        log.info("No peers to import")
        return EXIT_OK
    if outcome is ImportOutcome.NOTHING_IMPORTED:
        log.error("Import failed: no peers were imported")
        return EXIT_RECORDS_FAILED
    log.info("Successfully imported %s peer(s)", report.success_count)
    if outcome is ImportOutcome.PARTIAL:
        log.warning("Failed to import %s peer(s)", report.fail_count)
        return EXIT_RECORDS_FAILED
    return EXIT_OK


def _run_import(path: str) -> int:
    try:
        report = import_peers(_read_payload(path))
    except BundleFormatError as exc:
        log.error("Invalid import file: %s", exc)  # noqa: TRY400
        return EXIT_INVALID_INPUT
    except SnapshotError:
        log.exception("Import failed: could not read the current inventory")
        return EXIT_FATAL
    _print_report(report)
    return _import_exit_code(report)


def _run_peer(args: argparse.Namespace) -> int:
    if args.peer_command == "add":
        peer = add_peer(
            args.name,
            public_key=args.public_key,
            private_key=args.private_key,
            allowed_ips=args.allowed_ips,
            dns=args.dns,
            persistent_keepalive=args.keepalive,
            group_name=args.group,
            status=args.status,
        )
        print(f"{peer.name}  {peer.public_key}")
        return EXIT_OK

    group_names = {group.id: group.name for group in list_groups()}
    for peer in list_peers():
        group_name = group_names.get(peer.group_id, "-")
        print(
            f"{peer.name}  {peer.public_key}  {peer.allowed_ips}  {group_name}  {peer.status}"
        )
    return EXIT_OK


def _run_group(args: argparse.Namespace) -> int:
    if args.group_command == "create":
        group = create_group(args.name, color=args.color, description=args.description)
        print(f"{group.name}  {group.color}")
        return EXIT_OK

    for group in list_groups():
        print(f"{group.name}  {group.color}  {group.description or ''}".rstrip())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "export":
            exit_code = _run_export(parsed_args.output)
        elif parsed_args.command == "import":
            exit_code = _run_import(parsed_args.path)
        elif parsed_args.command == "peer":
            exit_code = _run_peer(parsed_args)
        elif parsed_args.command == "group":
            exit_code = _run_group(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error")
        sys.exit(EXIT_FATAL)

    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C); peers stored so far are kept")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
