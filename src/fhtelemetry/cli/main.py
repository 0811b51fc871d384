"""Main CLI entry point for fhtelemetry."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .. import __version__
from ..cli.describe import describe_schema
from ..codec.decoder import TelemetryRecord, decode
from ..exceptions import DecodeError, OutOfBounds
from ..models.packet import FORZA_SCHEMA
from ..transport import ListenerConfig, UdpPacketSource

logger = logging.getLogger(__name__)

DEFAULT_FIELDS = ["current_engine_rpm"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fhtelemetry",
        description="fhtelemetry: Forza Horizon Telemetry Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fhtelemetry --describe                     Show the packet layout
  fhtelemetry --decode packet.bin            Decode a captured packet as JSON
  fhtelemetry --listen --port 9999           Print engine RPM of live packets
  fhtelemetry --listen --field speed --field gear --count 100
        """,
    )

    parser.add_argument(
        "--describe",
        action="store_true",
        help="Show the packet layout (offset, length, type of every field)",
    )
    parser.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode one raw packet file and print it as JSON",
    )
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Receive packets over UDP and print selected fields",
    )
    parser.add_argument(
        "--field",
        metavar="NAME",
        action="append",
        help="Field to print (repeatable; default: all fields for --decode, "
        "current_engine_rpm for --listen)",
    )
    parser.add_argument("--host", default=ListenerConfig.host, help="Address to bind to")
    parser.add_argument("--port", type=int, default=ListenerConfig.port, help="UDP port to bind to")
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=ListenerConfig.buffer_size,
        help="Receive buffer size in bytes",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each packet before giving up",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Stop listening after this many decoded packets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"fhtelemetry {__version__}",
    )
    return parser


def _select(record: TelemetryRecord, fields: Optional[Sequence[str]]) -> dict[str, Any]:
    if not fields:
        return dict(record)
    return {name: record[name] for name in fields}


def _json_safe(value: Any) -> Any:
    # JSON has no NaN/Infinity literals
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def decode_file(file_path: Path, fields: Optional[Sequence[str]]) -> None:
    """Decode a raw packet file and print the selected fields as JSON.

    Raises:
        DecodeError: If the file is too short for the packet layout
    """
    record = decode(file_path.read_bytes(), FORZA_SCHEMA)
    selected = {name: _json_safe(value) for name, value in _select(record, fields).items()}
    print(json.dumps(selected, indent=2))


def listen(config: ListenerConfig, fields: Sequence[str], count: Optional[int] = None) -> int:
    """Receive packets and print the selected fields of each one.

    Truncated packets are logged and skipped.

    Returns:
        Number of packets decoded
    """
    decoded = 0
    with UdpPacketSource(config) as source:
        for datagram in source:
            try:
                record = decode(datagram, FORZA_SCHEMA)
            except OutOfBounds as e:
                logger.warning("Dropping packet: %s", e)
                continue

            print(" ".join(f"{name}={record[name]}" for name in fields))
            decoded += 1
            if count is not None and decoded >= count:
                break

    return decoded


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the fhtelemetry CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    unknown = [name for name in args.field or [] if name not in FORZA_SCHEMA]
    if unknown:
        print(f"Error: Unknown field(s): {', '.join(unknown)}", file=sys.stderr)
        return 1

    if args.describe:
        describe_schema(FORZA_SCHEMA)
        return 0

    if args.decode:
        file_path = Path(args.decode)
        if not file_path.is_file():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            decode_file(file_path, args.field)
            return 0
        except DecodeError as e:
            print(f"Error decoding packet: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"Error reading {file_path}: {e}", file=sys.stderr)
            return 1

    if args.listen:
        if args.count is not None and args.count < 1:
            print(f"Error: --count must be at least 1, got {args.count}", file=sys.stderr)
            return 1

        try:
            config = ListenerConfig(
                host=args.host,
                port=args.port,
                buffer_size=args.buffer_size,
                timeout=args.timeout,
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        try:
            listen(config, args.field or DEFAULT_FIELDS, args.count)
            return 0
        except KeyboardInterrupt:
            return 0
        except OSError as e:
            print(f"Error receiving packets: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
