"""
Decode a protobuf binary from the command line.

Usage:
    protodecode message.bin
    protodecode message.bin --proto schema.proto --message Person
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .assembler import decode_message
from .errors import ProtoDecodeError
from .parser import parse_schema
from .wire import as_json

logger = logging.getLogger(__name__)


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="protodecode",
        description="Decode protobuf wire-format data, optionally against a .proto schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    protodecode message.bin
    protodecode message.bin --proto schema.proto --message Person
""",
    )
    parser.add_argument("binary", help="Path to the encoded message")
    parser.add_argument("--proto", metavar="FILE", help="Schema file describing the message")
    parser.add_argument("--message", metavar="NAME", help="Message name to decode as")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: WARNING)")
    return parser


def run(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )

    if (args.proto is None) != (args.message is None):
        parser.error("--proto and --message must be given together")

    binary_path = Path(args.binary)
    proto_path = None if args.proto is None else Path(args.proto)
    for path in (binary_path, proto_path):
        if path is not None and not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 1

    try:
        data = binary_path.read_bytes()
        proto_text = None if proto_path is None else proto_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.info("Read %d bytes from %s", len(data), binary_path)

    try:
        if proto_text is None:
            result = as_json(decode_message(data))
        else:
            schema = parse_schema(proto_text)
            result = decode_message(data, schema, args.message)
    except ProtoDecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
