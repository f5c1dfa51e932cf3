"""Command-line interface for uniconv."""

from __future__ import annotations

import argparse
import io
import logging
import sys

import uniconv
from uniconv._utils import DEFAULT_SNIFF_BYTES
from uniconv.enums import DetectedEncoding
from uniconv.errors import UniconvError
from uniconv.linereader import LineReader
from uniconv.pipeline.candidates import (
    CandidateDetector,
    CharsetNormalizerDetector,
)
from uniconv.pipeline.orchestrator import resolve_encoding
from uniconv.transcoder import transcode


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be a positive integer: {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _hex_dump(data: bytes) -> str:
    return " ".join(f"{byte:#04x}" for byte in data)


def _report(
    name: str, data: bytes, encoding: DetectedEncoding, args: argparse.Namespace
) -> None:
    if args.dump:
        print("bytes before convert:")
        print(_hex_dump(data))
        print("Converted to following UTF-16 code units:")
        for unit in transcode(data, encoding, args.legacy_codec):
            print(f"U+{unit:04x}")
    elif args.lines:
        with LineReader(
            io.BytesIO(data), encoding, legacy_codec=args.legacy_codec
        ) as reader:
            for line in reader:
                print(line)
    elif args.minimal:
        print(encoding)
    else:
        print(f"{name}: {encoding}")


def _process_file(
    filepath: str, args: argparse.Namespace, detector: CandidateDetector | None
) -> None:
    data = uniconv.read_bytes(filepath)
    encoding = resolve_encoding(data, detector, max_bytes=args.max_bytes)
    _report(filepath, data, encoding, args)


def main(argv: list[str] | None = None) -> int:
    """Run the ``uniconv`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: Process exit status; 1 if any input failed.
    """
    parser = argparse.ArgumentParser(
        description="Detect the encoding of text files and transcode them."
    )
    parser.add_argument("files", nargs="*", help="Files to examine")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    mode.add_argument(
        "--dump",
        action="store_true",
        help="Hex-dump the raw bytes and print the UTF-16 code units",
    )
    mode.add_argument(
        "--lines", action="store_true", help="Print the decoded lines"
    )
    parser.add_argument(
        "--max-bytes",
        type=_positive_int,
        default=DEFAULT_SNIFF_BYTES,
        help="Number of leading bytes examined (default: %(default)s)",
    )
    parser.add_argument(
        "--legacy-codec",
        default=None,
        help="Codec for data that is not Unicode (default: locale encoding)",
    )
    parser.add_argument(
        "--use-detector",
        action="store_true",
        help="Consult charset_normalizer before the UTF-8 validity check",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--version", action="version", version=f"uniconv {uniconv.__version__}"
    )

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    detector = CharsetNormalizerDetector() if args.use_detector else None

    status = 0
    if args.files:
        for filepath in args.files:
            try:
                _process_file(filepath, args, detector)
            except (OSError, UniconvError, LookupError) as e:
                print(f"uniconv: {filepath}: {e}", file=sys.stderr)
                status = 1
    else:
        data = sys.stdin.buffer.read()
        try:
            encoding = resolve_encoding(data, detector, max_bytes=args.max_bytes)
            _report("stdin", data, encoding, args)
        except (UniconvError, LookupError) as e:
            print(f"uniconv: stdin: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
