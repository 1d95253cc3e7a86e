#!/usr/bin/env python3
"""
SDR FEC Module - Command Line Interface

Encode messages into BCH codewords, correct and decode received
codewords, and build POCSAG transmissions.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .core.config import FECConfig, LoggingConfig, get_preset, list_presets
from .fec.bch import BCHCode, CorrectionStatus

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNCORRECTABLE = 2


def _parse_int(value: str) -> int:
    """Integer with optional 0b/0o/0x prefix."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None


def _load_config(args: argparse.Namespace) -> Optional[FECConfig]:
    if args.config:
        config = FECConfig.load(args.config)
        if config is None:
            print(f"Error: could not load configuration from {args.config}")
        return config

    code = get_preset(args.preset)
    if code is None:
        print(f"Unknown preset: {args.preset}")
        print(f"Available: {', '.join(list_presets())}")
        return None
    return FECConfig(code=code)


def _build_code(args: argparse.Namespace) -> Optional[BCHCode]:
    config = _load_config(args)
    if config is None:
        return None

    if args.log_level:
        config.logging.level = args.log_level.upper()
    config.logging.apply()

    if args.encoding:
        config.code.encoding = args.encoding
    return BCHCode(config.code.to_bch_config())


def _format_word(value: int, width: int) -> str:
    return f"0b{value:0{width}b} ({value:#x})"


def cmd_info(args: argparse.Namespace) -> int:
    """Display module information."""
    print(f"SDR FEC Module v{__version__}")
    print()
    print("Forward Error Correction for Digital Radio")
    print("==========================================")
    print()
    print("Preset codes:")
    for name in list_presets():
        code = get_preset(name)
        print(
            f"  - {name}: BCH({code.n},{code.k}) t={code.t} "
            f"generator={code.generator:#x} encoding={code.encoding}"
        )
    return EXIT_OK


def cmd_encode(args: argparse.Namespace) -> int:
    """Encode a message into a codeword."""
    code = _build_code(args)
    if code is None:
        return EXIT_ERROR

    codeword = code.encode_message(args.message)
    print(_format_word(codeword, code.n))
    return EXIT_OK


def cmd_correct(args: argparse.Namespace) -> int:
    """Correct a received codeword."""
    code = _build_code(args)
    if code is None:
        return EXIT_ERROR

    result = code.correct(args.codeword)
    print(f"Status: {result.status.value}")
    if result.status is CorrectionStatus.CORRECTED:
        print(f"Flipped bits: {', '.join(str(p) for p in result.error_positions)}")
    print(_format_word(result.codeword, code.n))
    return EXIT_OK if result.ok else EXIT_UNCORRECTABLE


def cmd_decode(args: argparse.Namespace) -> int:
    """Correct a received codeword and extract its message."""
    code = _build_code(args)
    if code is None:
        return EXIT_ERROR

    result = code.decode(args.codeword)
    print(f"Status: {result.status.value} ({result.error_count} error(s))")
    if result.message is None:
        print("Codeword is uncorrectable")
        return EXIT_UNCORRECTABLE

    print(_format_word(result.message, code.k))
    return EXIT_OK


def cmd_pocsag_encode(args: argparse.Namespace) -> int:
    """Build a POCSAG transmission for one page."""
    from .protocols.pocsag import POCSAGEncoder, POCSAGPage

    LoggingConfig(level=args.log_level or "WARNING").apply()

    page = POCSAGPage(
        address=args.address,
        function=args.function,
        content=args.text or "",
        message_type="numeric" if args.numeric else ("alpha" if args.text else "tone"),
    )
    encoder = POCSAGEncoder()
    words = encoder.encode_words([page])

    print(f"Encoded page for address {page.address} ({page.message_type})")
    print(f"{len(words)} words:")
    for word in words:
        print(f"  {word:08X}")

    if args.output:
        output_path = Path(args.output).expanduser().resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.exists():
            print(f"Warning: Overwriting existing file: {output_path}")
        encoder.encode_bits([page]).tofile(output_path)
        print(f"Saved bits to: {output_path}")

    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="sdr-fec",
        description="SDR FEC Module - BCH encoding and error correction",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--preset",
        default="pocsag",
        help="Code preset (default: pocsag)",
    )
    common.add_argument("--config", "-c", type=str, help="JSON configuration file")
    common.add_argument(
        "--encoding",
        choices=["prefix", "factor"],
        help="Override encoding (prefix = systematic, factor = non-systematic)",
    )
    common.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: from configuration)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser("info", help="Display module information")
    info_parser.set_defaults(func=cmd_info)

    encode_parser = subparsers.add_parser(
        "encode", parents=[common], help="Encode a message into a codeword"
    )
    encode_parser.add_argument("message", type=_parse_int, help="Message value")
    encode_parser.set_defaults(func=cmd_encode)

    correct_parser = subparsers.add_parser(
        "correct", parents=[common], help="Correct a received codeword"
    )
    correct_parser.add_argument("codeword", type=_parse_int, help="Received codeword")
    correct_parser.set_defaults(func=cmd_correct)

    decode_parser = subparsers.add_parser(
        "decode", parents=[common], help="Correct a codeword and extract its message"
    )
    decode_parser.add_argument("codeword", type=_parse_int, help="Received codeword")
    decode_parser.set_defaults(func=cmd_decode)

    pocsag_parser = subparsers.add_parser(
        "pocsag-encode", help="Build a POCSAG transmission"
    )
    pocsag_parser.add_argument(
        "--address", "-a", type=_parse_int, required=True, help="21-bit pager address"
    )
    pocsag_parser.add_argument(
        "--function", "-f", type=int, default=3, help="Function bits 0-3 (default: 3)"
    )
    pocsag_parser.add_argument("--text", "-t", type=str, help="Page content")
    pocsag_parser.add_argument(
        "--numeric", action="store_true", help="Send content as a numeric page"
    )
    pocsag_parser.add_argument(
        "--output", "-o", type=str, help="Output file for the bit stream (uint8)"
    )
    pocsag_parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )
    pocsag_parser.set_defaults(func=cmd_pocsag_encode)

    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # No command specified - show info
        return cmd_info(args)

    try:
        return args.func(args)
    except ValueError as e:  # BCHError and argument range errors
        print(f"Error: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
