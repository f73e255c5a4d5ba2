"""
Command-Line Interface (CLI) for xorscope
Reads and decodes ciphertext, runs the engine and prints or exports results
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .core.analysis_presets import PresetLibrary
from .core.config import AnalysisConfig
from .core.engine import AnalysisReport, XorscopeEngine
from .core.errors import XorscopeError
from .utils.encoding import ENCODINGS, decode_input, decode_lines
from .utils.report_generator import ReportGenerator

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Set up Rich logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def positive_int(value: str) -> int:
    """argparse type for key lengths and block sizes"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one sub-command per analysis"""
    parser = argparse.ArgumentParser(
        prog='xorscope',
        description='xorscope - statistical cryptanalysis of XOR ciphers and ECB mode',
        epilog='For education and authorized security testing only. MIT License.'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'xorscope v{__version__}'
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        'input',
        type=str,
        help="Input file holding the ciphertext ('-' reads stdin)"
    )
    common.add_argument(
        '--encoding',
        choices=ENCODINGS,
        default='hex',
        help='How the input is encoded (default: hex)'
    )
    common.add_argument(
        '--lines',
        action='store_true',
        help='Treat every line as a separate ciphertext (raw input splits on \\n only)'
    )
    common.add_argument(
        '--config',
        type=str,
        metavar='FILE',
        help='YAML analysis configuration'
    )
    common.add_argument(
        '--preset',
        choices=PresetLibrary.list_presets(),
        help='Named analysis preset (ignored when --config is given)'
    )
    output = common.add_mutually_exclusive_group()
    output.add_argument('--json', action='store_true', help='Print results as JSON')
    output.add_argument('--yaml', action='store_true', help='Print results as YAML')
    common.add_argument(
        '--report',
        type=str,
        metavar='FILE',
        help='Write a Markdown report to FILE'
    )
    common.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    common.add_argument('--debug', action='store_true', help='Print tracebacks on errors')

    # Options for commands that score plaintext
    scoring = argparse.ArgumentParser(add_help=False)
    scoring.add_argument(
        '--corpus',
        type=str,
        metavar='FILE',
        help='Reference text for the frequency table (default: bundled English sample)'
    )

    commands = parser.add_subparsers(dest='command', required=True, metavar='COMMAND')

    commands.add_parser(
        'single', parents=[common, scoring],
        help='Break single-byte XOR (with --lines: find the XORed line)'
    )

    commands.add_parser(
        'keylength', parents=[common],
        help='Rank repeating-key XOR key lengths'
    )

    repeating = commands.add_parser(
        'repeating', parents=[common, scoring],
        help='Break repeating-key XOR'
    )
    repeating.add_argument(
        '--key-length',
        type=positive_int,
        metavar='N',
        help='Known key length (skips estimation)'
    )

    ecb = commands.add_parser(
        'detect-ecb', parents=[common],
        help='Detect ECB mode from repeated blocks'
    )
    ecb.add_argument(
        '--block-size',
        type=positive_int,
        metavar='N',
        help='Cipher block size in bytes (default: from config, 16)'
    )

    decrypt = commands.add_parser(
        'decrypt-ecb', parents=[common],
        help='Decrypt AES-ECB ciphertext with a known key'
    )
    key_group = decrypt.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key', type=str, help='AES key as text')
    key_group.add_argument('--key-hex', type=str, help='AES key as hex')

    return parser


def load_config(args) -> AnalysisConfig:
    """Resolve the analysis config from --config, --preset and per-command flags"""
    if args.config:
        config = AnalysisConfig.from_yaml(args.config)
    elif args.preset:
        config = AnalysisConfig.from_preset(args.preset)
    else:
        config = AnalysisConfig()

    block_size = getattr(args, 'block_size', None)
    if block_size is not None:
        config = dataclasses.replace(config, block_size=block_size)
    return config


def read_ciphertexts(args) -> List[bytes]:
    """Read the input and decode it into one or more ciphertexts"""
    if args.input == '-':
        raw = sys.stdin.buffer.read()
    else:
        input_path = Path(args.input)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {args.input}")
        raw = input_path.read_bytes()

    if args.lines:
        return decode_lines(raw, args.encoding)
    return [decode_input(raw, args.encoding)]


def run(args) -> AnalysisReport:
    """Execute the selected command and collect its results"""
    config = load_config(args)
    ciphertexts = read_ciphertexts(args)
    report = AnalysisReport(mode=args.command, source=args.input)

    if args.command in ('single', 'repeating'):
        engine = XorscopeEngine.from_corpus(args.corpus, config)
    else:
        # Structural analyses never score plaintext
        engine = XorscopeEngine(table=None, config=config)

    if args.command == 'single':
        if args.lines:
            report.batch_single_byte = engine.find_single_byte_ciphertext(ciphertexts)
        else:
            report.single_byte = engine.break_single_byte(ciphertexts[0])

    elif args.command == 'keylength':
        report.key_lengths = engine.rank_key_lengths(b''.join(ciphertexts))

    elif args.command == 'repeating':
        result = engine.break_repeating_key(b''.join(ciphertexts), key_length=args.key_length)
        report.repeating_key = result
        report.key_lengths = result.key_length_candidates

    elif args.command == 'detect-ecb':
        report.ecb_scans = engine.scan_ecb(ciphertexts)

    elif args.command == 'decrypt-ecb':
        key = decode_input(args.key_hex, 'hex') if args.key_hex else args.key.encode('utf-8')
        report.decrypted = engine.decrypt_aes_ecb(b''.join(ciphertexts), key)

    return report


def print_report(report: AnalysisReport):
    """Print a short human-readable summary"""
    if report.batch_single_byte:
        batch = report.batch_single_byte
        print(f"[+] Line #{batch.index} of {batch.candidates} is single-byte XOR "
              f"(key 0x{batch.result.key:02x}, score {batch.result.score:.4f})")
        print(batch.result.plaintext.decode('utf-8', errors='replace'))

    if report.single_byte:
        best = report.single_byte[0]
        print(f"[+] Key: 0x{best.key:02x} (score {best.score:.4f})")
        print(best.plaintext.decode('utf-8', errors='replace'))
        for result in report.single_byte[1:]:
            print(f"    runner-up 0x{result.key:02x} (score {result.score:.4f})")

    if report.key_lengths and not report.repeating_key:
        print("[+] Key length ranking:")
        for candidate in report.key_lengths:
            print(f"    {candidate.key_length:>3}  {candidate.distance:.4f}")

    if report.repeating_key:
        result = report.repeating_key
        print(f"[+] Key length: {result.key_length}")
        print(f"[+] Key: {result.key!r}")
        print(result.plaintext.decode('utf-8', errors='replace'))

    if report.ecb_scans:
        flagged = [scan for scan in report.ecb_scans if scan.is_ecb]
        for scan in flagged:
            print(f"[+] Ciphertext #{scan.index} is ECB encrypted "
                  f"({scan.duplicate_blocks} repeated block(s))")
        if not flagged:
            print("[-] No repeated blocks found")

    if report.decrypted is not None:
        print(report.decrypted.decode('utf-8', errors='replace'))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point

    Returns:
        Process exit status (0 success, 1 analysis or input error, 130 interrupted)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        report = run(args)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        elif args.yaml:
            print(yaml.safe_dump(report.to_dict(), sort_keys=False, allow_unicode=True), end='')
        else:
            print_report(report)

        if args.report:
            markdown = ReportGenerator().generate_markdown(report, Path(args.input).name)
            with open(args.report, 'w', encoding='utf-8') as f:
                f.write(markdown)
            print(f"[+] Markdown report: {args.report}", file=sys.stderr)

        return 0

    except KeyboardInterrupt:
        print("\n[!] Analysis interrupted by user", file=sys.stderr)
        return 130

    except (XorscopeError, OSError) as e:
        print(f"[!] Error: {e}", file=sys.stderr)
        if args.debug:
            logger.exception("Analysis failed")
        return 1


if __name__ == '__main__':
    sys.exit(main())
