# caesarfile/cli.py
"""
caesarfile — encrypt/decrypt any file with a byte-wise Caesar shift.
Usage:
  caesarfile --encrypt document.txt encrypted.bin 42
  caesarfile --decrypt encrypted.bin decrypted.txt 42
Exit status is 0 on success and 1 on any usage or processing error.
"""
import argparse, logging, os, re, sys
from typing import Iterable, Optional
from caesarfile.algo.caesar import Direction, normalize_key
from caesarfile.algo.errors import CipherError
from caesarfile.algo.stream import process_file
from caesarfile.utils import settings

logger = logging.getLogger(__name__)

PROG = "caesarfile"
KEY_RE = re.compile(r"-?[0-9]+")
MODES = ("-e", "--encrypt", "-d", "--decrypt", "-h", "--help")

EPILOG = f"""\
examples:
  # Encrypt a file with key 42
  {PROG} --encrypt document.txt encrypted.bin 42

  # Decrypt the encrypted file
  {PROG} --decrypt encrypted.bin decrypted.txt 42

notes:
  - The same key must be used for both encryption and decryption
  - Input and output files can be text or binary files
  - Every byte is shifted by the key modulo 256
  - Key values outside 0-255 (negative ones too) are normalized automatically
"""

class _Parser(argparse.ArgumentParser):
    # usage errors exit with 1, not argparse's usual 2
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")

def _int_key(raw: str) -> int:
    if not KEY_RE.fullmatch(raw):
        raise argparse.ArgumentTypeError(f"invalid key '{raw}', key must be a valid integer")
    return int(raw)

def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog=PROG,
        allow_abbrev=False,
        description="A simple Caesar cipher-based file encryption/decryption tool.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    g = parser.add_mutually_exclusive_group(required=True)
    g.add_argument("-e", "--encrypt", action="store_true", help="Encrypt the input file")
    g.add_argument("-d", "--decrypt", action="store_true", help="Decrypt the input file")
    parser.add_argument("input", help="Path to the input file to process")
    parser.add_argument("output", help="Path to the output file to create")
    parser.add_argument("key", type=_int_key, help="Integer key for encryption/decryption (0-255)")
    return parser

def _same_file(a: str, b: str) -> bool:
    if a == b:
        return True
    if os.path.exists(a) and os.path.exists(b):
        return os.path.samefile(a, b)
    return False

def validate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.input == "":
        parser.error("input filename cannot be empty")
    if args.output == "":
        parser.error("output filename cannot be empty")
    if _same_file(args.input, args.output):
        parser.error("input and output files cannot be the same")

def _setup_logging() -> None:
    level = getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def main(argv: Optional[Iterable[str]] = None) -> int:
    _setup_logging()
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    # the mode always comes first: <mode> <input> <output> <key>
    if argv and argv[0] not in MODES:
        parser.error(f"invalid mode '{argv[0]}' (valid modes: {', '.join(MODES)})")
    if any(a in MODES for a in argv[1:]):
        parser.error("the mode must be given once, as the first argument")
    args = parser.parse_args(argv)
    validate(parser, args)

    direction = Direction.DECRYPT if args.decrypt else Direction.ENCRYPT
    print(f"Mode: {'Decryption' if args.decrypt else 'Encryption'}")
    print(f"Input file: {args.input}")
    print(f"Output file: {args.output}")
    print(f"Key: {args.key} (normalized {normalize_key(args.key)})\n")

    try:
        processed = process_file(args.input, args.output, args.key, direction)
    except CipherError as e:
        logger.debug("processing aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        print("\nOperation failed.", file=sys.stderr)
        return 1

    print(f"Processed {processed} bytes.")
    print("\nOperation completed successfully!")
    return 0

def run() -> None:
    raise SystemExit(main())

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
