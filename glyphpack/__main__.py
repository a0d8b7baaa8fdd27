"""
Command entry point.

    python -m glyphpack [INPUT [OUTPUT_DIR]]

Without arguments the configured paths are used.
"""
import logging
import sys

from pydantic import ValidationError

from glyphpack.config import Settings
from glyphpack.errors import GlyphPackError
from glyphpack.pipeline import run


class Colors:
    OKGREEN = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 2:
        print("Usage: glyphpack [INPUT [OUTPUT_DIR]]", file=sys.stderr)
        return 2

    overrides = {}
    if len(argv) > 0:
        overrides["INPUT_PATH"] = argv[0]
    if len(argv) > 1:
        overrides["OUTPUT_DIR"] = argv[1]
    try:
        config = Settings(**overrides)
    except ValidationError as e:
        print(f"{Colors.FAIL}Invalid settings: {e}{Colors.ENDC}", file=sys.stderr)
        return 2

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        document = run(config)
    except GlyphPackError as e:
        print(f"{Colors.FAIL}{type(e).__name__}: {e}{Colors.ENDC}", file=sys.stderr)
        return 1

    print(f"{Colors.OKGREEN}{document.struct_name} -> {document.path}{Colors.ENDC}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
