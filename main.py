# main.py
"""Restore punctuation, casing and sentence boundaries of unpunctuated text.

Examples:
    python main.py "i saw mr smith at the store he was shopping"
    python main.py --input-file transcript.txt -v
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

from punctrestore.LoggingSetup import setup_logging


def resolve_paths(script_path: Path) -> Dict[str, Path]:
    """
    Resolves application paths relative to the project directory.

    Structure:
        project/                   # APP_DIR
        ├── main.py
        ├── punctrestore/
        ├── config/                # CONFIG_DIR
        ├── models/                # MODELS_DIR
        └── logs/                  # LOGS_DIR

    Args:
        script_path: Path to main script

    Returns:
        Dictionary with resolved paths
    """
    project_dir = script_path.resolve().parent
    return {
        "APP_DIR": project_dir,
        "MODELS_DIR": project_dir / "models",
        "CONFIG_DIR": project_dir / "config",
        "LOGS_DIR": project_dir / "logs",
    }


def read_texts(args: argparse.Namespace) -> List[str]:
    """Texts from positional arguments, then one per non-empty line of --input-file."""
    texts = list(args.texts)
    if args.input_file:
        path = Path(args.input_file)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        texts.extend(line.strip() for line in path.read_text(encoding='utf-8').splitlines() if line.strip())
    return texts


def build_parser(paths: Dict[str, Path]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Restore punctuation and true-casing of unpunctuated text',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('texts', nargs='*', help='Texts to restore')
    parser.add_argument('--input-file', help='File with one text per line')
    parser.add_argument(
        '--config',
        default=str(paths["CONFIG_DIR"] / "restore_config.json"),
        help='Path to configuration JSON (default: config/restore_config.json)'
    )
    parser.add_argument(
        '--models-dir',
        default=str(paths["MODELS_DIR"]),
        help='Directory for downloaded model files (default: ./models)'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: List[str] | None = None) -> int:
    paths = resolve_paths(Path(__file__))
    args = build_parser(paths).parse_args(argv)

    is_frozen = getattr(sys, 'frozen', False)
    setup_logging(paths["LOGS_DIR"], verbose=args.verbose, is_frozen=is_frozen)

    try:
        texts = read_texts(args)
        if not texts:
            logging.error("No input text given")
            return 2

        from punctrestore.PunctuationRestorer import PunctuationRestorer

        restorer = PunctuationRestorer(config_path=args.config, models_dir=Path(args.models_dir))
        for sentence in restorer.restore(texts):
            print(sentence)
        return 0

    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        return 130
    except Exception as e:
        logging.error(f"ERROR: {type(e).__name__}: {e}")
        import traceback
        logging.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
