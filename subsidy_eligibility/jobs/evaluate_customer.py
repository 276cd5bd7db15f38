"""Evaluate one customer's subsidy eligibility from the command line."""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from subsidy_eligibility.config import settings
from subsidy_eligibility.models import CustomerProfile, InvalidProfileError
from subsidy_eligibility.rules.evaluator import evaluate
from subsidy_eligibility.utils.io import read_consumption_history, read_profile_file, write_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2

_installed_handlers: List[logging.Handler] = []

# Sample customer: two-phase rural connection on the green tariff, ten months of history
EXAMPLE_PAYLOAD = {
    "numeroDoDocumento": "14041737706",
    "tipoDeConexao": "bifasico",
    "classeDeConsumo": "rural",
    "modalidadeTarifaria": "verde",
    "historicoDeConsumo": [
        3878,  # current month
        9760,
        5976,
        2797,
        2481,
        5731,
        7538,
        4392,
        7859,
        4160,  # nine months ago
    ],
}


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName
        }
        if hasattr(record, "duration"):
            log_entry["duration_seconds"] = record.duration
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str):
    """Send JSON logs to the job log file and plain logs to stderr."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    file_handler.setFormatter(JSONFormatter())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    # Replace handlers from an earlier run in the same process
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers[:] = [file_handler, console_handler]

    root_logger.setLevel(level.upper())
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate renewable subsidy eligibility for one customer")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=str,
        dest="input_path",
        help="Path to a JSON file with the customer profile"
    )
    source.add_argument(
        "--example",
        action="store_true",
        help="Evaluate the built-in sample customer"
    )
    parser.add_argument(
        "--history-path",
        type=str,
        help="CSV or XLSX with monthly readings, most recent first (replaces the profile history)"
    )
    parser.add_argument(
        "--history-column",
        type=str,
        help="Column holding the readings in --history-path (default: first numeric column)"
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Also write the report JSON to this path (relative paths go under OUT_DIR)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (overrides config)"
    )
    return parser


def load_profile(args: argparse.Namespace) -> CustomerProfile:
    """Build the profile from the selected source, applying a history file if given."""
    if args.example:
        profile = CustomerProfile.from_payload(EXAMPLE_PAYLOAD)
    else:
        profile = read_profile_file(args.input_path)

    if args.history_path:
        history = read_consumption_history(args.history_path, column=args.history_column)
        profile = profile.model_copy(update={"consumption_history": tuple(history)})

    return profile


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for a single evaluation."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or settings.log_level)

    start_time = datetime.now()

    try:
        profile = load_profile(args)
    except (InvalidProfileError, ValueError, OSError) as e:
        logger.error(f"Cannot evaluate customer: {e}")
        return EXIT_BAD_INPUT

    report = evaluate(profile)

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=settings.report_indent))

    if args.output:
        write_report(report, settings.resolve_output(args.output), indent=settings.report_indent)

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"Evaluation complete in {duration:.3f} seconds", extra={"duration": duration})
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
