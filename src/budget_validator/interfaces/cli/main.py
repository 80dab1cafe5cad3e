import argparse
import logging
from pathlib import Path
from typing import List, Optional
import colorlog

from budget_validator.validation.config import DEFAULT_CONFIG, ValidationConfig, load_config

try:
    from budget_validator import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _resolve_config(args: argparse.Namespace) -> ValidationConfig:
    """Build the run configuration from --config and --categories."""
    config = DEFAULT_CONFIG
    config_path = getattr(args, "config", None)
    if config_path:
        config = load_config(config_path)
    categories = _parse_categories_arg(getattr(args, "categories", None))
    if categories:
        config = config.with_categories(categories)
    return config


def _parse_categories_arg(categories_arg: Optional[str]) -> Optional[List[str]]:
    if not categories_arg:
        return None
    names = [c.strip() for c in categories_arg.split(",") if c.strip()]
    return names or None


def _report_path(target, csv_path: Path, suffix: str) -> Path:
    """Report file next to the CSV, or inside a custom directory."""
    if target is True:
        report_dir = csv_path.parent
    else:
        report_dir = Path(target)
        report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / f"{csv_path.stem}_validation{suffix}"


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate one or more budget CSV files.

    Each file is validated independently. Missing or unreadable files only
    emit warnings; the command succeeds if every validated file is accepted.

    Returns:
        0 if all validated files were accepted
        1 if no files were validated
        2 if any file was rejected or the configuration is invalid
    """
    from budget_validator.validation.registry import print_report, run_validation

    try:
        config = _resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid configuration: %s", e)
        return 2

    validation_results: List[dict] = []
    rejected = 0
    validated = 0

    for csv_arg in args.csv_files:
        csv_path = Path(csv_arg)
        logging.info("Validating %s...", csv_path)

        try:
            result = run_validation(csv_path, config)
        except FileNotFoundError as e:
            logging.warning("File not found: %s", e)
            validation_results.append({"file": csv_path.name, "status": "MISSING", "reason": str(e)})
            continue
        except ValueError as e:
            logging.error("Error validating %s: %s", csv_path, e)
            validation_results.append({"file": csv_path.name, "status": "ERROR", "reason": str(e)})
            continue

        validated += 1
        has_errors = result.has_errors()
        if has_errors:
            rejected += 1
            logging.warning(
                "Validation failed for %s: %d errors, %d warnings",
                csv_path.name,
                result.get_error_count(),
                result.get_warning_count(),
            )
        else:
            logging.info("Validation passed for %s", csv_path.name)

        print_report(result, max_examples=getattr(args, "max_examples", None))

        if getattr(args, "report", False):
            report_path = _report_path(args.report, csv_path, ".md")
            with open(report_path, "w", encoding="utf-8") as f:
                f.write(result.to_markdown(title=f"Validation Report: {csv_path.name}"))
            logging.info("Markdown report saved: %s", report_path)

        if getattr(args, "report_json", False):
            report_path = _report_path(args.report_json, csv_path, ".json")
            with open(report_path, "w", encoding="utf-8") as f:
                f.write(result.to_json())
            logging.info("JSON report saved: %s", report_path)

        validation_results.append(
            {
                "file": csv_path.name,
                "status": "FAIL" if has_errors else "OK",
                "errors": result.get_error_count(),
                "warnings": result.get_warning_count(),
            }
        )

    if len(args.csv_files) > 1 and validation_results:
        logging.info("Validation Summary:")
        for entry in validation_results:
            if entry["status"] == "OK":
                logging.info("%s: PASSED", entry["file"])
            elif entry["status"] == "FAIL":
                logging.info(
                    "%s: FAILED (%d errors, %d warnings)",
                    entry["file"],
                    entry["errors"],
                    entry["warnings"],
                )
            else:
                logging.info("%s: %s (%s)", entry["file"], entry["status"], entry["reason"])

    if validated == 0:
        logging.error("No files were validated.")
        return 1

    if rejected > 0:
        logging.error("%d of %d files rejected.", rejected, validated)
        return 2

    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="budget-validator",
        description=f"Budget CSV Validator (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate Date,Category,Amount CSV files")
    p_validate.add_argument("csv_files", nargs="+", help="CSV files to validate")
    p_validate.add_argument(
        "--config",
        default=None,
        help="YAML file with validation settings (allowed_categories, max_text_length, ...)",
    )
    p_validate.add_argument(
        "--categories",
        default=None,
        help="Comma-separated allowed categories; overrides the config file list",
    )
    p_validate.add_argument(
        "--max-examples",
        type=int,
        default=None,
        help="Print at most this many findings per file",
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate a Markdown report per file. Optionally specify custom directory path.",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate a JSON report per file. Optionally specify custom directory path.",
    )
    p_validate.set_defaults(func=cmd_validate)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
