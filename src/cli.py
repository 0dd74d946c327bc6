"""Command-line interface for archidoc-core."""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from pathlib import Path

from catalog.validate import format_validation_report, validate_file_tables
from ir.codec import IRSchemaError, load_ir_file, serialize, write_ir_file
from ir.health import aggregate_health, format_health_report
from ir.validation import validate_ir
from merge.merge import MergeConflictError, merge_ir_detailed
from rules.config import ArchidocConfig, ConfigError, load_config, resolve_output_dir
from verify.drift import check_drift, format_drift_report, publish_artifacts
from verify.fitness import format_fitness_result, run_fitness
from verify.promote import promote_patterns

logger = logging.getLogger(__name__)


def _add_root(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _add_ir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ir", required=True, help="IR JSON file")


def _add_artifacts_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="archidoc")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_ir_parser = subparsers.add_parser(
        "validate-ir", help="Validate an IR file against the schema"
    )
    validate_ir_parser.add_argument("file", help="IR JSON file")

    merge_parser = subparsers.add_parser("merge", help="Merge IR files")
    merge_parser.add_argument("files", nargs="+", help="IR JSON files, in order")
    merge_parser.add_argument(
        "-o", "--output", default=None, help="Output file (default: stdout)"
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Check file catalogs for ghosts and orphans"
    )
    _add_root(validate_parser)
    _add_ir(validate_parser)

    health_parser = subparsers.add_parser("health", help="Summarize health")
    _add_ir(health_parser)

    promote_parser = subparsers.add_parser(
        "promote", help="Promote planned patterns with structural evidence"
    )
    _add_ir(promote_parser)
    promote_parser.add_argument(
        "-o", "--output", default=None, help="Output file (default: stdout)"
    )

    fitness_parser = subparsers.add_parser("fitness", help="Run fitness functions")
    _add_ir(fitness_parser)
    fitness_parser.add_argument(
        "names", nargs="*", help="Fitness functions (default: config set)"
    )

    publish_parser = subparsers.add_parser(
        "publish", help="Write documentation artifacts"
    )
    _add_root(publish_parser)
    _add_ir(publish_parser)
    _add_artifacts_dir(publish_parser)

    check_parser = subparsers.add_parser(
        "check", help="Detect drift between the IR and published artifacts"
    )
    _add_root(check_parser)
    _add_ir(check_parser)
    _add_artifacts_dir(check_parser)

    return parser


def _resolve_artifacts_dir(
    root: Path, config: ArchidocConfig, artifacts_dir: str | None
) -> Path:
    if artifacts_dir is None:
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_validate_ir(file: str) -> int:
    try:
        payload = Path(file).read_bytes()
    except OSError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    result = validate_ir(payload)
    if not result.ok:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    sys.stdout.write(f"{file}: {len(result.modules)} module(s) valid\n")
    return 0


def _handle_merge(files: list[str], output: str | None) -> int:
    sources = [load_ir_file(Path(file)) for file in files]
    try:
        result = merge_ir_detailed(sources)
    except MergeConflictError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    if output is None:
        sys.stdout.write(serialize(result.modules))
    else:
        write_ir_file(Path(output), result.modules)
    return 0


def _handle_validate(root: Path, ir_file: str) -> int:
    config = load_config(root)
    docs = load_ir_file(Path(ir_file).expanduser().resolve())
    gitignore_root = root if config.catalog.respect_gitignore else None

    # Source paths in the IR are relative to the project root.
    with contextlib.chdir(root):
        report = validate_file_tables(
            docs,
            gitignore_root=gitignore_root,
            nested_gitignore=config.catalog.nested_gitignore,
        )

    sys.stdout.write(format_validation_report(report))
    return 0 if report.is_clean else 1


def _handle_health(ir_file: str) -> int:
    docs = load_ir_file(Path(ir_file))
    sys.stdout.write(format_health_report(aggregate_health(docs)))
    return 0


def _handle_promote(ir_file: str, output: str | None) -> int:
    docs = load_ir_file(Path(ir_file))
    result = promote_patterns(docs)
    sys.stderr.write(f"promoted {result.promoted} module(s)\n")

    if output is None:
        sys.stdout.write(serialize(result.modules))
    else:
        write_ir_file(Path(output), result.modules)
    return 0


def _handle_fitness(ir_file: str, names: list[str]) -> int:
    docs = load_ir_file(Path(ir_file))
    if not names:
        names = load_config(Path.cwd()).fitness.functions

    exit_code = 0
    for name in names:
        result = run_fitness(name, docs)
        if result is None:
            sys.stderr.write(f"error: unknown fitness function '{name}'\n")
            return 2
        sys.stdout.write(format_fitness_result(result))
        if not result.passed:
            exit_code = 1
    return exit_code


def _handle_publish(root: Path, ir_file: str, artifacts_dir: str | None) -> int:
    config = load_config(root)
    resolved_artifacts_dir = _resolve_artifacts_dir(root, config, artifacts_dir)
    docs = load_ir_file(Path(ir_file))

    written = publish_artifacts(
        docs,
        artifacts_dir=resolved_artifacts_dir,
        strategy=config.drift.strategy,
        document_name=config.drift.document,
    )
    logger.info("Wrote %d artifact(s) to %s", len(written), resolved_artifacts_dir)
    sys.stdout.write(f"wrote {len(written)} file(s) to {resolved_artifacts_dir}\n")
    return 0


def _handle_check(root: Path, ir_file: str, artifacts_dir: str | None) -> int:
    config = load_config(root)
    resolved_artifacts_dir = _resolve_artifacts_dir(root, config, artifacts_dir)
    docs = load_ir_file(Path(ir_file))

    try:
        report = check_drift(
            docs,
            artifacts_dir=resolved_artifacts_dir,
            strategy=config.drift.strategy,
            document_name=config.drift.document,
        )
    except NotADirectoryError as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2

    sys.stdout.write(format_drift_report(report))
    return 1 if report.has_drift else 0


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "validate-ir":
        return _handle_validate_ir(args.file)

    if args.command == "merge":
        return _handle_merge(args.files, args.output)

    if args.command == "health":
        return _handle_health(args.ir)

    if args.command == "promote":
        return _handle_promote(args.ir, args.output)

    if args.command == "fitness":
        return _handle_fitness(args.ir, args.names)

    root = Path(args.root).expanduser().resolve()

    if args.command == "validate":
        return _handle_validate(root, args.ir)

    if args.command == "publish":
        return _handle_publish(root, args.ir, args.artifacts_dir)

    if args.command == "check":
        return _handle_check(root, args.ir, args.artifacts_dir)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _dispatch(args)
    except (IRSchemaError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
