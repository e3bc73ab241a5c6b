"""biomodel CLI: schema resolution, instance validation, lint and fixture checks."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


def main():
    """Main CLI entry point for biomodel commands."""
    # Get version for --version argument (handle PackageNotFoundError)
    try:
        biomodel_version = get_version("biomodel")
    except PackageNotFoundError:
        biomodel_version = "dev"

    parser = argparse.ArgumentParser(
        prog="biomodel",
        description="biomodel: resolve, lint and validate biomedical data model schemas"
    )
    parser.add_argument("--version", action="version", version=f"biomodel {biomodel_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--schemas-dir",
        type=Path,
        default=None,
        help="Directory of schema documents (defaults to BIOMODEL_SCHEMAS_DIR or the packaged schemas)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print a schema with its mixinProperties flattened",
        parents=[parent_parser]
    )
    resolve_parser.add_argument(
        "schema",
        help="Schema file name, stem or title (e.g. Tissue)"
    )
    resolve_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the flattened schema to this file instead of stdout"
    )

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate instance records against a schema",
        parents=[parent_parser]
    )
    validate_parser.add_argument(
        "schema",
        help="Schema file name, stem or title (e.g. Tissue)"
    )
    validate_parser.add_argument(
        "instances",
        type=Path,
        nargs="+",
        help="Paths to instance JSON files"
    )

    # lint command
    lint_parser = subparsers.add_parser(
        "lint",
        help="Check the schema collection for authoring-convention violations",
        parents=[parent_parser]
    )
    lint_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for lint.json"
    )

    # examples command
    examples_parser = subparsers.add_parser(
        "examples",
        help="Validate valid-*/invalid-* example fixtures",
        parents=[parent_parser]
    )
    examples_parser.add_argument(
        "--examples-dir",
        type=Path,
        default=None,
        help="Fixture tree (defaults to BIOMODEL_EXAMPLES_DIR or the packaged examples)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from pydantic import ValidationError
    from .config import get_settings
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid BIOMODEL_* configuration: {e}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from . import api
    from ._internal.canonical_json import canonical_dumps
    from .kernel.document import SchemaModelError

    def _print_status(ok: bool, errors: int, warnings: Optional[int] = None) -> None:
        if args.quiet:
            return
        print(f"  Status: {'OK' if ok else 'FAILED'}")
        print(f"  Errors: {errors}")
        if warnings is not None:
            print(f"  Warnings: {warnings}")

    try:
        if args.command == "resolve":
            schema = api.resolve(args.schema, schemas_dir=args.schemas_dir)
            text = canonical_dumps(schema, indent=2) + "\n"
            if args.output is not None:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(text, encoding="utf-8")
                if not args.quiet:
                    print(f"[OK] Wrote {args.output}")
            else:
                sys.stdout.write(text)

        elif args.command == "validate":
            failed = False
            for instance_path in args.instances:
                result = api.validate_instance(args.schema, instance_path, schemas_dir=args.schemas_dir)
                failed = failed or not result.ok
                if not args.quiet:
                    print(f"[{'OK' if result.ok else 'FAILED'}] {instance_path} ({result.schema_name})")
                    for error in result.errors:
                        print(f"    {error.path or '/'} [{error.rule}] {error.message}")
                _print_status(result.ok, len(result.errors))
            if failed:
                sys.exit(1)

        elif args.command == "lint":
            result = api.lint(schemas_dir=args.schemas_dir)
            if args.output_dir is not None:
                args.output_dir.mkdir(parents=True, exist_ok=True)
                report_out = args.output_dir / "lint.json"
                report_out.write_text(canonical_dumps(result.model_dump()) + "\n", encoding="utf-8")
                if not args.quiet:
                    print(f"  Report: {report_out}")
            if not args.quiet:
                for issue in result.errors + result.warnings:
                    print(f"    {issue.code} {issue.element_id or ''}: {issue.message}")
            _print_status(result.ok, len(result.errors), len(result.warnings))
            if not result.ok:
                sys.exit(1)

        elif args.command == "examples":
            report = api.check_examples(examples_dir=args.examples_dir, schemas_dir=args.schemas_dir)
            if not args.quiet:
                print(f"[{'OK' if report.ok else 'FAILED'}] {len(report.outcomes)} examples checked")
                for mismatch in report.mismatches:
                    print(f"    mismatch: {mismatch}")
            _print_status(report.ok, len(report.mismatches))
            if not report.ok:
                sys.exit(1)

    except (SchemaModelError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
