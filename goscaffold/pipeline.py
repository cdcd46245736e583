"""goscaffold invoking layer and command-line entry point.

``scaffold()`` drives one generation run end to end:

1. VALIDATE  -- turn possibly-partial options into an immutable configuration.
2. PRE-CHECK -- refuse to touch an existing destination directory.
3. GENERATE  -- run the orchestrator.
4. ROLLBACK  -- on failure, remove the partially generated project, then
   re-raise the original error.

Usage::

    python -m goscaffold.pipeline my-api --framework echo --database mysql
    python -m goscaffold.pipeline --options project.yaml -o ./out
"""

from __future__ import annotations

import argparse
import errno
import logging
import os
import shutil
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from goscaffold.config import (
    Architecture,
    AuthKind,
    CIProvider,
    ConfigFormat,
    Database,
    DataAccess,
    FeatureOptions,
    Framework,
    LogKind,
    MiddlewareOptions,
    ProjectOptions,
    validate_configuration,
)
from goscaffold.errors import (
    FileSystemError,
    GenerationError,
    ScaffoldError,
    TemplateExecError,
    TemplateParseError,
    ValidationError,
)
from goscaffold.scaffolder import GenerationResult, ProjectGenerator
from goscaffold.utils import (
    configure_logging,
    console,
    format_file_count,
    print_error,
    print_file_tree,
    print_header,
    print_hint,
    print_success,
    print_summary_table,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scaffold
# ---------------------------------------------------------------------------


def scaffold(
    options: Union[ProjectOptions, dict[str, Any]],
    output_dir: Union[str, Path] = ".",
    now: Optional[datetime] = None,
) -> GenerationResult:
    """Validate *options* and generate the project under *output_dir*.

    Args:
        options: Possibly-partial generation options.
        output_dir: Parent directory of the new project.
        now: Timestamp recorded in generated files (fix it for reproducible
            output).

    Returns:
        The orchestrator's ``GenerationResult``.

    Raises:
        ValidationError: before any file-system activity.
        FileSystemError: if ``<output_dir>/<name>`` already exists (nothing
            is created or removed in that case).
        GenerationError: if a step fails; the partial project directory has
            been removed by the time this propagates.
    """
    outcome = validate_configuration(options)
    config = outcome.config

    project_path = Path(output_dir) / config.name
    if os.path.lexists(project_path):
        raise FileSystemError(str(project_path), "destination already exists", errno.EEXIST)

    generator = ProjectGenerator(config, generated_at=now, warnings=outcome.warnings)
    try:
        return generator.generate(output_dir)
    except Exception:
        _rollback(project_path)
        raise


def _rollback(project_path: Path) -> None:
    """Remove a partially generated project; a failed removal is only logged."""
    if not project_path.exists():
        return
    logger.warning("Cleaning up partial generation at %s", project_path)
    try:
        shutil.rmtree(project_path)
    except OSError as exc:
        logger.error("Failed to clean up %s: %s", project_path, exc)


# ---------------------------------------------------------------------------
# Remediation
# ---------------------------------------------------------------------------

_DOMAINS: dict[str, type] = {
    "framework": Framework,
    "data_access": DataAccess,
    "database": Database,
    "architecture": Architecture,
    "config_format": ConfigFormat,
    "auth": AuthKind,
    "logging": LogKind,
    "ci": CIProvider,
}

_HINTS: dict[str, list[str]] = {
    "template": [
        "Template error detected. This is a bug in goscaffold, not in your options.",
        "Try a different combination of options to work around it.",
        "Report the failing template name shown above.",
    ],
    "permission": [
        "Permission denied. Check that you have write access to the output directory.",
        "Try: sudo chown -R $USER:$USER .",
    ],
    "disk-space": [
        "Not enough disk space. Free up some space and try again.",
    ],
    "other": [
        "Check that you have sufficient permissions in the output directory.",
        "Ensure you have enough disk space.",
        "Try running with different configuration options.",
        "For help: goscaffold --help",
    ],
}


def classify_failure(error: BaseException) -> str:
    """Map a failure to a remediation category.

    Returns one of ``validation``, ``template``, ``permission``,
    ``disk-space``, ``existing-path`` or ``other``.
    """
    cause = error.cause if isinstance(error, GenerationError) else error

    if isinstance(cause, ValidationError):
        return "validation"
    if isinstance(cause, (TemplateParseError, TemplateExecError)):
        return "template"

    code = getattr(cause, "errno", None)
    if code is None and isinstance(cause.__cause__, OSError):
        code = cause.__cause__.errno
    if code in (errno.EACCES, errno.EPERM):
        return "permission"
    if code in (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)):
        return "disk-space"
    if code == errno.EEXIST:
        return "existing-path"
    return "other"


def remediation_hints(error: BaseException) -> list[str]:
    """Return targeted guidance lines for *error*."""
    category = classify_failure(error)
    cause = error.cause if isinstance(error, GenerationError) else error

    if category == "validation":
        field_name = getattr(cause, "field", "")
        domain = _DOMAINS.get(field_name)
        if domain is not None:
            values = ", ".join(member.value for member in domain)
            return [f"Valid values for {field_name}: {values}"]
        if field_name == "name":
            return ["Use only letters, numbers, hyphens, and underscores in the project name."]
        return [f"Check the value given for {field_name}."]

    if category == "existing-path":
        path = getattr(cause, "path", "")
        return [
            "Use a different project name or remove the existing directory:",
            f"rm -rf {path}",
        ]

    return list(_HINTS[category])


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

_TOGGLES: tuple[str, ...] = tuple(MiddlewareOptions.model_fields) + tuple(FeatureOptions.model_fields)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goscaffold",
        description="goscaffold -- generate a Go web-service project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  goscaffold my-api\n"
            "  goscaffold my-api --framework fiber --data-access sqlx --database mysql\n"
            "  goscaffold my-api --architecture clean --enable metrics --disable api_docs\n"
            "  goscaffold --options project.yaml -o ./out\n"
        ),
    )

    parser.add_argument("name", nargs="?", default=None, help="Project name")
    parser.add_argument(
        "--output", "-o",
        default=os.environ.get("GOSCAFFOLD_OUTPUT_DIR", "."),
        help="Parent directory of the project (default: $GOSCAFFOLD_OUTPUT_DIR or .)",
    )
    parser.add_argument("--options", default=None, help="YAML or JSON options file")
    parser.add_argument("--module-path", default=None, help="Go module path")
    parser.add_argument("--framework", default=None, help="gin, echo, fiber or revel")
    parser.add_argument("--data-access", "--orm", dest="data_access", default=None,
                        help="gorm, sqlx, raw or none")
    parser.add_argument("--database", "--db", dest="database", default=None,
                        help="postgres, mysql, sqlite, mongo, redis or memory")
    parser.add_argument("--architecture", "--arch", dest="architecture", default=None,
                        help="simple, clean, hexagonal, mvc or custom")
    parser.add_argument("--config-format", default=None, help="yaml, json or toml")
    parser.add_argument("--auth", default=None, help="jwt, oauth2, basic or none")
    parser.add_argument("--logging", default=None, help="standard, logrus, zap or charm")
    parser.add_argument("--ci", default=None, help="github, gitlab or none")
    parser.add_argument("--no-testing", dest="testing", action="store_false", default=None,
                        help="Skip Go test scaffolding")
    parser.add_argument("--no-docker", dest="docker", action="store_false", default=None,
                        help="Skip Dockerfile and Compose stack")
    parser.add_argument("--enable", action="append", default=[], choices=_TOGGLES,
                        metavar="TOGGLE", help="Enable a middleware or feature (repeatable)")
    parser.add_argument("--disable", action="append", default=[], choices=_TOGGLES,
                        metavar="TOGGLE", help="Disable a middleware or feature (repeatable)")
    parser.add_argument("--save-config", default=None,
                        help="Write the validated configuration to this YAML/JSON file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show the files that would be generated without writing them")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every planned file")
    return parser


def options_from_args(args: argparse.Namespace) -> ProjectOptions:
    """Merge an options file (or environment defaults) with command-line flags."""
    base = ProjectOptions.load(args.options) if args.options else ProjectOptions.from_env()

    update: dict[str, Any] = {}
    for field_name in (
        "name", "module_path", "framework", "data_access", "database",
        "architecture", "config_format", "auth", "logging", "ci", "testing", "docker",
    ):
        value = getattr(args, field_name)
        if value is not None:
            update[field_name] = value

    switches = {name: True for name in args.enable}
    switches.update({name: False for name in args.disable})
    middleware = {k: v for k, v in switches.items() if k in MiddlewareOptions.model_fields}
    features = {k: v for k, v in switches.items() if k in FeatureOptions.model_fields}
    if middleware:
        update["middleware"] = base.middleware.model_copy(update=middleware)
    if features:
        update["features"] = base.features.model_copy(update=features)

    return base.model_copy(update=update)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``goscaffold`` / ``python -m goscaffold.pipeline``."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        options = options_from_args(args)
        if args.dry_run:
            _preview(options)
            return
        result = scaffold(options, args.output)
        if args.save_config:
            result.config.save(args.save_config)
    except ScaffoldError as exc:
        print_error(f"Failed to generate project: {exc}")
        console.print()
        console.print("[bold yellow]Troubleshooting tips:[/bold yellow]")
        for hint in remediation_hints(exc):
            print_hint(hint)
        sys.exit(1)

    # Validator warnings reach the console through the logging handler.
    config = result.config

    print_header("Project generated")
    print_summary_table(
        {
            "Project": config.name,
            "Module": config.module_path,
            "Framework": config.framework.value,
            "Data access": config.data_access.value,
            "Database": config.database.value if config.database else "none",
            "Architecture": config.architecture.value,
            "Location": str(result.project_path),
            "Files": format_file_count(len(result.files_created)),
        },
        title="goscaffold",
    )
    print_success("Project generated successfully!")
    console.print("Next steps:")
    console.print(f"  cd {result.project_path}")
    console.print("  go mod tidy")
    console.print("  go run main.go")


def _preview(options: ProjectOptions) -> None:
    outcome = validate_configuration(options)
    jobs = ProjectGenerator(outcome.config).preview()
    print_file_tree(outcome.config.name, [job.destination for job in jobs])
    console.print(f"{format_file_count(len(jobs))} would be generated.")


if __name__ == "__main__":
    main()
