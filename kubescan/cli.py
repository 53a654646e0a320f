"""
KubeScan - Command Line Interface

This module provides the CLI argument parsing, logging setup and main
entry point. It is the only place where a fatal resolution error turns
into a non-zero exit status.
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

from kubescan.core.catalog import ComponentCatalog, list_available_catalogs, load_catalog
from kubescan.core.errors import ResolutionError
from kubescan.core.runtime import RuntimeResolution, resolve_runtime
from kubescan.output.json_formatter import JSONFormatter
from kubescan.output.reporter import Reporter

logger = logging.getLogger(__name__)


def clean_ids(id_list: str) -> list[str]:
    """Split a comma-separated list, trimming blanks and empty entries.

    Example:
        clean_ids(" apiserver, kubelet ,,") -> ["apiserver", "kubelet"]
    """
    return [item.strip() for item in id_list.strip(",").split(",") if item.strip()]


def parse_expected_version(value: str) -> tuple[str, str]:
    """Parse ``MAJOR.MINOR`` into a (major, minor) pair of strings.

    Raises:
        ValueError: If the value is not two dot-separated numbers
    """
    parts = value.strip().split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected version must look like MAJOR.MINOR, got '{value}'")
    return parts[0], parts[1]


def configure_logging(verbosity: int) -> None:
    """Configure diagnostic logging on stderr.

    Args:
        verbosity: 0 for warnings only, 1 for info, 2+ for debug
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


class CLI:
    """Command Line Interface for runtime resolution.

    Loads the component catalog, resolves running binaries and config
    files, checks the Kubernetes version and reports the outcome as JSON.
    """

    def __init__(self, reporter: Optional[Reporter] = None) -> None:
        """Initialize the CLI.

        Args:
            reporter: Diagnostic reporter (defaults to stderr)
        """
        self.args: Optional[argparse.Namespace] = None
        self.reporter = reporter or Reporter()
        self.catalog: Optional[ComponentCatalog] = None
        self.resolution: Optional[RuntimeResolution] = None

    def parse_args(self, argv: Optional[list[str]] = None) -> argparse.Namespace:
        """Parse command line arguments.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace
        """
        parser = argparse.ArgumentParser(
            prog="kubescan",
            description="Resolve running Kubernetes components for benchmark checks",
            epilog="Exit codes: 0=resolved, 1=fatal error, 2=resolved with warnings",
        )

        parser.add_argument(
            "--target", "-t",
            type=str,
            default=None,
            help=(
                "Built-in component catalog "
                f"({', '.join(list_available_catalogs()) or 'none installed'}; "
                "default: master)"
            ),
        )

        parser.add_argument(
            "--config", "-c",
            type=str,
            default=None,
            help="Catalog JSON file (overrides --target)",
        )

        parser.add_argument(
            "--components",
            type=str,
            default=None,
            help="Comma-separated list of components to resolve (default: all)",
        )

        parser.add_argument(
            "--expected-version",
            type=str,
            default=None,
            help="Expected Kubernetes version as MAJOR.MINOR (default: from catalog)",
        )

        parser.add_argument(
            "--skip-version-check",
            action="store_true",
            help="Do not compare kubectl client/server versions",
        )

        parser.add_argument(
            "--render", "-r",
            action="append",
            default=[],
            metavar="TEMPLATE",
            help="Check command template to substitute (repeatable)",
        )

        parser.add_argument(
            "--output", "-o",
            type=str,
            default=None,
            help="Output file path (default: stdout)",
        )

        parser.add_argument(
            "--pretty",
            action="store_true",
            help="Pretty-print JSON output with indentation",
        )

        parser.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="Increase diagnostic output (-v info, -vv debug)",
        )

        self.args = parser.parse_args(argv)
        return self.args

    def load_catalog(self) -> ComponentCatalog:
        """Load the catalog selected on the command line.

        Raises:
            CatalogError: If the catalog or a requested component is unknown
        """
        if self.args is None:
            raise RuntimeError("Arguments must be parsed before loading the catalog")

        catalog = load_catalog(target=self.args.target, config_path=self.args.config)
        if self.args.components:
            catalog = catalog.select(clean_ids(self.args.components))

        if self.args.verbose:
            self.reporter.info(
                f"Loaded {len(catalog.components)} components from {catalog.source}"
            )
        self.catalog = catalog
        return catalog

    def run_resolution(self) -> int:
        """Resolve the runtime and write the JSON report.

        Returns:
            Exit code (0=success, 1=error, 2=warnings)
        """
        if self.args is None:
            raise RuntimeError("Arguments must be parsed before resolution")

        catalog = self.catalog or self.load_catalog()
        expected = None
        if self.args.expected_version:
            expected = parse_expected_version(self.args.expected_version)

        self.resolution = resolve_runtime(
            catalog,
            reporter=self.reporter,
            expected_version=expected,
            check_version=not self.args.skip_version_check,
        )

        engine = self.resolution.substitution_engine()
        rendered = [
            {"template": template, "command": engine.render(template)}
            for template in self.args.render
        ]

        formatter = JSONFormatter(pretty=self.args.pretty)
        content = formatter.format(
            self.resolution,
            catalog,
            rendered=rendered,
            warnings=self.reporter.warnings,
        )

        try:
            if self.args.output:
                output_path = Path(self.args.output)
                formatter.write_to_file(content, output_path)
                logger.info("Results written to %s", output_path)
            else:
                formatter.write_to_stdout(content)
        except BrokenPipeError:
            # Common when piping to tools like `head`; treat as graceful termination.
            return 0
        except (OSError, UnicodeError) as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1

        if self.reporter.has_warnings:
            return 2

        return 0

    def main(self, argv: Optional[list[str]] = None) -> int:
        """Main entry point for the CLI.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code (0=success, 1=error, 2=warnings)
        """
        try:
            self.parse_args(argv)
            configure_logging(self.args.verbose)
            self.load_catalog()
            return self.run_resolution()

        except ResolutionError as e:
            self.reporter.error(e)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\nResolution interrupted by user", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            if self.args and self.args.verbose:
                traceback.print_exc()
            return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the KubeScan CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=warnings)
    """
    cli = CLI()
    return cli.main(argv)


if __name__ == "__main__":
    sys.exit(main())
