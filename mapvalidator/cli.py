"""Command-line interface for mapvalidator."""

import sys

import click
from loguru import logger

from .config import MetaConfig, ValidatorParameters, load_parameters
from .logs import configure_logging
from .output.formatter import format_requirements_report, format_validation_results
from .schema.errors import InputError
from .validators.registry import available_checks, validate_map
from .validators.runner import load_map, process_requirements_file


def _fail_on_input_error(e: InputError) -> None:
    """Report a file or schema error and exit with status 2."""
    for line in e.describe():
        click.echo(line, err=True)
    sys.exit(2)


@click.group()
@click.version_option()
def main():
    """mapvalidator: rule-based validation of lanelet maps."""
    pass


@main.command()
@click.argument("map_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-i",
    "--input",
    "requirements_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Requirements file; switches to scheduled multi-validator mode",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for lanelet2_validation_results.json (requirements mode)",
)
@click.option(
    "-v",
    "--validator",
    "checks_filter",
    default="",
    help="Comma-separated check name patterns, e.g. 'mapping.traffic_light.*'",
)
@click.option(
    "--parameters",
    "parameters_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with validator parameters",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--verbose", count=True, help="Log progress (repeat for detail)")
def validate(
    map_file: str,
    requirements_file: str | None,
    output_dir: str | None,
    checks_filter: str,
    parameters_file: str | None,
    output_format: str,
    verbose: int,
):
    """Validate a lanelet map.

    MAP_FILE is the path to a YAML or JSON map document.

    Without --input every check selected by --validator runs once. With
    --input the requirements file decides which validators run and in which
    order.

    Exit codes:
      0 - No issues found
      1 - Issues found
      2 - File or schema error
    """
    configure_logging(verbose)

    try:
        parameters = (
            load_parameters(parameters_file) if parameters_file else ValidatorParameters()
        )
        config = MetaConfig(
            map_file=map_file,
            requirements_file=requirements_file,
            output_dir=output_dir,
            checks_filter=checks_filter,
            parameters=parameters,
        )
        lanelet_map = load_map(config.map_file)
    except InputError as e:
        _fail_on_input_error(e)

    if config.requirements_file is not None:
        try:
            report = process_requirements_file(
                config.requirements_file,
                lanelet_map,
                config.parameters,
                config.output_dir,
            )
        except InputError as e:
            _fail_on_input_error(e)

        click.echo(format_requirements_report(report, output_format))  # type: ignore
        sys.exit(0 if report.issue_count == 0 else 1)

    if config.output_dir is not None:
        logger.warning("--output is only used together with --input")

    if not available_checks(config.checks_filter):
        click.echo(f"No checks found matching to '{config.checks_filter}'", err=True)
        sys.exit(2)

    results = validate_map(lanelet_map, config.checks_filter, config.parameters)
    click.echo(format_validation_results(results, output_format))  # type: ignore

    has_issues = any(result.issues for result in results.values())
    sys.exit(1 if has_issues else 0)


@main.command("list-checks")
@click.option(
    "-v",
    "--validator",
    "checks_filter",
    default="",
    help="Comma-separated check name patterns",
)
def list_checks(checks_filter: str):
    """Print the available checks."""
    checks = available_checks(checks_filter)
    if not checks:
        click.echo(f"No checks found matching to '{checks_filter}'")
        return

    click.echo("The following checks are available:")
    for check in checks:
        click.echo(check)


if __name__ == "__main__":
    main()
