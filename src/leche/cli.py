"""Command line tools for inspecting how leche fakes a template."""

import importlib
import json
import logging

import click

from leche.members import describe_members

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def resolve_target(target: str) -> object:
    """Import the object named by a "module:attribute.path" target.

    Raises:
        click.BadParameter: If target has no ":" separator
        click.ClickException: If the module or attribute cannot be found
    """
    module_name, sep, attribute_path = target.partition(":")
    if not sep or not module_name or not attribute_path:
        msg = f"Expected MODULE:ATTRIBUTE, got {target!r}"
        raise click.BadParameter(msg, param_hint="TARGET")

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import module {module_name!r}: {e}"
        raise click.ClickException(msg) from e

    for attribute in attribute_path.split("."):
        if attribute not in dir(obj):
            msg = f"{module_name!r} has no attribute {attribute_path!r}"
            raise click.ClickException(msg)
        obj = getattr(obj, attribute)
    return obj


@click.group(name="leche", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="leche")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool) -> None:
    """Inspect fakes built by leche."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")


@cli.command(name="describe")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Output members as JSON")
@click.option(
    "--no-descriptors",
    is_flag=True,
    help="Classify members from live values only, as in environments without descriptors",
)
def describe_cmd(target: str, as_json: bool, no_descriptors: bool) -> None:
    """Show how a fake of TARGET replaces each member.

    TARGET is MODULE:ATTRIBUTE, for example pathlib:PurePath.
    """
    template = resolve_target(target)
    members = describe_members(template, use_descriptors=not no_descriptors)

    if as_json:
        click.echo(json.dumps([member.to_dict() for member in members], indent=2))
        return

    if not members:
        click.echo("No members found.")
        return

    name_width = max(len(member.name) for member in members)
    for member in members:
        click.echo(f"{member.name:<{name_width}}  {member.kind:<13}  {member.replacement}")


def main() -> None:
    """CLI entry point used by the `leche` console script."""
    cli()
