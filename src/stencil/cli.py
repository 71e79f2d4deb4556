"""CLI interface for stencil - scaffold projects from templates."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from . import __version__
from .errors import StencilError
from .generate import GenerationResult, Generator
from .templates import TemplateRegistry
from .utils import console

DEFAULT_TEMPLATE = "basic"


def get_registry() -> TemplateRegistry:
    return TemplateRegistry()


def _fail(error: StencilError) -> None:
    console.print(f"Error: {error}", style="bold red", markup=False)
    raise SystemExit(1)


def _parse_vars(pairs: Tuple[str, ...]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{pair}'", param_hint="--var")
        out[name] = value
    return out


def _report(result: GenerationResult) -> None:
    name = result.project_root.name
    console.print(
        f"Project '{name}' created successfully using template '{result.template}'!",
        style="bold green",
        markup=False,
    )
    if result.failed_commands:
        console.print(
            f"{len(result.failed_commands)} post-generation command(s) failed; "
            "see warnings above.",
            style="yellow",
        )
    console.print("\nNext steps:")
    console.print(f"  cd {name}", markup=False)


def _generate(
    project_name: str,
    template_name: str,
    overrides: Optional[Dict[str, str]] = None,
    check_environment: bool = True,
) -> None:
    try:
        generator = Generator(
            registry=get_registry(), check_environment=check_environment
        )
        result = generator.generate(project_name, template_name, overrides=overrides)
    except StencilError as e:
        _fail(e)
    else:
        _report(result)


@click.group()
@click.version_option(__version__, prog_name="stencil")
def cli() -> None:
    """Create projects from reusable templates."""
    pass


@cli.command("new")
@click.argument("project_name")
@click.option(
    "-t", "--template", "template_name", default=DEFAULT_TEMPLATE, show_default=True,
    help="Template to use when generating the project",
)
@click.option(
    "--var", "variables", multiple=True, metavar="NAME=VALUE",
    help="Set a template variable without prompting (repeatable)",
)
@click.option(
    "--skip-checks", is_flag=True, help="Do not check for tools the template requires"
)
def new_cmd(
    project_name: str, template_name: str, variables: Tuple[str, ...], skip_checks: bool
) -> None:
    """
    Create PROJECT_NAME in the current directory from a template.

    Required variables without a default and not given with --var are
    prompted for. Post-generation command failures are reported as warnings
    and do not change the exit code.
    """
    _generate(
        project_name,
        template_name,
        overrides=_parse_vars(variables),
        check_environment=not skip_checks,
    )


@cli.command("list")
@click.option("--detail", "detail", is_flag=True, default=False)
def list_cmd(detail: bool) -> None:
    """
    List built-in and user templates.
    """
    try:
        templates = get_registry().list_templates()
    except StencilError as e:
        _fail(e)
        return
    if not templates:
        console.print("No templates available.", style="yellow")
        return
    console.print("Available templates:\n")
    for info in templates:
        console.print(f"- {info.display_name} ({info.name})", markup=False)
        if info.description:
            console.print(f"  {info.description}", markup=False)
        if detail:
            console.print(f"  Version: {info.version_label} | Source: {info.source}", markup=False)
            if info.tags:
                console.print(f"  Tags: {', '.join(info.tags)}", markup=False)
        console.print()


@cli.command("install")
@click.argument("source")
def install_cmd(source: str) -> None:
    """
    Install a template from a local directory into the user template store.

    The directory must contain a template.yaml. A user template with the same
    name is replaced, and it takes precedence over a built-in of that name.
    """
    try:
        get_registry().install(source)
    except StencilError as e:
        _fail(e)


@cli.command("interactive")
@click.option(
    "--skip-checks", is_flag=True, help="Do not check for tools the template requires"
)
def interactive_cmd(skip_checks: bool) -> None:
    """Pick a template and a project name interactively."""
    try:
        templates = get_registry().list_templates()
    except StencilError as e:
        _fail(e)
        return
    if not templates:
        _fail(StencilError("no templates available"))
        return

    console.print("Welcome to stencil!\n")
    console.print("Available templates:")
    for i, info in enumerate(templates, start=1):
        console.print(f"{i}) {info.display_name} - {info.description}", markup=False)

    choice = click.prompt(
        f"\nSelect template (1-{len(templates)})",
        type=click.IntRange(1, len(templates)),
    )
    project_name = click.prompt("Enter project name").strip()
    _generate(project_name, templates[choice - 1].name, check_environment=not skip_checks)


@cli.command("version")
def version_cmd() -> None:
    """Show the stencil version."""
    console.print(f"stencil v{__version__}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
