"""
Utility script used for copying configuration templates to a user-defined path
"""

import json
from pathlib import Path

import click
import toml

default_path = Path.home() / ".arvan_vod/credentials.toml"

default_configuration = {
    "ARVAN_VOD_HOST": "https://napi.arvancloud.ir/vod/2.0",
    "ARVAN_API_KEY": "Apikey ...",
    "ARVAN_VOD_DEBUG": "false",
    "ARVAN_VOD_DEBUG_FILE": "arvan_vod_debug.log",
}


def write_json(json_path: Path) -> None:
    """
    Write template JSON configuration file.

    Parameters
    ----------
    json_path : Path
        Path to output JSON file.
    """
    click.echo(f"Try to write configuration template to {json_path}")

    if json_path.exists():
        click.echo(f"{json_path} already exists")
        return

    with json_path.open("w") as f:
        json.dump(default_configuration, f, indent=2)

    click.echo(f"Configuration file written to {json_path}")
    click.echo("Please edit it to insert your API key")


def write_toml(toml_path: Path) -> None:
    """
    Write template TOML configuration file.

    Parameters
    ----------
    toml_path : Path
        Path to output TOML file.
    """
    click.echo(f"Try to write configuration template to {toml_path}")

    if toml_path.exists():
        click.echo(f"{toml_path} already exists")
        return

    with toml_path.open("w") as f:
        toml.dump(default_configuration, f)

    click.echo(f"Configuration file written to {toml_path}")
    click.echo("Please edit it to insert your API key")


def write_env(env_path: Path) -> None:
    """
    Write template .env configuration file.
    """
    click.echo(f"Try to write configuration template to {env_path}")

    if env_path.exists():
        click.echo(f"{env_path} already exists")
        return

    with env_path.open("w") as f:
        for key, value in default_configuration.items():
            f.write(f'{key}="{value}"\n')

    click.echo(f"Configuration file written to {env_path}")
    click.echo("Please edit it to insert your API key")


@click.command("Copy configuration templates in all accepted formats")
@click.option(
    "--json",
    "json_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output JSON file containing the configuration keys",
)
@click.option(
    "--toml",
    "toml_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output TOML file containing the configuration keys",
)
@click.option(
    "--env",
    "env_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output .env file containing the configuration keys",
)
@click.option(
    "--default",
    "default",
    is_flag=True,
    show_default=True,
    default=False,
    help=f"Copy the TOML template to {default_path}",
)
def cli(json_path: Path, toml_path: Path, env_path: Path, default: bool) -> None:
    if json_path is not None:
        write_json(json_path=json_path)

    if toml_path is not None:
        write_toml(toml_path=toml_path)

    if env_path is not None:
        write_env(env_path=env_path)

    if default:
        default_path.parent.mkdir(exist_ok=True, parents=True)
        write_toml(toml_path=default_path)


if __name__ == "__main__":
    cli()
