"""Hookcord CLI - Command line interface."""

import json
import logging
import sys

import click

from hookcord import __version__
from hookcord.env import get_config_file, get_settings
from hookcord.identity import get_identity_directory
from hookcord.mentions import (
    MentionFormatter,
    extract_mention_info,
    is_pr_event,
    select_mentionees,
)


@click.group()
@click.version_option(version=__version__, prog_name="hookcord")
def cli() -> None:
    """Hookcord - GitHub webhooks to Discord

    Relays GitHub events to Discord channels and pings the people a
    pull request interaction concerns.
    """
    pass


@cli.command()
@click.option("--dev", is_flag=True, help="Enable development mode with auto-reload")
@click.option("--port", type=int, help="Override server port")
@click.option("--host", type=str, help="Override server host")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    show_default=True,
    help="Logging level",
)
def server(dev: bool, port: int | None, host: str | None, log_level: str) -> None:
    """Start the webhook server."""
    import uvicorn

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = get_settings()

    if not any(settings.channels.values()):
        click.secho("Warning: no Discord webhook URLs configured.", fg="yellow")
        click.echo(f"Set DISCORD_WEBHOOK_<REPO> or add channels to {get_config_file()}")

    # Use overrides or config values
    server_port = port or settings.server.port
    server_host = host or settings.server.host

    click.secho(f"Starting Hookcord server on {server_host}:{server_port}", fg="green")

    if dev:
        click.echo("Development mode enabled (auto-reload)")

    uvicorn.run(
        "hookcord.server.app:app",
        host=server_host,
        port=server_port,
        reload=dev,
        workers=1 if dev else settings.server.workers,
        log_level=log_level,
    )


@cli.command()
def channels() -> None:
    """List repositories and their Discord channel status."""
    settings = get_settings()
    if not settings.channels:
        click.secho("No channels configured", fg="yellow")
        return

    for repo, url in sorted(settings.channels.items()):
        if url:
            click.echo(f"  {repo}: {click.style('configured', fg='green')}")
        else:
            click.echo(f"  {repo}: {click.style('NOT CONFIGURED', fg='red')}")


@cli.command()
def users() -> None:
    """List GitHub users mapped to Discord IDs."""
    directory = get_identity_directory()
    if not directory:
        click.secho("No users mapped. Set DISCORD_USER_<GITHUB_USERNAME>=<id>.", fg="yellow")
        return

    for username in sorted(directory):
        click.echo(f"  {username} -> {directory[username]}")


@cli.command()
@click.argument("event")
@click.argument("payload_file", type=click.File("r"))
def preview(event: str, payload_file) -> None:
    """Show who would be mentioned for an event, without sending anything.

    \b
    Example:
      hookcord preview pull_request payload.json
    """
    try:
        payload = json.load(payload_file)
    except json.JSONDecodeError as e:
        click.secho(f"Error: invalid JSON in {payload_file.name}: {e}", fg="red")
        sys.exit(1)

    if not is_pr_event(event, payload):
        click.echo(f"{event}: not a pull request event, no mentions")
        return

    info = extract_mention_info(event, payload)
    mentionees = select_mentionees(info)
    formatter = MentionFormatter(get_identity_directory())

    click.echo(f"{event}: pull request event")
    click.echo(f"  PR author:          {info.pr_author or '-'}")
    click.echo(f"  Actor:              {info.actor or '-'}")
    click.echo(f"  Requested reviewer: {info.requested_reviewer or '-'}")
    click.echo(f"  Mentionees:         {', '.join(mentionees) or '-'}")
    click.echo(f"  Mention text:       {formatter.render(mentionees) or '-'}")


if __name__ == "__main__":
    cli()
