"""FastAPI application and routes."""

import json
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import BackgroundTasks, Depends, FastAPI, Header, Request, Response
from fastapi.responses import PlainTextResponse

from hookcord import __version__
from hookcord.discord.embeds import build_embed
from hookcord.env import Settings, get_settings
from hookcord.identity import IdentityDirectory, get_identity_directory
from hookcord.mentions import MentionFormatter
from hookcord.server.dispatcher import (
    Notification,
    deliver,
    get_event_name,
    get_repo_name,
    resolve_mentions,
)
from hookcord.server.ratelimit import RATE_LIMIT_MESSAGE, get_rate_limiter

logger = logging.getLogger(__name__)


def log_channel_status(settings: Settings) -> None:
    """Log which repositories have a Discord webhook configured."""
    if not settings.channels:
        logger.warning("No Discord channels configured")
        return

    logger.info("Configured webhooks:")
    for repo, url in settings.channels.items():
        logger.info(f"  {repo}: {'configured' if url else 'NOT CONFIGURED'}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    directory = get_identity_directory()
    log_channel_status(settings)
    logger.info(
        f"Hookcord server started ({len(directory)} users mapped, "
        f"rate limit {settings.rate_limit.max} requests per "
        f"{settings.rate_limit.window_ms / 60000:g} minutes)"
    )

    yield

    logger.info("Hookcord server stopped")


app = FastAPI(
    title="Hookcord",
    description="GitHub webhook relay for Discord",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def rate_limit(request: Request, call_next):
    """Reject clients exceeding the configured request rate."""
    client_ip = request.client.host if request.client else "unknown"
    result = get_rate_limiter().hit(client_ip)

    if not result.allowed:
        logger.warning(f"Rate limit exceeded for {client_ip}")
        return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429, headers=result.headers())

    response = await call_next(request)
    response.headers.update(result.headers())
    return response


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/github/webhook")
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Annotated[Settings, Depends(get_settings)],
    directory: Annotated[IdentityDirectory, Depends(get_identity_directory)],
    x_github_event: Annotated[str | None, Header()] = None,
):
    """Relay a GitHub webhook event to the repository's Discord channel.

    GitHub always gets a 200 once the payload is accepted, whatever
    happens to the Discord delivery.
    """
    event = get_event_name(x_github_event)
    logger.info(f"Incoming webhook: event={event}")

    # GitHub sends ping when the webhook is created
    if event == "ping":
        logger.info("Ping received, responding with pong")
        return PlainTextResponse("pong")

    if not event:
        logger.warning("No event header found")
        return Response(status_code=400, content="Missing event header")

    # Parse payload
    try:
        payload = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Response(status_code=400, content="Invalid JSON")
    if not isinstance(payload, dict):
        return Response(status_code=400, content="Payload must be a JSON object")

    logger.debug(f"Full payload: {json.dumps(payload, indent=2)}")

    repo_name = get_repo_name(payload)
    webhook_url = settings.webhook_url_for(repo_name)
    logger.info(f"Repository: {repo_name}, webhook URL found: {bool(webhook_url)}")

    if not webhook_url:
        logger.info(
            f'Repo "{repo_name}" not mapped or webhook URL not configured '
            f"(available: {', '.join(settings.channels) or 'none'})"
        )
        return PlainTextResponse("Repo not mapped")

    embed = build_embed(event, payload)
    if not embed:
        logger.info(f"No embed for {event} (event ignored)")
        return PlainTextResponse("OK")

    formatter = MentionFormatter(directory)
    content = resolve_mentions(event, payload, formatter)

    background_tasks.add_task(
        deliver,
        Notification(repo=repo_name, webhook_url=webhook_url, content=content, embed=embed),
    )

    return PlainTextResponse("OK")
