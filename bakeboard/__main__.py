"""BakeBoard command line. Allows python -m bakeboard <feed>."""

import argparse
import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from bakeboard.feeds.aggregation.dismissal import JsonDismissedStore
from bakeboard.feeds.hub import FeedConfigurationError, FeedHub
from bakeboard.feeds.http import SourceClientError
from bakeboard.settings import sources_status

FeedCommand = Callable[[FeedHub, argparse.Namespace], Awaitable[Any]]


def to_jsonable(value: Any) -> Any:
    """Convert feed results to JSON-ready data (camelCase keys)."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    return value


# =============================================================================
# COMMANDS
# =============================================================================


async def _games(hub: FeedHub, args: argparse.Namespace) -> Any:
    games = await hub.fetch_today_game_releases()
    return await hub.apply_dismissals(games, "games")


async def _movies_friday(hub: FeedHub, args: argparse.Namespace) -> Any:
    movies = await hub.fetch_upcoming_friday_movies()
    return await hub.apply_dismissals(movies, "movies")


async def _movies_now(hub: FeedHub, args: argparse.Namespace) -> Any:
    movies = await hub.fetch_now_playing_movies()
    return await hub.apply_dismissals(movies, "movies")


async def _filmography(hub: FeedHub, args: argparse.Namespace) -> Any:
    return await hub.fetch_director_filmography(args.person_id)


async def _albums(hub: FeedHub, args: argparse.Namespace) -> Any:
    albums = await hub.fetch_upcoming_friday_albums()
    return await hub.apply_dismissals(albums, "albums")


async def _charts(hub: FeedHub, args: argparse.Namespace) -> Any:
    return await hub.fetch_top_charts()


async def _books(hub: FeedHub, args: argparse.Namespace) -> Any:
    return await hub.search_books(args.query)


async def _weather(hub: FeedHub, args: argparse.Namespace) -> Any:
    return await hub.fetch_weather()


async def _preview(hub: FeedHub, args: argparse.Namespace) -> Any:
    return await hub.fetch_artist_top_preview(args.artist)


async def _spotify_auth_url(hub: FeedHub, args: argparse.Namespace) -> Any:
    if hub.spotify_auth is None:
        raise FeedConfigurationError("Spotify credentials are not configured")
    url, state = hub.spotify_auth.get_auth_url()
    return {"url": url, "state": state}


async def _spotify_callback(hub: FeedHub, args: argparse.Namespace) -> Any:
    if hub.spotify_auth is None:
        raise FeedConfigurationError("Spotify credentials are not configured")
    await hub.spotify_auth.exchange_code(args.code)
    return {"authenticated": True}


async def _dismiss(hub: FeedHub, args: argparse.Namespace) -> Any:
    store = hub.dismissed_store
    if not isinstance(store, JsonDismissedStore):
        raise FeedConfigurationError("Dismissed store is read-only")
    changed = await store.dismiss(args.category, args.item_id)
    return {"dismissed": changed}


async def _restore(hub: FeedHub, args: argparse.Namespace) -> Any:
    store = hub.dismissed_store
    if not isinstance(store, JsonDismissedStore):
        raise FeedConfigurationError("Dismissed store is read-only")
    changed = await store.restore(args.category, args.item_id)
    return {"restored": changed}


async def _status(hub: FeedHub, args: argparse.Namespace) -> Any:
    return sources_status(hub.config)


COMMANDS: dict[str, FeedCommand] = {
    "games": _games,
    "movies-friday": _movies_friday,
    "movies-now": _movies_now,
    "filmography": _filmography,
    "albums": _albums,
    "charts": _charts,
    "books": _books,
    "weather": _weather,
    "preview": _preview,
    "spotify-auth-url": _spotify_auth_url,
    "spotify-callback": _spotify_callback,
    "dismiss": _dismiss,
    "restore": _restore,
    "status": _status,
}


async def run_command(args: argparse.Namespace) -> Any:
    """Run one command against a fresh hub."""
    async with FeedHub() as hub:
        return await COMMANDS[args.command](hub, args)


# =============================================================================
# CLI
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m bakeboard",
        description="BakeBoard - release feeds for a personal dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bakeboard games                  # Today's game releases
  python -m bakeboard movies-friday          # This week's theatrical releases
  python -m bakeboard filmography 525        # Films directed by a TMDB person
  python -m bakeboard albums                 # Friday album releases
  python -m bakeboard charts                 # Last.fm top charts
  python -m bakeboard dismiss games 1942     # Hide a card
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("games", help="Games released today")
    subparsers.add_parser("movies-friday", help="Theatrical releases of the week")
    subparsers.add_parser("movies-now", help="Movies now playing")

    filmography_parser = subparsers.add_parser("filmography", help="Director filmography")
    filmography_parser.add_argument("person_id", type=int)

    subparsers.add_parser("albums", help="Albums out on the release Friday")
    subparsers.add_parser("charts", help="Last.fm top charts")

    books_parser = subparsers.add_parser("books", help="Open Library search")
    books_parser.add_argument("query")

    subparsers.add_parser("weather", help="Current weather")

    preview_parser = subparsers.add_parser("preview", help="Song preview for an artist")
    preview_parser.add_argument("artist")

    subparsers.add_parser("spotify-auth-url", help="Spotify authorization URL")
    callback_parser = subparsers.add_parser("spotify-callback", help="Store Spotify tokens")
    callback_parser.add_argument("code")

    for name, help_text in (("dismiss", "Hide a card"), ("restore", "Show a hidden card")):
        card_parser = subparsers.add_parser(name, help=help_text)
        card_parser.add_argument("category", choices=["games", "movies", "albums"])
        card_parser.add_argument("item_id")

    subparsers.add_parser("status", help="Configured sources")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        result = asyncio.run(run_command(args))
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted", file=sys.stderr)
        sys.exit(130)
    except (FeedConfigurationError, SourceClientError) as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
