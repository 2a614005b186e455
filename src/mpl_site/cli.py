"""Command line entry point for browsing and administering the MPL site.

Usage:
    mpl-site winners
    mpl-site login --password ...
    mpl-site upload-gallery photo.jpg --category matches --season 12

Exit codes:
    0 - Success
    1 - At least one error was reported
"""

import argparse
import asyncio
import getpass
import logging
import mimetypes
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from mpl_site.app_logging import configure_logging
from mpl_site.containers import SiteContainer, build_container
from mpl_site.domain.live_scores import MATCH_TYPES, LiveScoreDraft
from mpl_site.domain.uploads import PendingUpload
from mpl_site.domain.winners import WinnerDraft
from mpl_site.services.auth_gate import ADMIN_PATH
from mpl_site.services.gallery import ALL_CATEGORIES
from mpl_site.services.notifications import Notification

Command = Callable[[SiteContainer, argparse.Namespace], Awaitable[None]]


def _print_notification(notification: Notification) -> None:
    stream = sys.stderr if notification.level in {"error", "reauth"} else sys.stdout
    print(f"[{notification.level}] {notification.message}", file=stream)


def _read_upload(path: Path) -> PendingUpload:
    content_type, _ = mimetypes.guess_type(path.name)
    return PendingUpload(
        filename=path.name,
        content_type=content_type or "application/octet-stream",
        content=path.read_bytes(),
    )


def _season_arg(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _always(_: str) -> bool:
    return True


async def _require_admin(container: SiteContainer) -> bool:
    await container.gate.navigate(ADMIN_PATH)
    if not container.gate.is_admin:
        container.notifier.reauth("Admin access required. Run `mpl-site login`.")
        return False
    return True


async def _login(container: SiteContainer, args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Admin password: ")
    await container.login_view.submit(password)


async def _logout(container: SiteContainer, args: argparse.Namespace) -> None:
    container.admin_panel_view.logout()


async def _verify(container: SiteContainer, args: argparse.Namespace) -> None:
    state = await container.gate.navigate(ADMIN_PATH)
    print(state.value)


async def _winners(container: SiteContainer, args: argparse.Namespace) -> None:
    await container.winners_view.load()
    for winner in container.winners.items:
        print(f"Season {winner.season}: {winner.team_name}")


async def _add_season(container: SiteContainer, args: argparse.Namespace) -> None:
    if not await _require_admin(container):
        return
    await container.winners_view.load()
    await container.winners_view.add_season(
        WinnerDraft(
            season=args.season,
            team_name=args.team,
            captain=args.captain,
            runner_up=args.runner_up,
            third_place=args.third_place,
            highlights=args.highlights,
        )
    )


async def _gallery(container: SiteContainer, args: argparse.Namespace) -> None:
    view = container.gallery_view
    view.active_tab = args.category
    view.selected_season = args.season
    await view.load()
    for image in view.visible_images():
        print(f"{image.id}\t{image.category}\t{image.title}\t{image.image_url}")


async def _upload_gallery(container: SiteContainer, args: argparse.Namespace) -> None:
    if not await _require_admin(container):
        return
    await container.admin_panel_view.upload(
        _read_upload(args.file),
        folder="gallery",
        title=args.title or "",
        category=args.category,
        season=args.season,
    )


async def _upload_winner(container: SiteContainer, args: argparse.Namespace) -> None:
    if not await _require_admin(container):
        return
    await container.winners_view.load()
    await container.winners_view.upload_image(_read_upload(args.file), args.season)


async def _delete_image(container: SiteContainer, args: argparse.Namespace) -> None:
    if not await _require_admin(container):
        return
    await container.gallery_view.load()
    await container.gallery_view.delete(args.image_id, _always)


async def _sponsors(container: SiteContainer, args: argparse.Namespace) -> None:
    await container.sponsors_view.load()
    for sponsor in container.sponsors.items:
        print(
            f"{sponsor.priority}. {sponsor.award_name}: {sponsor.sponsor_name}"
            f" ({sponsor.sponsor_type})"
        )


async def _live_scores(container: SiteContainer, args: argparse.Namespace) -> None:
    await container.home_view.load()
    for link in container.live_scores.items:
        print(f"{link.id}\t{link.match_type}\t{link.title}\t{link.url}")


async def _add_live_score(container: SiteContainer, args: argparse.Namespace) -> None:
    if not await _require_admin(container):
        return
    await container.home_view.load()
    draft = LiveScoreDraft(
        title=args.title,
        url=args.url,
        description=args.description,
        match_type=args.match_type,
        season=args.season or container.home_view.next_season,
        date=args.date,
    )
    await container.home_view.save_link(draft)


async def _delete_live_score(
    container: SiteContainer, args: argparse.Namespace
) -> None:
    if not await _require_admin(container):
        return
    await container.home_view.load()
    await container.home_view.delete_link(args.link_id, _always)


async def _contacts(container: SiteContainer, args: argparse.Namespace) -> None:
    await container.contact_view.load()
    for contact in container.contact_view.organizers:
        print(f"{contact.name}\t{contact.phone}")


COMMANDS: dict[str, Command] = {
    "login": _login,
    "logout": _logout,
    "verify": _verify,
    "winners": _winners,
    "add-season": _add_season,
    "gallery": _gallery,
    "upload-gallery": _upload_gallery,
    "upload-winner": _upload_winner,
    "delete-image": _delete_image,
    "sponsors": _sponsors,
    "live-scores": _live_scores,
    "add-live-score": _add_live_score,
    "delete-live-score": _delete_live_score,
    "contacts": _contacts,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpl-site", description="Browse and administer the MPL website."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logs on stderr"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Start an admin session")
    login.add_argument("--password", help="Admin password (prompted if omitted)")
    commands.add_parser("logout", help="End the admin session")
    commands.add_parser("verify", help="Check the stored admin token")

    commands.add_parser("winners", help="List season winners")
    add_season = commands.add_parser("add-season", help="Add a season winner")
    add_season.add_argument("season", type=int)
    add_season.add_argument("team")
    add_season.add_argument("--captain", default="")
    add_season.add_argument("--runner-up", default="")
    add_season.add_argument("--third-place", default="")
    add_season.add_argument("--highlights", default="")

    gallery = commands.add_parser("gallery", help="List gallery images")
    gallery.add_argument("--category", default=ALL_CATEGORIES)
    gallery.add_argument("--season", type=int)

    upload_gallery = commands.add_parser(
        "upload-gallery", help="Upload an image to the gallery"
    )
    upload_gallery.add_argument("file", type=Path)
    upload_gallery.add_argument("--title")
    upload_gallery.add_argument("--category", default="general")
    upload_gallery.add_argument("--season", type=int)

    upload_winner = commands.add_parser(
        "upload-winner", help="Upload a season's winner photo"
    )
    upload_winner.add_argument("season", type=int)
    upload_winner.add_argument("file", type=Path)

    delete_image = commands.add_parser("delete-image", help="Delete a gallery image")
    delete_image.add_argument("image_id")

    commands.add_parser("sponsors", help="List sponsors")
    commands.add_parser("live-scores", help="List live score links")
    add_link = commands.add_parser("add-live-score", help="Add a live score link")
    add_link.add_argument("title")
    add_link.add_argument("url")
    add_link.add_argument("--description", default="")
    add_link.add_argument("--match-type", choices=MATCH_TYPES, default="upcoming")
    add_link.add_argument("--season", type=_season_arg)
    add_link.add_argument("--date", default="")
    delete_link = commands.add_parser(
        "delete-live-score", help="Delete a live score link"
    )
    delete_link.add_argument("link_id")

    commands.add_parser("contacts", help="List organizer contacts")
    return parser


async def _run(container: SiteContainer, args: argparse.Namespace) -> int:
    try:
        await COMMANDS[args.command](container, args)
    finally:
        await container.close_resources()
    return 1 if container.notifier.errors else 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run one command."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    container = build_container()
    container.notifier.subscribe(_print_notification)
    return asyncio.run(_run(container, args))


if __name__ == "__main__":
    raise SystemExit(main())
