"""Terminal front end for the profile editor.

Examples:
    profile-editor show
    profile-editor edit --avatar ./me.png
    profile-editor --base-url http://localhost:8000 show
"""

import asyncio
import mimetypes
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from core.config import settings
from domain.entities.profile import SOCIAL_PLATFORMS, Profile
from presentation.api_client import ApiError, AvatarFile, ProfileApiClient
from presentation.editor import EditorMode, ProfileEditor
from presentation.forms import ProfileFormValues

console = Console()

app = typer.Typer(
    name="profile-editor",
    help="View and edit the profile served by the profile API.",
    no_args_is_help=True,
)


def make_client(base_url: str) -> ProfileApiClient:
    """Build the API client (patched in tests)."""
    return ProfileApiClient(base_url)


def notify(level: str, message: str) -> None:
    style = "green" if level == "success" else "red"
    console.print(f"[{style}]{message}[/{style}]")


def render_profile(profile: Profile) -> Panel:
    """Read view of a saved profile."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()

    table.add_row("Name", profile.name)
    table.add_row("Email", profile.email)
    table.add_row("Bio", profile.bio or "[dim]-[/dim]")
    table.add_row("Avatar", profile.avatar_url or "[dim]-[/dim]")
    table.add_row("Skills", ", ".join(profile.skills) or "[dim]-[/dim]")
    for platform, link in profile.social_links.to_dict().items():
        table.add_row(platform.capitalize(), link)
    table.add_row("Updated", profile.updated_at.isoformat(timespec="seconds"))

    return Panel(table, title="Profile", subtitle=f"version {profile.version}")


def render_errors(errors: dict[str, str]) -> Table:
    table = Table(title="Please fix the following", show_header=True, header_style="bold red")
    table.add_column("Field")
    table.add_column("Problem")
    for field_name, message in errors.items():
        table.add_row(field_name, message)
    return table


def prompt_form(values: ProfileFormValues) -> ProfileFormValues:
    """Edit view: ask for every field, prefilled with the current value."""
    name = typer.prompt("Name", default=values.name or None)
    email = typer.prompt("Email", default=values.email or None)
    bio = typer.prompt("Bio", default=values.bio, show_default=bool(values.bio))
    avatar_url = typer.prompt(
        "Avatar URL", default=values.avatar_url, show_default=bool(values.avatar_url)
    )
    skills = typer.prompt(
        "Skills (comma-separated)",
        default=", ".join(values.skills),
        show_default=bool(values.skills),
    )
    social_links: dict[str, str] = {}
    for platform in SOCIAL_PLATFORMS:
        current = values.social_links.get(platform, "")
        link = typer.prompt(platform.capitalize(), default=current, show_default=bool(current))
        if link.strip():
            social_links[platform] = link.strip()

    return ProfileFormValues(
        name=name,
        email=email,
        bio=bio,
        avatar_url=avatar_url,
        skills=[skill.strip() for skill in skills.split(",") if skill.strip()],
        social_links=social_links,
    )


def read_avatar(path: Path) -> AvatarFile:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return AvatarFile(filename=path.name, data=path.read_bytes(), content_type=content_type)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: str = typer.Option(
        settings.profile_api_base_url,
        "--base-url",
        "-u",
        envvar="PROFILE_API_BASE_URL",
        help="Profile API server",
    ),
) -> None:
    """Profile editor."""
    ctx.obj = base_url


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the profile."""

    async def _show() -> Profile:
        async with make_client(ctx.obj) as client:
            return await client.get_profile()

    profile = _run(_show())
    if profile.is_draft:
        console.print("[yellow]No profile yet.[/yellow] Run [bold]profile-editor edit[/bold] to create one.")
        return
    console.print(render_profile(profile))


@app.command()
def edit(
    ctx: typer.Context,
    avatar: Optional[Path] = typer.Option(
        None,
        "--avatar",
        "-a",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Image file to upload as the avatar",
    ),
) -> None:
    """Edit the profile and save it."""
    avatar_file = read_avatar(avatar) if avatar else None

    async def _edit() -> bool:
        async with make_client(ctx.obj) as client:
            editor = ProfileEditor(client, notifier=notify)
            await editor.load()
            values = editor.start_editing()
            while True:
                values = prompt_form(values)
                if await editor.submit(values, avatar_file):
                    return True
                if editor.errors:
                    console.print(render_errors(editor.errors))
                elif not editor.profile.is_draft:
                    # Show what the server holds now; the next submit uses its version
                    console.print(render_profile(editor.profile))
                if editor.mode is not EditorMode.EDIT or not typer.confirm(
                    "Try again?", default=True
                ):
                    return False

    saved = _run(_edit())
    if not saved:
        raise typer.Exit(code=1)


def _run(coro):  # type: ignore[no-untyped-def]
    try:
        return asyncio.run(coro)
    except ApiError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e
    except httpx.HTTPError as e:
        console.print(f"[red]Error:[/red] could not reach the profile API ({e})")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
