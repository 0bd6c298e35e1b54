from __future__ import annotations

import typer
from hydrus_client import HydrusClientError

from .. import console
from ..config import load_config
from ..formatting import iter_pages, page_type_label
from ..http import make_client, report_error

app = typer.Typer(help="Inspect and focus pages of the client UI.")


@app.command("list")
def list_pages(
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_pages()
    except HydrusClientError as e:
        report_error("get_pages", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    root = data.get("pages")
    if not isinstance(root, dict):
        console.info("No pages.")
        return
    for depth, page in iter_pages(root):
        marker = "*" if page.get("selected") else " "
        console.print(
            f"{marker} {'  ' * depth}{page.get('name')} [{page_type_label(page.get('page_type'))}] {page.get('page_key')}",
            markup=False,
        )


@app.command("info")
def page_info(
        page_key: str = typer.Argument(..., help="Page key from `hydrus pages list`."),
        simple: bool | None = typer.Option(None, "--simple/--full", help="Simple or full page description."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_page_info(page_key, simple=simple)
    except HydrusClientError as e:
        report_error("get_page_info", e)
    finally:
        client.close()
    console.print_json(data)


@app.command("focus")
def focus_page(
        page_key: str = typer.Argument(..., help="Page key from `hydrus pages list`."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        client.focus_page(page_key)
    except HydrusClientError as e:
        report_error("focus_page", e)
    finally:
        client.close()
    console.ok(f"Focused page {page_key}.")
