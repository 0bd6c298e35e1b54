from __future__ import annotations

import typer
from hydrus_client import HydrusClientError, UrlType

from .. import console
from ..config import load_config
from ..http import make_client, report_error

app = typer.Typer(help="Import URLs and manage URL/file associations.")


@app.command("files")
def url_files(
        url: str = typer.Argument(..., help="URL to look up."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_url_files(url)
    except HydrusClientError as e:
        report_error("get_url_files", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    statuses = data.get("url_file_statuses") or []
    console.print_table(
        f"Files for {data.get('normalised_url') or url}",
        ["hash", "status", "note"],
        [[s.get("hash"), s.get("status"), s.get("note")] for s in statuses],
    )


@app.command("info")
def url_info(
        url: str = typer.Argument(..., help="URL to inspect."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_url_info(url)
    except HydrusClientError as e:
        report_error("get_url_info", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    url_type = data.get("url_type")
    try:
        type_label = UrlType(int(url_type)).name.lower()
    except (TypeError, ValueError):
        type_label = str(data.get("url_type_string") or url_type)
    console.print(f"normalised_url={data.get('normalised_url')}")
    console.print(f"url_type={type_label} match_name={data.get('match_name')} can_parse={data.get('can_parse')}")


@app.command("add")
def add_url(
        url: str = typer.Argument(..., help="URL to import."),
        page_name: str | None = typer.Option(None, "--page-name", help="Destination page name."),
        page_key: str | None = typer.Option(None, "--page-key", help="Destination page key."),
        show: bool | None = typer.Option(None, "--show/--no-show", help="Show the destination page."),
        service: str = typer.Option("my tags", "--service", "-s", help="Tag service for --tag."),
        tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag for imported files (repeatable)."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.add_url(
            url,
            destination_page_name=page_name,
            destination_page_key=page_key,
            show_destination_page=show,
            service_names_to_tags={service: tag} if tag else None,
        )
    except HydrusClientError as e:
        report_error("add_url", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.ok(f"{data.get('human_result_text') or 'URL queued'}: {data.get('normalised_url') or url}")


@app.command("associate")
def associate_url(
        hashes: list[str] = typer.Argument(..., help="SHA256 hashes of the files to edit."),
        add: list[str] | None = typer.Option(None, "--add", help="URL to associate (repeatable)."),
        delete: list[str] | None = typer.Option(None, "--delete", help="URL to disassociate (repeatable)."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        client.associate_url(hashes, to_add=add or None, to_delete=delete or None)
    except HydrusClientError as e:
        report_error("associate_url", e)
    finally:
        client.close()
    console.ok(f"Updated URLs for {len(hashes)} file(s).")
