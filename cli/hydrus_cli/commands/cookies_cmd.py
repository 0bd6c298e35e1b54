from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from hydrus_client import HydrusClientError

from .. import console
from ..config import load_config
from ..http import make_client, report_error

app = typer.Typer(help="Read and set the client's cookies.")


@app.command("get")
def get_cookies(
        domain: str = typer.Argument(..., help="Domain, e.g. gelbooru.com"),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_cookies(domain)
    except HydrusClientError as e:
        report_error("get_cookies", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    # each cookie is [name, value, domain, path, expires]
    console.print_table(
        f"Cookies for {domain}",
        ["name", "value", "domain", "path", "expires"],
        [(list(c) + [None] * 5)[:5] for c in data.get("cookies") or []],
    )


def _read_payload(source: str) -> object:
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        console.err(f"Cannot read {source}: {exc}")
        raise typer.Exit(code=2)
    try:
        return json.loads(text)
    except ValueError as exc:
        console.err(f"Invalid JSON in {source}: {exc}")
        raise typer.Exit(code=2)


@app.command("set")
def set_cookies(
        source: str = typer.Argument(
            ...,
            help='JSON file (or - for stdin) like {"cookies": [[name, value, domain, path, expires], ...]}.',
        ),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    payload = _read_payload(source)
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        client.set_cookies(payload)
    except HydrusClientError as e:
        report_error("set_cookies", e)
    finally:
        client.close()
    console.ok("Cookies updated.")
