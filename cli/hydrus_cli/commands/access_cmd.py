from __future__ import annotations

import typer
from hydrus_client import HydrusClientError, Permission
from hydrus_client.constants import parse_permissions

from .. import console
from ..compat import ensure_api_compatibility
from ..config import load_config, save_config
from ..http import make_client, report_error

app = typer.Typer(help="Access management: API version, session and access keys.")


@app.command("version")
def api_version(
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), address_override=address)
    try:
        data = client.api_version()
    except HydrusClientError as e:
        report_error("api_version", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    hydrus_version = data.get("hydrus_version")
    suffix = f" (hydrus v{hydrus_version})" if hydrus_version else ""
    console.print(f"API version {data.get('version')}{suffix}")


@app.command("check")
def api_check(
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        warn_only: bool = typer.Option(False, "--warn-only", help="Do not fail on a version mismatch."),
):
    client = make_client(load_config(), address_override=address)
    try:
        result = ensure_api_compatibility(client, warn_only=warn_only)
    finally:
        client.close()
    if result is None:
        raise typer.Exit(code=2)


@app.command("session-key")
def session_key(
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.session_key()
    except HydrusClientError as e:
        report_error("session_key", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.print(str(data.get("session_key") or ""))


@app.command("verify")
def verify_access_key(
        check_key: str | None = typer.Argument(None, help="Key to verify instead of the configured one."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address)
    try:
        data = client.verify_access_key(check_key)
    except HydrusClientError as e:
        report_error("verify_access_key", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.ok(str(data.get("human_description") or "Access key is valid."))
    permissions = data.get("basic_permissions") or []
    names = []
    for value in permissions:
        try:
            names.append(Permission(int(value)).name.lower())
        except (TypeError, ValueError):
            names.append(str(value))
    if names:
        console.info("permissions: " + ", ".join(names))


@app.command("request")
def request_permissions(
        name: str = typer.Argument(..., help="Descriptive name of the program requesting access."),
        permission: list[str] | None = typer.Option(
            None,
            "--permission",
            "-p",
            help="Permission id or name (import_urls, import_files, add_tags, search_files, "
                 "manage_pages, manage_cookies). Repeatable; default is all.",
        ),
        save: bool = typer.Option(False, "--save", help="Store the returned access key in the config."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
):
    try:
        permissions = parse_permissions(permission) if permission else list(Permission)
    except HydrusClientError as e:
        report_error("request_new_permissions", e)

    cfg = load_config()
    client = make_client(cfg, address_override=address, key_override="")
    try:
        data = client.request_new_permissions(name, permissions)
    except HydrusClientError as e:
        report_error("request_new_permissions", e)
    finally:
        client.close()

    access_key = str(data.get("access_key") or "")
    if save and access_key:
        cfg.access_key = access_key
        path = save_config(cfg)
        console.ok(f"Access key saved: {path}")
        return
    console.print(access_key)
