from __future__ import annotations

import typer
from hydrus_client import HydrusClientError, TagAction

from .. import console
from ..config import load_config
from ..http import make_client, report_error

app = typer.Typer(help="Add and inspect tags.")


def _parse_action(value: str) -> TagAction:
    text = value.strip()
    if text.isdigit():
        try:
            return TagAction(int(text))
        except ValueError:
            pass
    else:
        try:
            return TagAction[text.upper().replace("-", "_")]
        except KeyError:
            pass
    console.err(f"Unknown tag action: {value}. Use one of: {', '.join(a.name.lower() for a in TagAction)}.")
    raise typer.Exit(code=2)


@app.command("add")
def add_tags(
        hashes: list[str] = typer.Argument(..., help="SHA256 hashes of the files to tag."),
        service: str = typer.Option("my tags", "--service", "-s", help="Tag service name."),
        tag: list[str] = typer.Option(..., "--tag", "-t", help="Tag to apply (repeatable)."),
        action: str | None = typer.Option(
            None,
            "--action",
            help="Content update action (add_to_local, delete_from_local, pend_to_repository, ...).",
        ),
        siblings: bool | None = typer.Option(
            None,
            "--siblings/--no-siblings",
            help="Apply siblings and parents.",
        ),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    kwargs: dict = {"add_siblings_and_parents": siblings}
    if action is None:
        kwargs["service_names_to_tags"] = {service: tag}
    else:
        kwargs["service_names_to_actions_to_tags"] = {service: {_parse_action(action): tag}}

    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        client.add_tags(hashes, **kwargs)
    except HydrusClientError as e:
        report_error("add_tags", e)
    finally:
        client.close()
    console.ok(f"Tagged {len(hashes)} file(s) on '{service}'.")


@app.command("clean")
def clean_tags(
        tags: list[str] = typer.Argument(..., help="Tags to normalise."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.clean_tags(tags)
    except HydrusClientError as e:
        report_error("clean_tags", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    for cleaned in data.get("tags") or []:
        console.print(str(cleaned))


@app.command("services")
def tag_services(
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_tag_services()
    except HydrusClientError as e:
        report_error("get_tag_services", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    rows = []
    for kind in ("local_tags", "tag_repositories"):
        for name in data.get(kind) or []:
            rows.append([name, kind.replace("_", " ")])
    console.print_table("Tag services", ["name", "kind"], rows)
