from __future__ import annotations

from pathlib import Path

import typer
from hydrus_client import FileStatus, HydrusClientError

from .. import console
from ..config import load_config
from ..formatting import metadata_rows
from ..http import make_client, report_error

app = typer.Typer(help="Import, search and fetch files.")


@app.command("add")
def add_file(
        path: Path = typer.Argument(..., help="File to import."),
        upload: bool = typer.Option(
            False,
            "--upload",
            help="Send the file bytes instead of the path (for a hydrus running on another machine).",
        ),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    if upload:
        try:
            content = path.read_bytes()
        except OSError as exc:
            console.err(f"Cannot read {path}: {exc}")
            raise typer.Exit(code=2)
        kwargs = {"content": content}
    else:
        kwargs = {"path": str(path.expanduser().resolve())}

    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.add_file(**kwargs)
    except HydrusClientError as e:
        report_error("add_file", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    status = data.get("status")
    try:
        label = FileStatus(int(status)).name.lower()
    except (TypeError, ValueError):
        label = str(status)
    note = data.get("note") or ""
    if status in (FileStatus.SUCCESSFUL, FileStatus.ALREADY_IN_DATABASE):
        console.ok(f"{label}: {data.get('hash')}")
    else:
        console.err(f"{label}: {note}".rstrip(": "))
        raise typer.Exit(code=1)


@app.command("search")
def search_files(
        tags: list[str] = typer.Argument(..., help="Tags to search for."),
        inbox: bool = typer.Option(False, "--inbox", help="Limit to system:inbox."),
        archive: bool = typer.Option(False, "--archive", help="Limit to system:archive."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.search_files(tags, system_inbox=inbox, system_archive=archive)
    except HydrusClientError as e:
        report_error("search_files", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    file_ids = data.get("file_ids") or []
    for file_id in file_ids:
        console.print(str(file_id))
    console.info(f"{len(file_ids)} file(s)")


@app.command("metadata")
def file_metadata(
        file_id: list[int] | None = typer.Option(None, "--file-id", help="File id (repeatable)."),
        file_hash: list[str] | None = typer.Option(None, "--hash", help="SHA256 hash (repeatable)."),
        ids_only: bool = typer.Option(False, "--ids-only", help="Only return file ids and hashes."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        data = client.get_file_metadata(
            file_ids=file_id or None,
            hashes=file_hash or None,
            only_return_identifiers=True if ids_only else None,
        )
    except HydrusClientError as e:
        report_error("file_metadata", e)
    finally:
        client.close()

    if json_out:
        console.print_json(data)
        return
    console.print_table(
        "File metadata",
        ["id", "hash", "mime", "size", "resolution", "duration", "modified"],
        metadata_rows(data.get("metadata") or []),
    )


def _download(kind: str, file_id: int | None, file_hash: str | None, output: Path | None,
              address: str | None, key: str | None, profile: str | None) -> None:
    client = make_client(load_config(), profile=profile, address_override=address, key_override=key)
    try:
        if kind == "thumbnail":
            content = client.get_thumbnail(file_id=file_id, file_hash=file_hash)
        else:
            content = client.get_file(file_id=file_id, file_hash=file_hash)
    except HydrusClientError as e:
        report_error(f"get_{kind}", e)
    finally:
        client.close()

    if output is None:
        output = Path(f"{file_hash or file_id}{'.thumbnail' if kind == 'thumbnail' else ''}")
    output.write_bytes(content)
    console.ok(f"Wrote {len(content)} bytes to {output}")


@app.command("get")
def get_file(
        file_id: int | None = typer.Option(None, "--file-id", help="File id."),
        file_hash: str | None = typer.Option(None, "--hash", help="SHA256 hash."),
        output: Path | None = typer.Option(None, "--output", "-o", help="Destination file."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    _download("file", file_id, file_hash, output, address, key, profile)


@app.command("thumbnail")
def get_thumbnail(
        file_id: int | None = typer.Option(None, "--file-id", help="File id."),
        file_hash: str | None = typer.Option(None, "--hash", help="SHA256 hash."),
        output: Path | None = typer.Option(None, "--output", "-o", help="Destination file."),
        address: str | None = typer.Option(None, "--address", help="Override Client API address."),
        key: str | None = typer.Option(None, "--key", help="Override access key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile."),
):
    _download("thumbnail", file_id, file_hash, output, address, key, profile)
