from __future__ import annotations

import os

import typer

from .. import console
from ..config import ProfileConfig, config_path, default_config, load_config, normalize_address, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/hydrus/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        address: str = typer.Option(
            ...,
            "--address",
            prompt="Client API address",
            help="Client API address like http://127.0.0.1:45869",
        ),
        key: str = typer.Option("", "--key", help="Client API access key."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.address = normalize_address(address, warn=True)
    if not cfg.address:
        console.err("Address cannot be empty.")
        raise typer.Exit(code=2)
    cfg.access_key = key.strip()
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    key_state = "(set)" if cfg.access_key else "(empty)"
    timeout = cfg.timeout_s if cfg.timeout_s is not None else "(transport default)"
    console.print(f"address={cfg.address} access_key={key_state} timeout_s={timeout}")
    for name, prof in cfg.profiles.items():
        prof_key = "(set)" if prof.access_key else "(empty)"
        console.print(f"profile {name}: address={prof.address or '-'} access_key={prof_key}")


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (address, access_key, timeout_s)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "address":
        console.print(cfg.address)
        return
    if k == "access_key":
        console.print(cfg.access_key)
        return
    if k == "timeout_s":
        console.print("" if cfg.timeout_s is None else str(cfg.timeout_s))
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        address: str | None = typer.Option(None, "--address", help="Set Client API address."),
        key: str | None = typer.Option(None, "--key", help="Set Client API access key."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds (0 clears it)."),
        profile: str | None = typer.Option(None, "--profile", help="Write address/key into a named profile."),
):
    cfg = load_config()
    if profile:
        prof = cfg.profiles.setdefault(profile, ProfileConfig())
        if address is not None:
            prof.address = normalize_address(address, warn=True)
        if key is not None:
            prof.access_key = key.strip()
    else:
        if address is not None:
            cfg.address = normalize_address(address, warn=True)
        if key is not None:
            cfg.access_key = key.strip()
    if timeout_s is not None:
        cfg.timeout_s = timeout_s if timeout_s > 0 else None
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
