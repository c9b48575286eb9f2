#!/usr/bin/env python3
"""
zkclaim.cli
===========

Command-line shell around the claim validator.

Commands
--------
- verify   : check a Groth16 proof against its public inputs only
- claim    : validate a claim from explicit address / resolver / email
- command  : validate a claim from the free-text command in the email
- inspect  : decode the named public-input fields (email, command, pubkey hash)

Every failure is reported on stderr as one line and mapped to a distinct
exit status (see `zkclaim.errors.EXIT_CODES`).

Examples:
  zkclaim claim -v fixtures/vkey.json -p fixtures/proof.json -i fixtures/public.json \\
      -d 0ea9c777dc7110e5a9e89b13f0cfc540e3845ba120b2b6dc24024d61488d4788 \\
      -a 0xafBD210c60dD651892a61804A989eEF7bD63CBA0 -r resolver.eth thezdev1@gmail.com
  zkclaim command -v vkey.json -p proof.json -i public.json -d <hash> thezdev1@gmail.com \\
      "Claim ENS name for address 0xafBD210c60dD651892a61804A989eEF7bD63CBA0 with resolver resolver.eth"
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from . import config as zconfig
from . import logging as zlog
from .adapters.snarkjs_loader import load_public_inputs, load_verification_data
from .claim.layout import Layout
from .claim.validator import validate_direct, validate_from_command
from .errors import ClaimError, ProofRejected, VerificationError, exit_code_for
from .verifiers import default_verifier
from .version import runtime_banner

app = typer.Typer(
    name="zkclaim",
    help="Validate ENS claims authorized by zk-email Groth16 proofs",
    no_args_is_help=True,
    add_completion=False,
)

log = zlog.get_logger("zkclaim.cli")


class _State:
    cfg: zconfig.ClaimConfig = zconfig.ClaimConfig()
    json_out: bool = False


_state = _State()


def _normalize_hash(h: str) -> str:
    s = h.strip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    return s.lower()


def _report_error(err: ClaimError) -> None:
    if _state.json_out:
        typer.echo(json.dumps({"ok": False, "error": err.to_dict(include_cause=True)}))
    else:
        typer.echo(f"[{err.kind}] {err}", err=True)
    raise typer.Exit(exit_code_for(err))


def _run(fn: Callable[[], Any]) -> Any:
    try:
        return fn()
    except ClaimError as e:
        _report_error(e)


def _ok(**fields: Any) -> None:
    if _state.json_out:
        typer.echo(json.dumps({"ok": True, **fields}, sort_keys=True))
    else:
        typer.echo("OK")


def _layout() -> Layout:
    return _run(_state.cfg.layout)


def _load(vkey: Path, proof: Path, inp: Path):
    layout = _layout()
    return _run(
        lambda: load_verification_data(
            vkey, proof, inp, layout, nul_policy=_state.cfg.nul_policy  # type: ignore[arg-type]
        )
    )


def _version_cb(value: bool) -> None:
    if value:
        typer.echo(runtime_banner())
        raise typer.Exit(0)


@app.callback()
def _main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="TOML/JSON config file (env ZKCLAIM_* overrides it)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--text-logs", help="Force JSON or text log lines"
    ),
    json_out: bool = typer.Option(False, "--json", help="Print machine-readable results"),
    version: bool = typer.Option(
        False, "--version", help="Print version and exit", is_eager=True, callback=_version_cb
    ),
) -> None:
    fmt = None if json_logs is None else ("json" if json_logs else "text")
    _state.json_out = json_out
    _state.cfg = _run(lambda: zconfig.load(config, log_level=log_level, log_format=fmt))
    zlog.configure(json=_state.cfg.json_logs, level=_state.cfg.log_level)


@app.command("verify")
def verify_cmd(
    verification_key: Path = typer.Option(..., "--verification-key", "-v", help="verification_key.json"),
    proof: Path = typer.Option(..., "--proof", "-p", help="proof.json"),
    inp: Path = typer.Option(..., "--inp", "-i", help="public.json"),
) -> None:
    """Verify a proof against its public inputs (no claim checks)."""
    vk, pf, inputs = _load(verification_key, proof, inp)

    def _verify() -> None:
        try:
            ok = default_verifier().verify(vk, inputs.as_ints(), pf)
        except Exception as e:
            raise VerificationError(e) from e
        if not ok:
            raise ProofRejected()

    _run(_verify)
    log.info("proof verified", extra={"n_public": len(inputs)})
    _ok()


@app.command("claim")
def claim_cmd(
    email: str = typer.Argument(..., help="Sender email address"),
    verification_key: Path = typer.Option(..., "--verification-key", "-v"),
    proof: Path = typer.Option(..., "--proof", "-p"),
    inp: Path = typer.Option(..., "--inp", "-i"),
    dkim_pk: str = typer.Option(..., "--dkim-pk", "-d", help="DKIM public key hash (hex)"),
    address: str = typer.Option(..., "--address", "-a", help="Address the ENS name is claimed for"),
    resolver: str = typer.Option(..., "--resolver", "-r", help="Resolver name or address"),
) -> None:
    """Validate a claim from explicit address and resolver."""
    vk, pf, inputs = _load(verification_key, proof, inp)
    _run(
        lambda: validate_direct(
            vk, pf, inputs, email, address, resolver, _normalize_hash(dkim_pk)
        )
    )
    _ok(email=email, address=address, resolver=resolver)


@app.command("command")
def command_cmd(
    email: str = typer.Argument(..., help="Sender email address"),
    command: str = typer.Argument(..., help='e.g. "Claim ENS name for address 0x... with resolver resolver.eth"'),
    verification_key: Path = typer.Option(..., "--verification-key", "-v"),
    proof: Path = typer.Option(..., "--proof", "-p"),
    inp: Path = typer.Option(..., "--inp", "-i"),
    dkim_pk: str = typer.Option(..., "--dkim-pk", "-d", help="DKIM public key hash (hex)"),
) -> None:
    """Validate a claim from the free-text command of the email."""
    vk, pf, inputs = _load(verification_key, proof, inp)
    _run(
        lambda: validate_from_command(
            vk, pf, inputs, email, command, _normalize_hash(dkim_pk)
        )
    )
    _ok(email=email, command=command)


@app.command("inspect")
def inspect_cmd(
    inp: Path = typer.Option(..., "--inp", "-i", help="public.json"),
) -> None:
    """Decode and print the named public-input fields."""
    layout = _layout()
    view = _run(lambda: load_public_inputs(inp, layout, nul_policy=_state.cfg.nul_policy))  # type: ignore[arg-type]

    decoded = {}
    for name in layout.fields:
        value = _run(lambda: view.read(name))
        decoded[name] = value.hex() if isinstance(value, bytes) else value

    if _state.json_out:
        typer.echo(json.dumps({"layout": layout.version, "fields": decoded}, sort_keys=True))
        return

    table = Table(title=f"Public inputs ({layout.version})", box=box.SIMPLE)
    table.add_column("Field")
    table.add_column("Range")
    table.add_column("Value", overflow="fold")
    for name, fs in layout.fields.items():
        table.add_row(name, f"{fs.offset}..{fs.end - 1}", decoded[name])
    Console(soft_wrap=True).print(table)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
