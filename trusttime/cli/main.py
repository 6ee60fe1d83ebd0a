# trusttime/cli/main.py
"""
CLI for deriving a document's ledger address and checking its trusted timestamp.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from trusttime.address.codec import AddressCodec, address_for_file
from trusttime.config import TrustTimeConfig, load_config
from trusttime.core.errors import AddressNotSeenError, LedgerQueryError
from trusttime.core.canon import export_record
from trusttime.core.types import DocumentAddress, LedgerTimestamp
from trusttime.verify.ledger import LedgerClient, TimestampVerifier

app = typer.Typer(
    name="trusttime",
    help="Derive a document's ledger address and verify its trusted timestamp",
    add_completion=False,
)

console = Console()


def show_detail(document: DocumentAddress) -> None:
    table = Table(title="Address derivation")
    table.add_column("Step")
    table.add_column("Value")

    trace = document.detail
    table.add_row("document sha256", trace.document_sha256)
    table.add_row("h1 ripemd160", trace.ripemd160)
    table.add_row("h2 version + h1", trace.versioned)
    table.add_row("h3 sha256(h2)", trace.sha256_once)
    table.add_row("h4 sha256(h3)", trace.sha256_twice)
    table.add_row("checksum", trace.checksum)
    table.add_row("h5 h2 + checksum", trace.with_checksum)
    table.add_row("base58", trace.base58)

    console.print(table)


def run_verify(document: DocumentAddress, config: TrustTimeConfig) -> LedgerTimestamp:
    """Query the ledger for the earliest time the document's address was seen."""
    with LedgerClient(host=config.ledger_host, timeout=config.timeout) as client:
        return TimestampVerifier(client).verify_timestamp(document)


def print_json(text: str) -> None:
    console.print(text, soft_wrap=True, markup=False, highlight=False)


@app.command()
def main(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="File to generate address"),
    verify: bool = typer.Option(False, "--verify", "-v", help="To verify the trusted timestamp"),
    detail: bool = typer.Option(False, "--detail", "-d", help="Show every intermediate hash"),
    as_json: bool = typer.Option(False, "--json", help="Print the address record as canonical JSON"),
    host: Optional[str] = typer.Option(
        None, "--host", help="Ledger index base URL (overrides TRUSTTIME_LEDGER_HOST env var)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Ledger request timeout in seconds (overrides TRUSTTIME_TIMEOUT env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Generate the ledger address of a document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if file is None:
        console.print("[red]--file argument is required[/]")
        console.print("  Usage: trusttime --file <path> [--verify]")
        raise typer.Exit(1)

    try:
        config = load_config(host=host, timeout=timeout)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(1)

    result = address_for_file(file, AddressCodec(config.version_byte))
    if not result:
        console.print(f"Failed to read {file}: {result.error}", style="red", soft_wrap=True, markup=False)
        raise typer.Exit(1)

    document = result.address
    url = config.address_url(document.address)

    if not as_json:
        console.print(f"The address is : {document.address}", soft_wrap=True, highlight=False)
        console.print(f"The SHA256 of the document is : {document.sha256}", soft_wrap=True, highlight=False)
        console.print(f"The url is : {url}", soft_wrap=True, highlight=False)

    if detail and not as_json:
        show_detail(document)

    if not verify:
        if as_json:
            print_json(export_record(document.to_dict()))
        return

    try:
        stamp = run_verify(document, config)
    except AddressNotSeenError as e:
        console.print("[red]Fail to verify Trusted Timestamp[/]")
        console.print(f"[yellow]{e}[/]", soft_wrap=True)
        console.print("  Send a transaction to the address above to anchor the document.")
        raise typer.Exit(1)
    except LedgerQueryError as e:
        console.print("[red]Fail to verify Trusted Timestamp[/]")
        console.print(str(e), style="red", soft_wrap=True, markup=False)
        raise typer.Exit(1)

    if as_json:
        print_json(export_record(document.to_dict(), stamp.to_dict()))
    else:
        console.print(f"Document trusted timestamp found : {stamp.utc_string()}", soft_wrap=True, highlight=False)


if __name__ == "__main__":
    app()
