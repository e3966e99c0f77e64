#!/usr/bin/env python3
"""Contract converter CLI - reads YAML contracts and writes them back out.

Usage:
    # Convert and print the normalized contracts
    python main.py --input ./contracts/shouldReturnUser.yml

    # Resolve bodyFromFile references against another folder and save the result
    python main.py --input ./contracts/user.yml --resource-root ./bodies --output ./out/user.yml
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import settings
from converter import FileSystemResourceResolver, YamlContractConverter, body_matchers
from errors import ContractConversionError
from model import Contract, Side


console = Console()


def describe_contract(contract: Contract) -> List[str]:
    """Summary row for a contract: name, kind, header matchers, body matchers."""
    if contract.request is not None:
        kind = f"http {contract.request.method}"
        headers = [contract.request.headers, contract.response.headers]
        bodies = [(contract.request.body, Side.STUB), (contract.response.body, Side.TEST)]
    elif contract.is_messaging:
        kind = "messaging"
        headers = []
        bodies = []
        if contract.input is not None:
            headers.append(contract.input.message_headers)
            bodies.append((contract.input.message_body, Side.STUB))
        if contract.output_message is not None:
            headers.append(contract.output_message.headers)
            bodies.append((contract.output_message.body, Side.TEST))
    else:
        kind, headers, bodies = "placeholder", [], []
    header_matchers = sum(1 for h in headers for entry in h if not entry.value.is_literal)
    body_matcher_count = sum(len(body_matchers(body, side)) for body, side in bodies)
    return [escape(contract.name or "-"), kind, str(header_matchers), str(body_matcher_count)]


@click.command()
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML contract file"
)
@click.option(
    "--resource-root", "-r",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Folder for bodyFromFile lookups (default: the contract's folder)"
)
@click.option(
    "--output", "-o", "output_path",
    default=None,
    help="Write the converted YAML here instead of printing it"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help=f"Log level (default: {settings.log_level})"
)
def main(
    input_path: str,
    resource_root: Optional[str],
    output_path: Optional[str],
    log_level: Optional[str],
):
    """Contract converter: YAML documents <-> dual-value contract model.

    Converts every contract in the input file, prints a summary of the
    matchers found, and writes the contracts back in normalized YAML form.
    """
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    resolver = FileSystemResourceResolver(resource_root) if resource_root else None
    converter = YamlContractConverter(resolver)
    if not converter.is_accepted(input_path):
        console.print(f"[red]Error: {escape(input_path)} is not a YAML contract file[/red]")
        sys.exit(1)

    console.print(Panel.fit(f"[bold]Converting[/bold] {escape(input_path)}"), style="dim")
    try:
        contracts = converter.convert_from(input_path)
        yaml_text = converter.dump_yaml(converter.convert_to(contracts))
    except ContractConversionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"{len(contracts)} contract(s)")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Header matchers", justify="right")
    table.add_column("Body matchers", justify="right")
    for contract in contracts:
        table.add_row(*describe_contract(contract))
    console.print(table)

    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml_text, encoding="utf-8")
        console.print(f"\n[bold]Output saved to:[/bold] {path}")
    else:
        console.print(yaml_text, markup=False, highlight=False)


if __name__ == "__main__":
    main()
