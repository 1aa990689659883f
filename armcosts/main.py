#!/usr/bin/env python3
"""
Main entry point for armcosts - estimate monthly costs of ARM what-if changes.

Pipeline:
- load what-if JSON (from a file, or by running `az deployment ... what-if`)
- estimate each change against the Azure Retail Prices API
- render the text report, a table, or JSON

Flags CLI:
  --whatif-json | --template + (--resource-group | --location) [--parameters]
  -o, --output         text|json|table (default: text)
  --currency           catalog currency code (default: USD)
  --disable-detailed-metrics
  --api-url            Retail Prices API base URL (fallback: ARMCOSTS_API_URL)
  --log-level          TRACE|DEBUG|INFO|WARN|ERROR (default: WARN)
  -v, --verbose        convenience alias for DEBUG (ignored if --log-level set)
  --no-color           disable colored output
"""
from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

import click
from rich.console import Console

from armcosts.config import Config, load_capacity_tiers, load_config
from armcosts.costs.estimate import Estimator
from armcosts.errors import ArmCostsError
from armcosts.output.json import to_json as output_to_json
from armcosts.output.report import Reporter
from armcosts.output.table_rich import render_table
from armcosts.prices.query import RetailPricesClient
from armcosts.whatif import WhatIfOptions, generate_whatif_json, load_whatif_json, parse_whatif_json
from armcosts.whatif.change import Change


# ---------------- CLI ----------------
def _fail(msg: str, ctx: click.Context | None = None) -> None:
    click.secho(msg, fg="bright_red", err=True)
    if ctx is not None:
        click.echo(ctx.get_help(), err=True)
    raise SystemExit(1)


def _set_log_level(log_level: str | None, verbose: bool) -> None:
    """
    levels:
      TRACE -> logging.DEBUG (Python has no TRACE)
      DEBUG -> logging.DEBUG
      INFO  -> logging.INFO
      WARN  -> logging.WARN
      ERROR -> logging.ERROR
    If --log-level not given, -v maps to DEBUG, else WARN by default.
    """
    mapping = {
        "TRACE": logging.DEBUG,
        "DEBUG": logging.DEBUG,
        "INFO":  logging.INFO,
        "WARN":  logging.WARN,
        "ERROR": logging.ERROR,
    }
    if log_level:
        level = mapping.get(log_level.upper(), logging.WARN)
    else:
        level = logging.DEBUG if verbose else logging.WARN

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    if log_level and log_level.upper() == "TRACE":
        logging.getLogger().debug("TRACE enabled (mapped to DEBUG)")


def _whatif_with_spinner(options: WhatIfOptions, config: Config) -> bytes:
    console = Console(no_color=config.no_color, stderr=True)
    with console.status("Running what-if…", spinner="dots"):
        return generate_whatif_json(options, binary=config.az_binary)


def _load_changes(
    whatif_json: str | None,
    options: Optional[WhatIfOptions],
    config: Config,
) -> List[Change]:
    if whatif_json:
        data = load_whatif_json(whatif_json)
    else:
        assert options is not None
        data = _whatif_with_spinner(options, config)
    return parse_whatif_json(data)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--whatif-json",
    type=click.Path(exists=False, dir_okay=False, readable=True),
    help="Path to what-if JSON (from `az deployment ... what-if --no-pretty-print`).",
)
@click.option(
    "--template",
    type=click.Path(exists=False, dir_okay=False, readable=True),
    help="ARM/Bicep template to run what-if against. Requires --resource-group or --location.",
)
@click.option("--resource-group", "-g", type=str, help="Resource group for a group-scoped what-if.")
@click.option("--location", "-l", type=str, help="Location for a subscription-scoped what-if.")
@click.option(
    "--parameters",
    type=click.Path(exists=False, dir_okay=False, readable=True),
    help="Parameters file passed to what-if.",
)
@click.option("--currency", type=str, help="Currency code for prices (default: USD). Overrides ARMCOSTS_CURRENCY.")
@click.option("--disable-detailed-metrics", is_flag=True, help="Do not list the catalog items behind each estimate.")
@click.option(
    "--api-url",
    type=str,
    help="Retail Prices API base URL. Overrides ARMCOSTS_API_URL.",
)
@click.option("--timeout", type=float, help="HTTP timeout in seconds for catalog requests (default: 30).")
@click.option(
    "--capacity-tiers",
    type=click.Path(exists=False, dir_okay=False, readable=True),
    help="JSON file with capacity-tier meter allowlists. Overrides the packaged data.",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json", "table"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--json-output",
    type=click.Path(dir_okay=False, writable=True),
    help="Also write the estimation as JSON to this file.",
)
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output.")
@click.option("--log-level", type=click.Choice(["TRACE", "DEBUG", "INFO", "WARN", "ERROR"], case_sensitive=True), help="Log level.")
@click.option("-v", "--verbose", is_flag=True, help="Enable DEBUG logs (ignored if --log-level is set).")
@click.option("--no-color", is_flag=True, help="Turn off colored output.")
def main(
    whatif_json: str | None,
    template: str | None,
    resource_group: str | None,
    location: str | None,
    parameters: str | None,
    currency: str | None,
    disable_detailed_metrics: bool,
    api_url: str | None,
    timeout: float | None,
    capacity_tiers: str | None,
    output: str,
    json_output: str | None,
    pretty: bool,
    log_level: str | None,
    verbose: bool,
    no_color: bool,
) -> None:
    """Estimate monthly costs of an ARM deployment from its what-if result."""
    _set_log_level(log_level, verbose)
    ctx = click.get_current_context()

    # Validate arg combos
    if whatif_json and template:
        _fail("Provide only one of --whatif-json or --template.", ctx)
    if not whatif_json and not template:
        _fail("Please provide either --whatif-json or --template.", ctx)
    if template and bool(resource_group) == bool(location):
        _fail("--template requires exactly one of --resource-group or --location.", ctx)

    # Existence checks
    if whatif_json and not os.path.isfile(whatif_json):
        _fail(f"File not found: --whatif-json '{whatif_json}'")
    if template and not os.path.isfile(template):
        _fail(f"File not found: --template '{template}'")
    if parameters and not os.path.isfile(parameters):
        _fail(f"File not found: --parameters '{parameters}'")

    config = load_config(
        api_url=api_url,
        currency=currency,
        disable_detailed_metrics=disable_detailed_metrics,
        no_color=no_color,
        http_timeout=timeout,
        capacity_tiers_path=capacity_tiers,
    )
    fmt = output.lower()

    options = None
    if template:
        options = WhatIfOptions(
            template_file=template,
            resource_group=resource_group,
            location=location,
            parameters_file=parameters,
        )

    try:
        changes = _load_changes(whatif_json, options, config)
        tiers = load_capacity_tiers(config.capacity_tiers_path)

        client = RetailPricesClient(config.retail_api_url, currency=config.currency, timeout=config.http_timeout)
        # The text report is the output for -o text; otherwise it goes to stderr.
        reporter = Reporter(
            config.currency,
            detailed=not config.disable_detailed_metrics,
            no_color=config.no_color,
            write=(lambda line: click.echo(line, err=fmt != "text")),
        )
        result = Estimator(client, capacity_tiers=tiers, reporter=reporter).run(changes)

        if json_output:
            with open(json_output, "wb") as f:
                f.write(output_to_json(result, pretty=pretty))

        if fmt == "table":
            click.echo(render_table(result, no_color=config.no_color), nl=False)
        elif fmt == "json":
            click.echo(output_to_json(result, pretty=pretty), nl=pretty)

    except FileNotFoundError as e:
        _fail(f"Error: File not found: {e}")
    except json.JSONDecodeError as e:
        _fail(f"Error: Invalid JSON: {e}")
    except ArmCostsError as e:
        _fail(f"Error: {e}")
    except ValueError as e:
        _fail(f"Error: {e}")
    except OSError as e:
        _fail(f"Error: {e}")


if __name__ == "__main__":
    main()
