# armcosts/whatif/cmd.py
from __future__ import annotations

import logging
import os
import shlex
import subprocess
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from armcosts.errors import WhatIfCommandError


@dataclass
class WhatIfOptions:
    template_file: str
    resource_group: Optional[str] = None
    location: Optional[str] = None
    parameters_file: Optional[str] = None


def _format_cmd(binary: str, args: Sequence[str]) -> str:
    return " ".join([shlex.quote(binary), *(shlex.quote(a) for a in args)])


def _no_color_enabled() -> bool:
    return os.getenv("NO_COLOR") is not None


def _log_running_cmd(logger: logging.Logger, binary: str, args: Sequence[str]) -> None:
    msg = f"Running command: {_format_cmd(binary, args)}"
    if _no_color_enabled():
        logger.info(msg)
    else:
        # bright black (dim gray)
        logger.info("\x1b[90m%s\x1b[0m", msg)


def whatif_args(options: WhatIfOptions) -> List[str]:
    """
    Resource-group deployments need --resource-group, subscription
    deployments need --location.
    """
    if options.resource_group and options.location:
        raise ValueError("Provide either a resource group or a location, not both.")
    if options.resource_group:
        args = ["deployment", "group", "what-if", "--resource-group", options.resource_group]
    elif options.location:
        args = ["deployment", "sub", "what-if", "--location", options.location]
    else:
        raise ValueError("A resource group or a location is required to run what-if.")

    args += ["--template-file", options.template_file, "--no-pretty-print"]
    if options.parameters_file:
        args += ["--parameters", f"@{options.parameters_file}"]
    return args


def az_cmd(*args: str, binary: str | None = None) -> bytes:
    """
    Run an az subcommand, streaming stderr to the logger.
    Returns stdout; a non-zero exit raises WhatIfCommandError.
    """
    az_binary = binary or os.getenv("AZ_BINARY", "az")
    cmdline = [az_binary, *args]

    log = logging.getLogger(__name__)
    _log_running_cmd(log, az_binary, args)

    try:
        proc = subprocess.Popen(
            cmdline,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            bufsize=1,
            text=True,
        )
    except OSError as e:
        raise WhatIfCommandError(f"Could not start {az_binary}: {e}") from e

    def _pump_stderr(p: subprocess.Popen) -> None:
        assert p.stderr is not None
        for line in p.stderr:
            log.error(line.rstrip("\n"))

    t = threading.Thread(target=_pump_stderr, args=(proc,), daemon=True)
    t.start()

    stdout_str = ""
    if proc.stdout is not None:
        try:
            stdout_str = proc.stdout.read()
        finally:
            proc.stdout.close()

    proc.wait()
    t.join(timeout=0.1)

    if proc.returncode != 0:
        raise WhatIfCommandError(f"{_format_cmd(az_binary, args)} exited with status {proc.returncode}")
    return stdout_str.encode("utf-8", errors="replace")


# ---------------- what-if helpers ----------------

def load_whatif_json(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def generate_whatif_json(options: WhatIfOptions, binary: str | None = None) -> bytes:
    return az_cmd(*whatif_args(options), binary=binary)
