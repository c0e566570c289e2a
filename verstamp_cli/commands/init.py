"""
Init command for the VerStamp CLI

Writes a starter configuration next to the project.
"""

from __future__ import annotations

from pathlib import Path

import typer

from verstamp_generator.exceptions import VerStampError
from verstamp_generator.template import write_artifact

from ..ui.messages import show_error_message, show_generation_error, show_success_message

STARTER_CONFIG = """\
# VerStamp configuration
# Environment overrides: VERSTAMP_VERSION__BUILD=7, VERSTAMP_VCS__HASH=<sha>, ...

prefix: ""

identity:
  project_name: "{project_name}"
  client_name: ""
  server_name: ""
  gui_name: ""
  url: ""
  copyright: ""
  description: ""
  license: ""

# Each component must be 0-255; suffix is appended to the dotted form
version:
  major: 0
  minor: 1
  patch: 0
  build: 0
  suffix: ""

vcs:
  enabled: true

template:
  builtin: c_header    # c_header | python | json, or set path: my_template.h.in

output: include/version.h
"""


def init_config(path: str = "verstamp.yaml", project_name: str = "MyProject", force: bool = False):
    """Create a starter verstamp.yaml."""
    target = Path(path)
    if target.exists() and not force:
        show_error_message(f"Configuration already exists: {target}", "use --force to overwrite")
        raise typer.Exit(1)

    try:
        write_artifact(target, STARTER_CONFIG.format(project_name=project_name), only_if_changed=False)
    except VerStampError as e:
        show_generation_error(e)
        raise typer.Exit(1)
    show_success_message(f"Created {target}", "edit identity and version, then run: verstamp generate")
