"""
azadapter/models/k8s.py

Defines Pydantic models for the few node-level objects the control-plane
ensurer edits that are not plain Kubernetes manifests, such as systemd unit
options of the kubelet service.
"""

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel


class UnitOption(BaseModel):
    """A single `Name=Value` entry of a systemd unit file section."""

    section: str
    name: str
    value: str


def deserialize_command_line(value: str) -> List[str]:
    """
    Split a (possibly line-continued) command line into its arguments.

    Returns:
        A list of tokens, e.g. ["/opt/bin/kubelet", "--v=2"].
    """
    return value.replace("\\\n", " ").split()


def serialize_command_line(command: List[str], n: int, sep: str) -> str:
    """
    Join a command line, keeping the first `n` tokens on one line and the rest
    separated by `sep`.
    """
    if len(command) <= n:
        return " ".join(command)
    if n == 0:
        return sep.join(command)
    return " ".join(command[:n]) + sep + sep.join(command[n:])


def unit_option_with_section_and_name(
    options: List[UnitOption], section: str, name: str
) -> Optional[UnitOption]:
    """Return the first option in `section` called `name`, or None."""
    return next(
        (opt for opt in options if opt.section == section and opt.name == name), None
    )
