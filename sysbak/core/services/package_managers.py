"""
Package manager definitions — one row per supported manager.

Every command sysbak ever runs against a package manager is declared
here, together with the rule that turns one line of the manager's
"list installed" output into a package name. Services look managers
up by ManagerId only; there is no string dispatch anywhere else.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sysbak.core.models.manager import ManagerId

# A line rule returns the package name on a line, or None to skip it.
LineRule = Callable[[str], "str | None"]


# ── Line rules ──────────────────────────────────────────────────


def _apt_line(line: str) -> str | None:
    # curl/jammy-updates,now 7.81.0-1ubuntu1.15 amd64 [installed]
    if "/" not in line:
        return None
    return line.split("/", 1)[0].strip() or None


def _dnf_line(line: str) -> str | None:
    # bash.x86_64    5.2.26-3.fc40    @anaconda
    # Long names push the version columns onto an indented next line
    if line[:1].isspace():
        return None
    parts = line.split()
    if not parts or "." not in parts[0]:
        return None
    return parts[0].rsplit(".", 1)[0] or None


def _portage_line(line: str) -> str | None:
    # app-editors/vim
    return line.strip() or None


def _first_token(line: str) -> str | None:
    parts = line.split()
    return parts[0] if parts else None


def _flatpak_line(line: str) -> str | None:
    # Firefox\torg.mozilla.firefox\t124.0.1\tstable\tsystem
    fields = [f.strip() for f in line.split("\t")]
    if len(fields) > 1 and fields[1]:
        return fields[1]
    return fields[0] or None


def _xbps_line(line: str) -> str | None:
    # ii bash-5.2.21_1   GNU Bourne Again Shell
    parts = line.split()
    if len(parts) < 2 or "-" not in parts[1]:
        return None
    return parts[1].rsplit("-", 1)[0] or None


# ── Registry ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ManagerSpec:
    """Everything sysbak needs to drive one package manager."""

    id: ManagerId
    label: str
    probe: str                      # binary answered with --version
    list_cmd: tuple[str, ...]
    check_cmd: tuple[str, ...]      # package name is appended
    install_cmd: tuple[str, ...]    # package name is appended
    elevate: bool
    parse_line: LineRule
    header_lines: int = 0           # leading lines of list output to drop

    def probe_argv(self) -> list[str]:
        return [self.probe, "--version"]

    def list_argv(self) -> list[str]:
        return list(self.list_cmd)

    def check_argv(self, package: str) -> list[str]:
        return [*self.check_cmd, package]

    def install_argv(self, package: str, elevation: list[str] | None = None) -> list[str]:
        """Install command, wrapped in the elevation prefix when required."""
        argv = [*self.install_cmd, package]
        if self.elevate and elevation:
            return [*elevation, *argv]
        return argv


PACKAGE_MANAGERS: dict[ManagerId, ManagerSpec] = {
    spec.id: spec
    for spec in (
        ManagerSpec(
            id=ManagerId.APT,
            label="APT",
            probe="apt",
            list_cmd=("apt", "list", "--installed"),
            check_cmd=("dpkg", "-s"),
            install_cmd=("apt", "install", "-y"),
            elevate=True,
            parse_line=_apt_line,
        ),
        ManagerSpec(
            id=ManagerId.YUM_DNF,
            label="YUM/DNF",
            probe="dnf",
            list_cmd=("dnf", "list", "installed"),
            check_cmd=("dnf", "list", "installed"),
            install_cmd=("dnf", "install", "-y"),
            elevate=True,
            parse_line=_dnf_line,
        ),
        ManagerSpec(
            id=ManagerId.PORTAGE,
            label="Portage",
            probe="emerge",
            list_cmd=("qlist", "-I"),
            check_cmd=("qlist", "-I"),
            install_cmd=("emerge",),
            elevate=True,
            parse_line=_portage_line,
        ),
        ManagerSpec(
            id=ManagerId.PACMAN,
            label="Pacman",
            probe="pacman",
            list_cmd=("pacman", "-Q"),
            check_cmd=("pacman", "-Q"),
            install_cmd=("pacman", "-S", "--noconfirm"),
            elevate=True,
            parse_line=_first_token,
        ),
        ManagerSpec(
            id=ManagerId.FLATPAK,
            label="Flatpak",
            probe="flatpak",
            list_cmd=("flatpak", "list", "--app"),
            check_cmd=("flatpak", "info"),
            install_cmd=("flatpak", "install", "-y"),
            elevate=False,
            parse_line=_flatpak_line,
        ),
        ManagerSpec(
            id=ManagerId.SNAP,
            label="Snap",
            probe="snap",
            list_cmd=("snap", "list"),
            check_cmd=("snap", "list"),
            install_cmd=("snap", "install"),
            elevate=True,
            parse_line=_first_token,
            header_lines=1,
        ),
        ManagerSpec(
            id=ManagerId.XBPS,
            label="XBPS",
            probe="xbps-query",
            list_cmd=("xbps-query", "-l"),
            check_cmd=("xbps-query", "-S"),
            install_cmd=("xbps-install", "-S", "-y"),
            elevate=True,
            parse_line=_xbps_line,
        ),
    )
}


def get_spec(manager: ManagerId) -> ManagerSpec:
    """Look up the spec for a manager. Total over ManagerId."""
    return PACKAGE_MANAGERS[manager]
