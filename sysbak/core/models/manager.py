"""
Package manager identifiers.

The set is closed: a manager that is not listed here cannot be
detected, listed, checked, or installed through.
"""

from __future__ import annotations

from enum import StrEnum


class ManagerId(StrEnum):
    APT = "apt"
    YUM_DNF = "yum_dnf"
    PORTAGE = "portage"
    PACMAN = "pacman"
    FLATPAK = "flatpak"
    SNAP = "snap"
    XBPS = "xbps"
