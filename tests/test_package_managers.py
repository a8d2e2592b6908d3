"""
Tests for the package manager table and per-manager line rules.
"""

import textwrap

from sysbak.core.models.manager import ManagerId
from sysbak.core.services.listing import parse_listing
from sysbak.core.services.package_managers import PACKAGE_MANAGERS, get_spec


class TestRegistry:
    def test_every_manager_registered_in_order(self):
        assert list(PACKAGE_MANAGERS) == list(ManagerId)

    def test_probe_commands(self):
        probes = {m.value: get_spec(m).probe_argv() for m in ManagerId}
        assert probes == {
            "apt": ["apt", "--version"],
            "yum_dnf": ["dnf", "--version"],
            "portage": ["emerge", "--version"],
            "pacman": ["pacman", "--version"],
            "flatpak": ["flatpak", "--version"],
            "snap": ["snap", "--version"],
            "xbps": ["xbps-query", "--version"],
        }

    def test_check_commands(self):
        assert get_spec(ManagerId.APT).check_argv("vim") == ["dpkg", "-s", "vim"]
        assert get_spec(ManagerId.YUM_DNF).check_argv("vim") == ["dnf", "list", "installed", "vim"]
        assert get_spec(ManagerId.FLATPAK).check_argv("org.x.App") == ["flatpak", "info", "org.x.App"]
        assert get_spec(ManagerId.XBPS).check_argv("vim") == ["xbps-query", "-S", "vim"]

    def test_install_elevated(self):
        spec = get_spec(ManagerId.PACMAN)
        assert spec.install_argv("vim", ["sudo"]) == [
            "sudo", "pacman", "-S", "--noconfirm", "vim",
        ]

    def test_install_custom_elevation(self):
        spec = get_spec(ManagerId.XBPS)
        assert spec.install_argv("vim", ["doas"]) == ["doas", "xbps-install", "-S", "-y", "vim"]

    def test_install_without_elevation_wrapper(self):
        assert get_spec(ManagerId.APT).install_argv("vim", []) == ["apt", "install", "-y", "vim"]

    def test_flatpak_never_elevated(self):
        spec = get_spec(ManagerId.FLATPAK)
        assert not spec.elevate
        assert spec.install_argv("org.x.App", ["sudo"]) == ["flatpak", "install", "-y", "org.x.App"]

    def test_portage_install(self):
        assert get_spec(ManagerId.PORTAGE).install_argv("app-editors/vim", ["sudo"]) == [
            "sudo", "emerge", "app-editors/vim",
        ]


class TestLineRules:
    def test_apt(self):
        output = textwrap.dedent("""\
            Listing... Done
            curl/jammy-updates,now 7.81.0-1ubuntu1.15 amd64 [installed]
            vim/jammy,now 2:8.2.3995-1ubuntu2 amd64 [installed]

        """)
        assert parse_listing(get_spec(ManagerId.APT), output) == ["curl", "vim"]

    def test_dnf_strips_arch(self):
        output = textwrap.dedent("""\
            Installed Packages
            bash.x86_64                 5.2.26-3.fc40          @anaconda
            python3.11.x86_64           3.11.9-1.fc40          @updates
            garbage
        """)
        assert parse_listing(get_spec(ManagerId.YUM_DNF), output) == ["bash", "python3.11"]

    def test_dnf_skips_wrapped_columns(self):
        output = (
            "Installed Packages\n"
            "NetworkManager-libnm.x86_64\n"
            "                            1:1.40.16-1.fc37       @updates\n"
            "bash.x86_64                 5.2.26-3.fc40          @anaconda\n"
        )
        assert parse_listing(get_spec(ManagerId.YUM_DNF), output) == [
            "NetworkManager-libnm", "bash",
        ]

    def test_portage(self):
        output = "app-editors/vim\nsys-apps/portage\n\n"
        assert parse_listing(get_spec(ManagerId.PORTAGE), output) == [
            "app-editors/vim", "sys-apps/portage",
        ]

    def test_pacman(self):
        output = "bash 5.2.026-2\nlinux 6.9.7.arch1-1\n"
        assert parse_listing(get_spec(ManagerId.PACMAN), output) == ["bash", "linux"]

    def test_flatpak_uses_application_id(self):
        output = (
            "Firefox\torg.mozilla.firefox\t124.0.1\tstable\tsystem\n"
            "GIMP\torg.gimp.GIMP\t2.10.38\tstable\tsystem\n"
        )
        assert parse_listing(get_spec(ManagerId.FLATPAK), output) == [
            "org.mozilla.firefox", "org.gimp.GIMP",
        ]

    def test_flatpak_single_column(self):
        output = "org.mozilla.firefox\n"
        assert parse_listing(get_spec(ManagerId.FLATPAK), output) == ["org.mozilla.firefox"]

    def test_snap_skips_header(self):
        output = textwrap.dedent("""\
            Name    Version   Rev    Tracking       Publisher   Notes
            core22  20240408  1380   latest/stable  canonical✓  base
            hello   2.10      38     latest/stable  canonical✓  -
        """)
        assert parse_listing(get_spec(ManagerId.SNAP), output) == ["core22", "hello"]

    def test_xbps_rightmost_hyphen(self):
        output = textwrap.dedent("""\
            ii bash-5.2.21_1                  GNU Bourne Again Shell
            ii xbps-triggers-0.127_1          XBPS triggers for Void Linux
            ii broken
            ii nohyphen_1
        """)
        assert parse_listing(get_spec(ManagerId.XBPS), output) == ["bash", "xbps-triggers"]

    def test_empty_output(self):
        for manager in ManagerId:
            assert parse_listing(get_spec(manager), "") == []
