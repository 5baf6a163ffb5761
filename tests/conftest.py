"""Shared fixtures: a fake host driven through a recording command runner."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from macos_bootstrap.config import BootstrapConfig
from macos_bootstrap.errors import CommandError
from macos_bootstrap.lib import command as command_mod
from macos_bootstrap.lib.command import CmdResult
from macos_bootstrap.lib.env import Paths
from macos_bootstrap.pipeline import BootstrapCtx

READ_ONLY = {"dscl"}


class FakeRunner:
    """Stands in for run_cmd.

    Records every argv and applies the side effect the real tool would have
    on the host, so probes see the result on the next check.
    """

    def __init__(self, *, commands: Optional[set] = None, login_shell: str = "/bin/bash") -> None:
        self.calls: List[List[str]] = []
        self.commands: set = set(commands or ())
        self.login_shell = login_shell
        self.checked_out: Dict[str, str] = {}
        self.versions: Dict[str, str] = {}
        self.rocks: set = set()
        self.casks: Dict[str, Path] = {}
        self.provides: Dict[str, str] = {}
        self.missing_refs: set = set()
        self.fail_on: Optional[str] = None
        self.brew_prefix: Optional[Path] = None

    # --- recording -------------------------------------------------------

    def argvs(self, program: str) -> List[List[str]]:
        return [a for a in self.calls if self._program(a) == program]

    def mutations(self) -> List[List[str]]:
        out = []
        for argv in self.calls:
            prog = self._program(argv)
            if prog in READ_ONLY or "--version" in argv or (len(argv) > 1 and argv[1] == "show"):
                continue
            out.append(argv)
        return out

    @staticmethod
    def _strip_sudo(argv: Sequence[str]) -> List[str]:
        return list(argv[1:]) if argv and argv[0] == "sudo" else list(argv)

    def _program(self, argv: Sequence[str]) -> str:
        a = self._strip_sudo(argv)
        return Path(a[0]).name if a else ""

    # --- behaviour -------------------------------------------------------

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
        input_text: Optional[str] = None,
    ) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        a = self._strip_sudo(argv)

        rc, out = 0, ""
        if self.fail_on and self.fail_on in " ".join(argv):
            rc = 1
        elif a[0] == "curl":
            dest = Path(a[a.index("-o") + 1])
            dest.write_text(f"downloaded from {a[-1]}\n", encoding="utf-8")
        elif a[0] == "/bin/bash":
            # Like the real installer: brew lands under the prefix, not on PATH.
            brew = self.brew_prefix / "bin" / "brew"
            brew.parent.mkdir(parents=True, exist_ok=True)
            brew.write_text("#!/bin/sh\n", encoding="utf-8")
            brew.chmod(0o755)
        elif a[0] == "sh":
            Path((env or {})["ZSH"]).mkdir(parents=True, exist_ok=True)
        elif a[0] == "tee":
            with open(a[-1], "a", encoding="utf-8") as f:
                f.write(input_text or "")
        elif a[0] == "dscl":
            out = f"UserShell: {self.login_shell}\n"
        elif a[0] == "chsh":
            self.login_shell = a[-1]
        elif a[0] == "mkdir":
            Path(a[-1]).mkdir(parents=True, exist_ok=True)
        elif a[0] == "chown":
            os.chmod(a[-1], 0o755)
        elif Path(a[0]).name == "brew" and "--cask" in a:
            app = self.casks[a[-1]]
            app.mkdir(parents=True, exist_ok=True)
        elif Path(a[0]).name == "brew":
            self.commands.add(self.provides.get(a[-1], a[-1]))
        elif a[0] == "git":
            rc = self._git(a)
        elif a[0] == "nvim":
            version = self.versions.get("nvim")
            out = f"NVIM {version}\nBuild type: Release\n" if version else ""
        elif a[0] == "make" and a[1:] == ["install"]:
            if cwd and Path(cwd).name.startswith("luarocks"):
                self.commands.add("luarocks")
            else:
                self.commands.add("nvim")
                self.versions["nvim"] = self.checked_out.get(str(cwd), "unknown")
        elif a[0] == "luarocks" and a[1] == "show":
            rc = 0 if a[2] in self.rocks else 1
        elif a[0] == "luarocks" and a[1] == "install":
            self.rocks.add(a[2])

        if check and rc != 0:
            raise CommandError(argv, rc, "simulated failure")
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def _git(self, a: List[str]) -> int:
        if a[1] == "clone":
            Path(a[3]).mkdir(parents=True, exist_ok=True)
            return 0
        repo = a[2]
        if a[3] == "checkout":
            ref = a[4]
            if ref in self.missing_refs:
                return 1
            self.checked_out[repo] = ref
        return 0


@pytest.fixture(autouse=True)
def _not_root(monkeypatch):
    monkeypatch.setattr(command_mod.os, "geteuid", lambda: 501)


@pytest.fixture(autouse=True)
def _restore_path(monkeypatch):
    # Steps may prepend the Homebrew prefix to PATH for the rest of the run.
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    r = FakeRunner()
    monkeypatch.setattr(
        shutil,
        "which",
        lambda name, mode=None, path=None: f"/usr/local/bin/{name}" if name in r.commands else None,
    )
    return r


@pytest.fixture
def paths(tmp_path: Path) -> Paths:
    home = tmp_path / "home"
    cwd = tmp_path / "cwd"
    home.mkdir()
    cwd.mkdir()
    return Paths(home=home, cwd=cwd, user="tester")


@pytest.fixture
def raw_config(tmp_path: Path) -> Dict[str, Any]:
    return {
        "cache_dir": "~/.cache/bootstrap",
        "integrity": {"require_checksums": False},
        "homebrew": {
            "prefix": str(tmp_path / "homebrew"),
            "install_script": "https://example.test/brew/install.sh",
            "shell_profile": "~/.zprofile",
        },
        "shell": {"name": "zsh", "path": "/bin/zsh"},
        "shell_framework": {
            "name": "oh-my-zsh",
            "dir": "~/.oh-my-zsh",
            "install_script": "https://example.test/omz/install.sh",
        },
        "tools": {
            "packages": ["git", "make", "ripgrep", "go", "jq"],
            "probes": ["git", "make", "rg", "go", "jq"],
        },
        "applications_dir": str(tmp_path / "Applications"),
        "apps": [
            {"cask": "iterm2", "app": "iTerm.app"},
            {"cask": "firefox", "app": "Firefox.app"},
        ],
        "plugins": {
            "dirs": [str(tmp_path / "share" / "zsh" / "plugins")],
            "assets": [
                {
                    "name": "zsh-autosuggestions",
                    "url": "https://example.test/zsh-autosuggestions.zsh",
                    "dest": str(tmp_path / "share" / "zsh" / "plugins" / "zsh-autosuggestions.zsh"),
                },
                {
                    "name": "theme",
                    "url": "https://example.test/dracula.zsh-theme",
                    "dest": "~/.oh-my-zsh/custom/themes/dracula.zsh-theme",
                },
            ],
        },
        "editor_plugin_loader": {
            "name": "vim-plug",
            "url": "https://example.test/plug.vim",
            "dest": "~/.local/share/nvim/site/autoload/plug.vim",
        },
        "editor": {
            "name": "neovim",
            "repo": "https://example.test/neovim.git",
            "src_dir": "~/src/neovim",
            "version": "v0.10.2",
            "version_env": "NVIM_VERSION",
            "binary": "nvim",
        },
        "repos": [
            {"name": "dotfiles", "url": "https://example.test/dotfiles.git", "dest": "~/dotfiles"},
            {
                "name": "nvim-config",
                "url": "https://example.test/nvim-config.git",
                "dest": "~/.config/nvim",
                "branch": "lua",
            },
        ],
        "build_tool": {
            "name": "luarocks",
            "url": "https://example.test/releases/luarocks-3.11.1.tar.gz",
            "probe": "luarocks",
            "packages": ["luacheck", "busted"],
        },
        "shell_config": {"source": ".zshrc", "dest": "~/.zshrc"},
    }


@pytest.fixture
def cfg(raw_config) -> BootstrapConfig:
    c = BootstrapConfig(raw=raw_config)
    c.validate()
    return c


@pytest.fixture
def ctx(cfg, paths, runner) -> BootstrapCtx:
    runner.provides = {"ripgrep": "rg"}
    apps_dir = Path(cfg.applications_dir)
    runner.casks = {a.cask: apps_dir / a.app for a in cfg.apps}
    runner.brew_prefix = Path(cfg.homebrew_prefix)
    return BootstrapCtx(cfg=cfg, paths=paths, run=runner, environ={})
