from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError

DEFAULT_MANIFEST = Path(__file__).resolve().parent / "manifests" / "bootstrap.yaml"


@dataclass(frozen=True)
class ToolEntry:
    package: str
    probe: str


@dataclass(frozen=True)
class AppEntry:
    cask: str
    app: str


@dataclass(frozen=True)
class Asset:
    name: str
    url: str
    dest: str
    sha256: Optional[str] = None


@dataclass(frozen=True)
class RepoEntry:
    name: str
    url: str
    dest: str
    branch: Optional[str] = None


@dataclass(frozen=True)
class EditorConfig:
    name: str
    repo: str
    src_dir: str
    version: str
    version_env: str
    binary: str


@dataclass(frozen=True)
class BuildToolConfig:
    name: str
    url: str
    probe: str
    packages: List[str]
    sha256: Optional[str] = None


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _list(raw: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise ConfigError(f"{where}.{key} must be a list" if where else f"{key} must be a list")
    return value


def _required(entry: Dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not value:
        raise ConfigError(f"{where}: missing '{key}'")
    return str(value)


def _asset(entry: Any, where: str) -> Asset:
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} must be a mapping")
    return Asset(
        name=str(entry.get("name") or entry.get("url")),
        url=_required(entry, "url", where),
        dest=_required(entry, "dest", where),
        sha256=entry.get("sha256"),
    )


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any]

    @property
    def cache_dir(self) -> str:
        return str(self.raw.get("cache_dir") or "~/Library/Caches/macos-bootstrap")

    @property
    def require_checksums(self) -> bool:
        return bool(_section(self.raw, "integrity").get("require_checksums", False))

    @property
    def homebrew_prefix(self) -> str:
        return str(_section(self.raw, "homebrew").get("prefix") or "/opt/homebrew")

    @property
    def homebrew_install_script(self) -> str:
        return str(
            _section(self.raw, "homebrew").get("install_script")
            or "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
        )

    @property
    def shell_profile(self) -> str:
        return str(_section(self.raw, "homebrew").get("shell_profile") or "~/.zprofile")

    @property
    def shell_name(self) -> str:
        return str(_section(self.raw, "shell").get("name") or "zsh")

    @property
    def shell_path(self) -> str:
        return str(_section(self.raw, "shell").get("path") or "/bin/zsh")

    @property
    def framework_name(self) -> str:
        return str(_section(self.raw, "shell_framework").get("name") or "oh-my-zsh")

    @property
    def framework_dir(self) -> str:
        return str(_section(self.raw, "shell_framework").get("dir") or "~/.oh-my-zsh")

    @property
    def framework_install_script(self) -> str:
        return str(
            _section(self.raw, "shell_framework").get("install_script")
            or "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
        )

    @property
    def tools(self) -> List[ToolEntry]:
        """The bulk table, pairing packages with probes by position."""
        section = _section(self.raw, "tools")
        packages = _list(section, "packages", "tools")
        probes = _list(section, "probes", "tools")
        return pair_tools(packages, probes)

    @property
    def applications_dir(self) -> str:
        return str(self.raw.get("applications_dir") or "/Applications")

    @property
    def apps(self) -> List[AppEntry]:
        out: List[AppEntry] = []
        for i, entry in enumerate(_list(self.raw, "apps", "")):
            where = f"apps[{i}]"
            if not isinstance(entry, dict):
                raise ConfigError(f"{where} must be a mapping")
            out.append(AppEntry(cask=_required(entry, "cask", where), app=_required(entry, "app", where)))
        return out

    @property
    def plugin_dirs(self) -> List[str]:
        return [str(d) for d in _list(_section(self.raw, "plugins"), "dirs", "plugins")]

    @property
    def plugin_assets(self) -> List[Asset]:
        entries = _list(_section(self.raw, "plugins"), "assets", "plugins")
        return [_asset(e, f"plugins.assets[{i}]") for i, e in enumerate(entries)]

    @property
    def editor_plugin_loader(self) -> Optional[Asset]:
        entry = self.raw.get("editor_plugin_loader")
        if not entry:
            return None
        return _asset(entry, "editor_plugin_loader")

    @property
    def editor(self) -> EditorConfig:
        e = _section(self.raw, "editor")
        return EditorConfig(
            name=str(e.get("name") or "neovim"),
            repo=str(e.get("repo") or "https://github.com/neovim/neovim.git"),
            src_dir=str(e.get("src_dir") or "~/src/neovim"),
            version=_required(e, "version", "editor"),
            version_env=str(e.get("version_env") or "NVIM_VERSION"),
            binary=str(e.get("binary") or "nvim"),
        )

    @property
    def repos(self) -> List[RepoEntry]:
        out: List[RepoEntry] = []
        for i, entry in enumerate(_list(self.raw, "repos", "")):
            where = f"repos[{i}]"
            if not isinstance(entry, dict):
                raise ConfigError(f"{where} must be a mapping")
            branch = entry.get("branch")
            out.append(
                RepoEntry(
                    name=str(entry.get("name") or entry.get("url")),
                    url=_required(entry, "url", where),
                    dest=_required(entry, "dest", where),
                    branch=str(branch) if branch else None,
                )
            )
        return out

    @property
    def build_tool(self) -> Optional[BuildToolConfig]:
        b = self.raw.get("build_tool")
        if not b:
            return None
        if not isinstance(b, dict):
            raise ConfigError("build_tool must be a mapping")
        name = _required(b, "name", "build_tool")
        return BuildToolConfig(
            name=name,
            url=_required(b, "url", "build_tool"),
            probe=str(b.get("probe") or name),
            packages=[str(p) for p in _list(b, "packages", "build_tool")],
            sha256=b.get("sha256"),
        )

    @property
    def shell_config_source(self) -> str:
        return str(_section(self.raw, "shell_config").get("source") or ".zshrc")

    @property
    def shell_config_dest(self) -> str:
        return str(_section(self.raw, "shell_config").get("dest") or "~/.zshrc")

    def validate(self) -> None:
        """Touch every section so shape errors surface before any step runs."""
        _ = (
            self.tools,
            self.apps,
            self.plugin_dirs,
            self.plugin_assets,
            self.editor_plugin_loader,
            self.editor,
            self.repos,
            self.build_tool,
        )


def pair_tools(packages: List[Any], probes: List[Any]) -> List[ToolEntry]:
    if len(packages) != len(probes):
        raise ConfigError(
            f"tools.packages has {len(packages)} entries but tools.probes has {len(probes)}; "
            "they are paired by position and must have the same length"
        )
    return [ToolEntry(package=str(pkg), probe=str(probe)) for pkg, probe in zip(packages, probes)]


def load_config(path: str | Path | None = None) -> BootstrapConfig:
    p = Path(path) if path else DEFAULT_MANIFEST
    if not p.exists():
        raise ConfigError(f"bootstrap manifest not found: {p}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("bootstrap manifest must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the bootstrap manifest") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    cfg = BootstrapConfig(raw=raw)
    cfg.validate()
    return cfg
