"""Configuration management for Espresso.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from espresso.core.model import FooterItem, NavItem

CONFIG_FILENAME = "site.toml"


@dataclass
class SiteConfig:
    """Site metadata."""

    title: str = ""
    base_url: str = ""
    description: str = ""
    author: str = ""
    subtitle: str = ""
    copyright: str = ""


@dataclass
class LinkConfig:
    """Labeled link used by navigation and footer."""

    label: str
    target: str


@dataclass
class NavConfig:
    """Navigation configuration."""

    override: bool = False
    items: list[LinkConfig] = field(default_factory=list)

    def nav_items(self) -> list[NavItem]:
        return [NavItem(label=item.label, target=item.target) for item in self.items]


@dataclass
class FooterConfig:
    """Footer configuration."""

    text: str = ""
    items: list[LinkConfig] = field(default_factory=list)

    def footer_items(self) -> list[FooterItem]:
        return [FooterItem(label=item.label, target=item.target) for item in self.items]


@dataclass
class BuildConfig:
    """Build configuration."""

    content_dir: Path = field(default_factory=lambda: Path("content"))
    output_dir: Path = field(default_factory=lambda: Path("target"))
    sort_pages: bool = True
    workers: int = 4
    strict_related: bool = False


@dataclass
class AtomConfig:
    """Atom feed plugin configuration."""

    enabled: bool = True


@dataclass
class ServerConfig:
    """Inspector server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    nav: NavConfig
    footer: FooterConfig
    build: BuildConfig
    atom: AtomConfig
    server: ServerConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for site.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls.default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            site=SiteConfig(),
            nav=NavConfig(),
            footer=FooterConfig(),
            build=BuildConfig(),
            atom=AtomConfig(),
            server=ServerConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            site=cls._parse_site(data.get("site")),
            nav=cls._parse_nav(data.get("nav")),
            footer=cls._parse_footer(data.get("footer")),
            build=cls._parse_build(data.get("build"), config_dir),
            atom=cls._parse_atom(data.get("atom")),
            server=cls._parse_server(data.get("server")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        values: dict[str, str] = {}
        for name in ("title", "base_url", "description", "author", "subtitle", "copyright"):
            value = data.get(name, "")
            if not isinstance(value, str):
                raise ValueError(f"site.{name} must be a string")
            values[name] = value

        return SiteConfig(**values)

    @classmethod
    def _parse_links(cls, data: object, section: str) -> list[LinkConfig]:
        """Parse a list of {label, target} tables.

        Args:
            data: Raw items list
            section: Section name used in error messages

        Returns:
            List of LinkConfig
        """
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError(f"{section}.items must be a list")

        links: list[LinkConfig] = []
        for item in data:
            if not isinstance(item, dict):
                raise ValueError(f"{section}.items entries must be tables")
            label = item.get("label")
            target = item.get("target")
            if not isinstance(label, str) or not isinstance(target, str):
                raise ValueError(f"{section}.items entries need string label and target")
            links.append(LinkConfig(label=label, target=target))
        return links

    @classmethod
    def _parse_nav(cls, data: object) -> NavConfig:
        if data is None:
            return NavConfig()

        if not isinstance(data, dict):
            raise ValueError("nav section must be a dictionary")

        override = data.get("override", False)
        if not isinstance(override, bool):
            raise ValueError("nav.override must be a boolean")

        return NavConfig(override=override, items=cls._parse_links(data.get("items"), "nav"))

    @classmethod
    def _parse_footer(cls, data: object) -> FooterConfig:
        if data is None:
            return FooterConfig()

        if not isinstance(data, dict):
            raise ValueError("footer section must be a dictionary")

        text = data.get("text", "")
        if not isinstance(text, str):
            raise ValueError("footer.text must be a string")

        return FooterConfig(text=text, items=cls._parse_links(data.get("items"), "footer"))

    @classmethod
    def _parse_build(cls, data: object, config_dir: Path) -> BuildConfig:
        """Parse build configuration section.

        Args:
            data: Raw build section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            BuildConfig instance
        """
        if data is None:
            return BuildConfig(
                content_dir=config_dir / "content",
                output_dir=config_dir / "target",
            )

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        content_dir = data.get("content_dir", "content")
        if not isinstance(content_dir, str):
            raise ValueError("build.content_dir must be a string")

        output_dir = data.get("output_dir", "target")
        if not isinstance(output_dir, str):
            raise ValueError("build.output_dir must be a string")

        sort_pages = data.get("sort_pages", True)
        if not isinstance(sort_pages, bool):
            raise ValueError("build.sort_pages must be a boolean")

        workers = data.get("workers", 4)
        if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
            raise ValueError("build.workers must be a positive integer")

        strict_related = data.get("strict_related", False)
        if not isinstance(strict_related, bool):
            raise ValueError("build.strict_related must be a boolean")

        return BuildConfig(
            content_dir=config_dir / content_dir,
            output_dir=config_dir / output_dir,
            sort_pages=sort_pages,
            workers=workers,
            strict_related=strict_related,
        )

    @classmethod
    def _parse_atom(cls, data: object) -> AtomConfig:
        if data is None:
            return AtomConfig()

        if not isinstance(data, dict):
            raise ValueError("atom section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("atom.enabled must be a boolean")

        return AtomConfig(enabled=enabled)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    def with_overrides(
        self,
        *,
        content_dir: Path | None = None,
        output_dir: Path | None = None,
        workers: int | None = None,
        sort_pages: bool | None = None,
        strict_related: bool | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            content_dir: Override build.content_dir
            output_dir: Override build.output_dir
            workers: Override build.workers
            sort_pages: Override build.sort_pages
            strict_related: Override build.strict_related
            host: Override server.host
            port: Override server.port

        Returns:
            New Config instance with overrides applied
        """
        build_overrides = {
            name: value
            for name, value in (
                ("content_dir", content_dir),
                ("output_dir", output_dir),
                ("workers", workers),
                ("sort_pages", sort_pages),
                ("strict_related", strict_related),
            )
            if value is not None
        }
        build = replace(self.build, **build_overrides) if build_overrides else self.build

        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        return replace(self, build=build, server=server)
