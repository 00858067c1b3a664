"""Application paths configuration."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    config_path: Path
    css_path: Path

    @classmethod
    def default(cls) -> "AppPaths":
        config_dir = Path.home() / ".config" / "scrollfeed"

        return cls(
            config_path=config_dir / "settings.yml",
            css_path=config_dir / "style.css",
        )
