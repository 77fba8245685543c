"""
Configuration - Environment settings and physical model layout
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_HOST = "github.com"
DEFAULT_FONT = "DejaVuSans-Bold.ttf"


@dataclass
class Settings:
    """Runtime settings read from the environment (and an optional .env file)"""
    github_token: Optional[str] = None
    github_host: str = DEFAULT_HOST
    font_path: str = DEFAULT_FONT

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN"),
            github_host=os.getenv("GH_HOST", DEFAULT_HOST),
            font_path=os.getenv("SKYLINE_FONT_PATH", DEFAULT_FONT),
        )

    @property
    def graphql_url(self) -> str:
        if self.github_host == DEFAULT_HOST:
            return "https://api.github.com/graphql"
        # GitHub Enterprise Server
        return f"https://{self.github_host}/api/graphql"


@dataclass(frozen=True)
class ModelLayout:
    """
    Physical dimensions of the printed model, in millimetres.

    The base is a slab [0, base_width] x [0, base_depth] x [-base_height, 0];
    its front face (y = 0) carries the username, year and logo.
    """
    cell_size: float = 2.5
    grid_weeks: int = 54  # a leap year starting on Saturday spans 54 calendar columns
    grid_days: int = 7
    base_margin: float = 2.5
    base_height: float = 10.0
    max_tower_height: float = 25.0
    year_spacing: float = 2.0  # must exceed the label depth for ranges

    @property
    def base_width(self) -> float:
        return self.grid_weeks * self.cell_size + 2 * self.base_margin

    @property
    def base_depth(self) -> float:
        return self.grid_days * self.cell_size + 2 * self.base_margin

    @property
    def year_pitch(self) -> float:
        """Offset between consecutive years of a range along +y"""
        return self.base_depth + self.year_spacing


DEFAULT_LAYOUT = ModelLayout()
