from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

Color = Tuple[int, int, int]


@dataclass
class MapConfig:
    """
    Static configuration of the life expectancy map.
    Defaults reproduce the bundled demo.
    """
    # Assets
    values_path: Path = DATA_DIR / "LifeExpectancyWorldBank.csv"
    regions_path: Path = DATA_DIR / "countries.geo.json"
    code_column: Union[str, int] = "Country Code"
    value_column: Union[str, int] = -1  # last column

    # Window / viewport (logical pixels)
    window_size: Tuple[int, int] = (800, 600)
    viewport: Tuple[int, int, int, int] = (50, 50, 700, 500)  # x, y, w, h

    # Ramp
    value_domain: Tuple[float, float] = (40.0, 90.0)
    level_range: Tuple[float, float] = (10.0, 255.0)
    clamp_ramp: bool = True
    strict_join: bool = False

    # Colors
    fallback_color: Color = (150, 150, 150)
    highlight_color: Color = (255, 105, 180)
    label_background: Color = (255, 250, 240)
    ocean_color: Color = (170, 200, 225)
    background_color: Color = (40, 40, 40)

    # Label box
    label_origin: Tuple[int, int] = (25, 50)
    label_font_px: int = 11

    # Render loop
    frame_interval_ms: int = 16  # ~60 FPS


DEFAULT_CONFIG = MapConfig()
