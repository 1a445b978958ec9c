import os
import math
import json
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple, List, Type, Optional


@dataclass
class AppConfig:
    config_default_path: str = "config.json"
    screen_width: int = 800
    screen_height: int = 800
    version: str = "Function Plot Toolkit"
    clock_tickrate: int = 60
    background_color: Tuple[int, int, int] = (255, 255, 255)
    button_width: int = 170
    button_height: int = 30
    button_margin: int = 8
    demo_curve: Tuple[float, float] = (0.75, 0.25)


@dataclass
class ViewConfig:
    default_unit: float = 50.0
    zoom_factor: float = math.sqrt(2)
    min_unit: float = 1e-9
    max_unit: float = 1e9


@dataclass
class RenderConfig:
    antialias: bool = True
    font_name: str = "Consolas"
    font_size: int = 12
    text_color: Tuple[int, int, int] = (0, 0, 0)
    axis_color: Tuple[int, int, int] = (0, 0, 0)
    text_x: int = 12
    line_spacing: int = 16
    tick_half_length: int = 4
    min_tick_spacing: float = 2.0
    marker_radius: int = 3
    sample_stride: int = 1
    palette: List[Tuple[int, int, int]] = field(default_factory=lambda: [
        (0, 0, 255), (206, 140, 101), (255, 0, 0), (64, 128, 64),
    ])


@dataclass
class NoiseConfig:
    value_range: Tuple[float, float] = (-1.0, 1.0)
    scaled_value_range: Tuple[float, float] = (0.0, 1.0)
    scale_var: float = 2.0
    scale_off: float = -1.0


@dataclass
class InputConfig:
    double_click_ms: int = 400
    readout_precision: int = 2


@dataclass
class DebugConfig:
    enabled: bool = True
    log_file: str = "debug_log.txt"
    auto_save_logs: bool = True
    max_log_entries: int = 1000
    show_diagnostics: bool = True


class Config:
    _subconfigs: Dict[str, Type] = {}

    app: "AppConfig"
    view: "ViewConfig"
    render: "RenderConfig"
    noise: "NoiseConfig"
    input: "InputConfig"
    debug: "DebugConfig"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._subconfigs = {}

    @classmethod
    def register(cls, name: str, config_type: Type):
        cls._subconfigs[name] = config_type

    def __init__(self, **kwargs):
        for name, config_type in self._subconfigs.items():
            instance = kwargs.get(name) or config_type()
            setattr(self, name, instance)

    @property
    def _default_path(self) -> str:
        return self.app.config_default_path if hasattr(self, 'app') else "config.json"

    @classmethod
    def load_from_file(cls, path: Optional[str] = None, create: bool = True) -> "Config":
        effective_path = path or "config.json"
        data = {}
        if os.path.exists(effective_path):
            try:
                with open(effective_path, "r", encoding="utf-8") as f:
                    content = f.read().strip()
                    if content:
                        data = json.loads(content)
                    else:
                        _warn(f"{effective_path} is empty. Using default config.")
            except (json.JSONDecodeError, OSError) as e:
                _warn(f"Failed to read {effective_path} ({e}). Using default config.")
        else:
            _info(f"{effective_path} not found. Creating default config.")
        try:
            instance = cls.from_dict(data)
        except TypeError as e:
            _warn(f"Unexpected keys in {effective_path} ({e}). Using default config.")
            instance = cls()
        if create:
            instance.save_to_file(effective_path)
        return instance

    def reload(self, path: Optional[str] = None, create: bool = True) -> "Config":
        fresh = self.load_from_file(path, create=create)
        for name in self._subconfigs:
            setattr(self, name, getattr(fresh, name))
        return self

    def save_to_file(self, path: Optional[str] = None) -> None:
        effective_path = path or self._default_path
        dir_path = os.path.dirname(effective_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        with open(effective_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=4, ensure_ascii=False)

    def save(self) -> None:
        self.save_to_file()

    def to_dict(self) -> Dict[str, Any]:
        return {name: asdict(getattr(self, name)) for name in self._subconfigs}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        kwargs = {}
        for name, config_type in cls._subconfigs.items():
            subdata = dict(data.get(name, {}))
            if hasattr(config_type, '_from_dict_custom'):
                kwargs[name] = config_type._from_dict_custom(subdata)
            else:
                kwargs[name] = config_type(**subdata)
        return cls(**kwargs)


Config.register("app", AppConfig)
Config.register("view", ViewConfig)
Config.register("render", RenderConfig)
Config.register("noise", NoiseConfig)
Config.register("input", InputConfig)
Config.register("debug", DebugConfig)


# json has no tuples; colors and ranges come back as lists
def _tuples(d: Dict, keys) -> Dict:
    for key in keys:
        if key in d and isinstance(d[key], list):
            d[key] = tuple(d[key])
    return d


def app_from_dict_custom(cls, d: Dict) -> "AppConfig":
    return cls(**_tuples(d, ("background_color", "demo_curve")))


def render_from_dict_custom(cls, d: Dict) -> "RenderConfig":
    _tuples(d, ("text_color", "axis_color"))
    if "palette" in d:
        d["palette"] = [tuple(c) for c in d["palette"]]
    return cls(**d)


def noise_from_dict_custom(cls, d: Dict) -> "NoiseConfig":
    return cls(**_tuples(d, ("value_range", "scaled_value_range")))


AppConfig._from_dict_custom = classmethod(app_from_dict_custom)
RenderConfig._from_dict_custom = classmethod(render_from_dict_custom)
NoiseConfig._from_dict_custom = classmethod(noise_from_dict_custom)


def _warn(message: str):
    from FPT.debug.debug_manager import Debug
    Debug.log_warning(message, "Config")


def _info(message: str):
    from FPT.debug.debug_manager import Debug
    Debug.log_info(message, "Config")


config = Config()
