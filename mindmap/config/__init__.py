"""Config: load .env, expose API keys, model names and tunable constants."""
from .config import (
    load_env,
    get_output_dir,
    get_api_key,
    get_base_url,
    get_model_name,
    get_generator_name,
)
from .settings import (
    PALETTE,
    LayoutConfig,
    SceneConfig,
    ViewConfig,
    ExportConfig,
    get_layout_config,
    get_view_config,
    get_export_config,
)

__all__ = [
    "load_env",
    "get_output_dir",
    "get_api_key",
    "get_base_url",
    "get_model_name",
    "get_generator_name",
    "PALETTE",
    "LayoutConfig",
    "SceneConfig",
    "ViewConfig",
    "ExportConfig",
    "get_layout_config",
    "get_view_config",
    "get_export_config",
]
