from authable.install.config import BuiltIn, Custom, InstallConfig, load_config
from authable.install.runner import run_install

__all__ = ["BuiltIn", "Custom", "InstallConfig", "load_config", "run_install"]
