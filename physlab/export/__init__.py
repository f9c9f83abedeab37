"""Export manager and format-specific writers."""

from .csv_writer import save_comparison_csv, save_frames_csv, save_trajectory_csv
from .manager import VALID_FORMATS, export_comparison, export_heat, export_projectile
from .npy_writer import save_array_npy
from .png_writer import save_center_temp_png, save_temperature_map_png, save_trajectory_png
from .summary_writer import save_summary_csv, save_summary_json

__all__ = [
    "VALID_FORMATS",
    "export_comparison",
    "export_heat",
    "export_projectile",
    "save_array_npy",
    "save_center_temp_png",
    "save_comparison_csv",
    "save_frames_csv",
    "save_summary_csv",
    "save_summary_json",
    "save_temperature_map_png",
    "save_trajectory_csv",
    "save_trajectory_png",
]
