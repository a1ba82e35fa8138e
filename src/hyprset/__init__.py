"""hyprset: Hyprland display and input settings."""

__version__ = "0.1.0"
