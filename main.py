#!/usr/bin/env python3
"""StreameoIPTV - a cross-platform IPTV player built with Python Flet."""
import flet as ft
from streameo.app import main
from streameo.logging_config import configure_logging


if __name__ == "__main__":
    configure_logging()
    ft.app(target=main)
