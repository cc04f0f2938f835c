#!/usr/bin/env python
"""Desktop app entrypoint for PocketLedger."""

import flet as ft

from pocketledger.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
