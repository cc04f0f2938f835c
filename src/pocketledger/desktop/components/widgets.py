"""Reusable widget components for the desktop app."""

from __future__ import annotations

from typing import Optional

import flet as ft


def build_stat_card(
    label: str,
    value: ft.Text,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Card:
    """Build a statistic card around a caller-owned value Text.

    The caller keeps ``value`` and rewrites its ``value`` attribute on refresh.
    """

    value.size = value.size or 24
    value.weight = ft.FontWeight.BOLD
    if color:
        value.color = color

    content_column = ft.Column(
        [
            value,
            ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT),
        ],
        spacing=4,
        horizontal_alignment=ft.CrossAxisAlignment.START,
    )

    if icon:
        card_content: ft.Control = ft.Row(
            [
                ft.Icon(icon, size=32, color=color or ft.Colors.PRIMARY),
                ft.Container(width=12),
                content_column,
            ],
            alignment=ft.MainAxisAlignment.START,
        )
    else:
        card_content = content_column

    return ft.Card(
        content=ft.Container(content=card_content, padding=20),
        elevation=2,
    )


def empty_state(message: str, icon: str = ft.Icons.RECEIPT_LONG) -> ft.Container:
    """Centered icon + message shown in place of an empty list."""

    muted = ft.Colors.ON_SURFACE_VARIANT
    body = ft.Column(
        [ft.Icon(icon, size=40, color=muted), ft.Text(message, color=muted, italic=True)],
        alignment=ft.MainAxisAlignment.CENTER,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=6,
    )
    return ft.Container(content=body, padding=24, alignment=ft.alignment.center, data="empty")
