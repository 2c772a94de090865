"""QSS stylesheets and the light/dark palettes for StudyFlow."""

from __future__ import annotations


# ── palettes ────────────────────────────────────────────────────────────

PALETTES: dict[str, dict[str, str]] = {
    "light": {
        "bg":           "#F7F7FB",
        "bg_secondary": "#FFFFFF",
        "surface":      "#EEEEF6",
        "accent":       "#6366F1",
        "accent2":      "#8B5CF6",
        "text":         "#1F2937",
        "text_muted":   "#6B7280",
        "danger":       "#DC2626",
        "border":       "#E5E7EB",
    },
    "dark": {
        "bg":           "#1A1A2E",
        "bg_secondary": "#232340",
        "surface":      "#2A2A4A",
        "accent":       "#CBA6F7",
        "accent2":      "#89B4FA",
        "text":         "#E2E2F0",
        "text_muted":   "#7A7A9A",
        "danger":       "#F38BA8",
        "border":       "#313154",
    },
}


def get_palette(theme: str) -> dict[str, str]:
    """Return the palette for *theme*, light for unknown names."""
    return dict(PALETTES.get(theme, PALETTES["light"]))


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 20px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg_secondary']};
        border: none;
        font-size: 16px;
        padding: 12px 36px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
    }}

    QPushButton#modeTab:checked {{
        background-color: {p['accent']};
        color: {p['bg_secondary']};
        border-color: {p['accent']};
    }}

    /* ── inputs ──────────────────────────────────── */
    QLineEdit, QSpinBox, QComboBox {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
    }}

    QLineEdit:focus {{
        border-color: {p['accent']};
    }}

    /* ── tab widget ──────────────────────────────── */
    QTabWidget::pane {{
        border: none;
    }}

    QTabBar::tab {{
        background-color: transparent;
        color: {p['text_muted']};
        padding: 10px 24px;
        border-bottom: 2px solid transparent;
        font-weight: 600;
    }}

    QTabBar::tab:selected {{
        color: {p['accent']};
        border-bottom: 2px solid {p['accent']};
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    /* ── progress bars ───────────────────────────── */
    QProgressBar {{
        background-color: {p['surface']};
        border: none;
        border-radius: 3px;
        max-height: 6px;
    }}

    QProgressBar::chunk {{
        background-color: {p['accent']};
        border-radius: 3px;
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#sectionHeader {{
        font-size: 13px;
        font-weight: 600;
        color: {p['text_muted']};
    }}

    QLabel#errorLabel {{
        color: {p['danger']};
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
