"""
Theme handling for SQLScratch.

Fusion style with either a dark palette or Fusion's own light palette,
plus the syntax colors that go with each.
"""

from PyQt6.QtGui import QPalette, QColor
from PyQt6.QtWidgets import QApplication, QStyleFactory

_DARK_PALETTE = {
    QPalette.ColorRole.Window: (53, 53, 53),
    QPalette.ColorRole.WindowText: (255, 255, 255),
    QPalette.ColorRole.Base: (35, 35, 35),
    QPalette.ColorRole.AlternateBase: (53, 53, 53),
    QPalette.ColorRole.Text: (255, 255, 255),
    QPalette.ColorRole.Button: (53, 53, 53),
    QPalette.ColorRole.ButtonText: (255, 255, 255),
    QPalette.ColorRole.Highlight: (42, 130, 218),
    QPalette.ColorRole.HighlightedText: (0, 0, 0),
}


class SyntaxColors:
    def __init__(self, keyword, function, string, comment, number, bind, directive):
        self.keyword = keyword
        self.function = function
        self.string = string
        self.comment = comment
        self.number = number
        self.bind = bind
        self.directive = directive


DARK_SYNTAX = SyntaxColors(
    keyword="#569cd6", function="#dcdcaa", string="#ce9178", comment="#6a9955",
    number="#b5cea8", bind="#9cdcfe", directive="#c586c0",
)
LIGHT_SYNTAX = SyntaxColors(
    keyword="#0000ff", function="#795e26", string="#a31515", comment="#008000",
    number="#098658", bind="#001080", directive="#af00db",
)


class Theme:
    """Process-wide dark/light switch."""

    _is_dark: bool = True

    @classmethod
    def is_dark(cls) -> bool:
        return cls._is_dark

    @classmethod
    def set_dark(cls, dark: bool) -> None:
        cls._is_dark = dark

    @classmethod
    def apply(cls, app: QApplication) -> None:
        app.setStyle(QStyleFactory.create("Fusion"))
        if not cls._is_dark:
            app.setPalette(app.style().standardPalette())
            return
        palette = QPalette()
        for role, rgb in _DARK_PALETTE.items():
            palette.setColor(role, QColor(*rgb))
        app.setPalette(palette)

    @classmethod
    def toggle(cls, app: QApplication) -> None:
        cls._is_dark = not cls._is_dark
        cls.apply(app)

    @classmethod
    def current(cls) -> SyntaxColors:
        return DARK_SYNTAX if cls._is_dark else LIGHT_SYNTAX
