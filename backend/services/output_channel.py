"""Output channel holding the formatter's last diagnostic output"""

from __future__ import annotations


class OutputChannel:
    """In-memory stand-in for the editor's output panel"""

    def __init__(self, name: str):
        self.name = name
        self._lines: list[str] = []
        self.visible = False

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def clear(self):
        self._lines.clear()

    def append_line(self, text: str):
        self._lines.append(text)
        print(f"[{self.name}] {text}")

    def show(self):
        self.visible = True
