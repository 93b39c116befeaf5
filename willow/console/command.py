"""
Base Command Class
"""
import sys
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO


class Command(ABC):
    """
    A `willow` console command

    Subclasses set `name`, `description` and optionally `signature`, and
    implement the async handle(). Output goes to `self.out` (stdout by
    default).
    """

    name: str = ""
    description: str = ""
    signature: Optional[str] = None

    def __init__(self, out: Optional[TextIO] = None):
        if not self.signature:
            self.signature = self.name
        self.out = out

    @abstractmethod
    async def handle(self, *args, **kwargs) -> int:
        """Run the command and return its exit code"""

    def line(self, message: str = ""):
        print(message, file=self.out or sys.stdout)

    def success(self, message: str):
        self.line(f"✅ {message}")

    def error(self, message: str):
        self.line(f"❌ {message}")

    def table(self, headers: Sequence[str], rows: Sequence[Sequence], max_width: int = 50):
        """Print a boxed table; cells longer than max_width are cut with '...'"""
        cells = [[_truncate(str(cell), max_width) for cell in row] for row in rows]
        widths = [
            max([len(header)] + [len(row[i]) for row in cells])
            for i, header in enumerate(headers)
        ]

        def render(values):
            return '| ' + ' | '.join(value.ljust(widths[i]) for i, value in enumerate(values)) + ' |'

        border = '+-' + '-+-'.join('-' * width for width in widths) + '-+'
        self.line(border)
        self.line(render(headers))
        self.line(border)
        for row in cells:
            self.line(render(row))
        self.line(border)


def _truncate(text: str, max_len: int) -> str:
    return text if len(text) <= max_len else text[:max_len - 3] + '...'
